class RelayPaginationException(Exception):
    """Base exception for relay_pagination package"""


class PaginationArgumentError(RelayPaginationException, ValueError):
    """Pagination arguments or options were invalid"""


class InvalidCursorError(PaginationArgumentError):
    """A cursor could not be decoded for the current ordering"""


class OperatorContractError(RelayPaginationException, TypeError):
    """An operator set does not implement the capability set"""
