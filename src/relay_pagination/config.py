import os
from typing import Optional

ENV = os.environ


class Config:

    DEFAULT_ORDER_BY = ENV.get("RELAY_PAGINATION_DEFAULT_ORDER_BY", "id")
    DEFAULT_ORDER_DIRECTION = ENV.get("RELAY_PAGINATION_DEFAULT_ORDER_DIRECTION", "asc")
    PRIMARY_KEY: Optional[str] = ENV.get("RELAY_PAGINATION_PRIMARY_KEY", "id") or None

    @staticmethod
    def column_name_mapper(column_name: str) -> str:
        """Logical column name -> physical column name

        Used when no format_column_fn is passed to paginate
        """
        return column_name

    @staticmethod
    def is_aggregate(column_name: str) -> bool:  # pylint: disable=unused-argument
        """Should comparisons against the column be applied after grouping?"""
        return False
