import typing

from typing_extensions import TypedDict

__all__ = ["Edge", "PageInfo", "Connection", "to_page_info"]


class Edge(TypedDict):
    cursor: str
    node: typing.Any


class PageInfo(TypedDict):
    hasPreviousPage: bool
    hasNextPage: bool
    startCursor: typing.Optional[str]
    endCursor: typing.Optional[str]


class Connection(TypedDict):
    edges: typing.List[Edge]
    pageInfo: PageInfo
    totalCount: typing.Optional[int]


def to_page_info(edges: typing.Sequence[Edge], has_previous_page: bool, has_next_page: bool) -> PageInfo:
    """Start and end cursors are None when there are no edges"""
    return {
        "hasPreviousPage": has_previous_page,
        "hasNextPage": has_next_page,
        "startCursor": edges[0]["cursor"] if edges else None,
        "endCursor": edges[-1]["cursor"] if edges else None,
    }
