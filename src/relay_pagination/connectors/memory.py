"""
Paginate an in-memory sequence of mappings or objects
"""
from __future__ import annotations

import functools
import typing

from flupy import flu
from relay_pagination.args import PaginationOptions
from relay_pagination.builder import connection_builder
from relay_pagination.config import Config
from relay_pagination.cursor import from_cursor
from relay_pagination.exceptions import InvalidCursorError
from relay_pagination.operators import NodesOperators, read_node_value

__all__ = ["SequenceOperators", "list_paginator"]

Nodes = typing.Sequence[typing.Any]


def compare_values(left: typing.Any, right: typing.Any) -> int:
    """Three way comparison with None sorting last"""
    if left == right:
        return 0
    if left is None:
        return 1
    if right is None:
        return -1
    return (left > right) - (left < right)


class SequenceOperators(NodesOperators[Nodes]):
    """Operators over a python sequence

    Nodes are sorted by the ordering columns on every call unless
    ``sort=False``, in which case the sequence must already be in order.
    """

    has_cheap_length_check = True

    def __init__(self, primary_key: typing.Optional[str] = Config.PRIMARY_KEY, sort: bool = True):
        self.primary_key = primary_key
        self.orders_nodes = sort

    def _node_values(self, node: typing.Any, opts: PaginationOptions) -> typing.List[typing.Any]:
        return [read_node_value(node, opts.formatted_column(column)) for column, _ in self.cursor_columns(opts)]

    def _compare(self, left: typing.List[typing.Any], right: typing.List[typing.Any], opts: PaginationOptions) -> int:
        for left_value, right_value, (_, direction) in zip(left, right, self.cursor_columns(opts)):
            res = compare_values(left_value, right_value)
            if res != 0:
                return res if direction == "asc" else -res
        return 0

    def _cursor_values(self, cursor: str, opts: PaginationOptions) -> typing.List[typing.Any]:
        cursor_struct = from_cursor(cursor)
        return [cursor_struct.value_for(column) for column, _ in self.cursor_columns(opts)]

    def order_nodes_by(self, nodes: Nodes, opts: PaginationOptions) -> Nodes:
        def compare_nodes(left, right) -> int:
            return self._compare(self._node_values(left, opts), self._node_values(right, opts), opts)

        return tuple(sorted(nodes, key=functools.cmp_to_key(compare_nodes)))

    def _filter_by_cursor(self, nodes: Nodes, cursor: str, opts: PaginationOptions, keep_after: bool) -> Nodes:
        cursor_values = self._cursor_values(cursor, opts)

        def keep(node) -> bool:
            res = self._compare(self._node_values(node, opts), cursor_values, opts)
            return res > 0 if keep_after else res < 0

        try:
            return flu(nodes).filter(keep).collect(container_type=tuple)
        except TypeError as exc:
            raise InvalidCursorError(f"Cursor values can not be compared with nodes: {exc}") from exc

    def remove_nodes_before_and_including(self, nodes: Nodes, cursor: str, opts: PaginationOptions) -> Nodes:
        return self._filter_by_cursor(nodes, cursor, opts, keep_after=True)

    def remove_nodes_after_and_including(self, nodes: Nodes, cursor: str, opts: PaginationOptions) -> Nodes:
        return self._filter_by_cursor(nodes, cursor, opts, keep_after=False)

    async def get_nodes_length(self, nodes: Nodes, opts: PaginationOptions) -> int:
        return len(nodes)

    async def has_length_greater_than(self, nodes: Nodes, amount: int, opts: PaginationOptions) -> bool:
        return len(nodes) > amount

    async def remove_nodes_from_end(self, nodes: Nodes, amount: int, opts: PaginationOptions) -> Nodes:
        return tuple(nodes[: max(len(nodes) - amount, 0)])

    async def remove_nodes_from_beginning(self, nodes: Nodes, amount: int, opts: PaginationOptions) -> Nodes:
        return tuple(nodes[amount:])


list_paginator = connection_builder(SequenceOperators())
