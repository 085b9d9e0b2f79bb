"""
The operations the connection builder needs on an ordered collection of nodes

Subclass NodesOperators once per storage backend. The builder only threads
the nodes accessor through these methods and never inspects it.
"""
from __future__ import annotations

import abc
import inspect
import typing

from relay_pagination.args import PaginationArgs, PaginationOptions
from relay_pagination.connection import Edge
from relay_pagination.cursor import to_cursor
from relay_pagination.exceptions import PaginationArgumentError

__all__ = ["NodesOperators", "read_node_value"]

NodesT = typing.TypeVar("NodesT")


def read_node_value(node: typing.Any, key: str) -> typing.Any:
    """Read a column value from a mapping or an object"""
    try:
        if isinstance(node, typing.Mapping):
            return node[key]
        return getattr(node, key)
    except (KeyError, AttributeError):
        raise PaginationArgumentError(f"Node has no column named {key}") from None


class NodesOperators(abc.ABC, typing.Generic[NodesT]):
    """Capability set over a nodes accessor of type NodesT

    Optional capabilities are advertised with class tags:

    * **has_cheap_length_check**: has_length_greater_than is cheaper than get_nodes_length
    * **orders_nodes**: order_nodes_by applies the ordering, call it before any cursor
    """

    has_cheap_length_check: bool = False
    orders_nodes: bool = False

    #: Column appended to the ordering as a tie-breaker, if not already present
    primary_key: typing.Optional[str] = None

    @abc.abstractmethod
    def remove_nodes_before_and_including(self, nodes: NodesT, cursor: str, opts: PaginationOptions) -> NodesT:
        """Keep only the nodes strictly after cursor"""

    @abc.abstractmethod
    def remove_nodes_after_and_including(self, nodes: NodesT, cursor: str, opts: PaginationOptions) -> NodesT:
        """Keep only the nodes strictly before cursor"""

    @abc.abstractmethod
    async def get_nodes_length(self, nodes: NodesT, opts: PaginationOptions) -> int:
        """Number of nodes reachable through the accessor"""

    @abc.abstractmethod
    async def remove_nodes_from_end(self, nodes: NodesT, amount: int, opts: PaginationOptions) -> NodesT:
        """Drop the last amount nodes"""

    @abc.abstractmethod
    async def remove_nodes_from_beginning(self, nodes: NodesT, amount: int, opts: PaginationOptions) -> NodesT:
        """Drop the first amount nodes"""

    async def has_length_greater_than(self, nodes: NodesT, amount: int, opts: PaginationOptions) -> bool:
        """Whether there are more than amount nodes

        Override together with has_cheap_length_check when the backend can answer
        without counting every node
        """
        return await self.get_nodes_length(nodes, opts) > amount

    def order_nodes_by(self, nodes: NodesT, opts: PaginationOptions) -> NodesT:  # pylint: disable=unused-argument
        return nodes

    def cursor_columns(self, opts: PaginationOptions) -> typing.List[typing.Tuple[str, str]]:
        """Logical (column, direction) pairs that make up a cursor"""
        columns = list(zip(opts.order_by, opts.order_direction))
        if self.primary_key is not None and self.primary_key not in opts.order_by:
            columns.append((self.primary_key, opts.order_direction[-1]))
        return columns

    def node_to_cursor(self, node: typing.Any, opts: PaginationOptions) -> str:
        values = {
            column: read_node_value(node, opts.formatted_column(column)) for column, _ in self.cursor_columns(opts)
        }
        return to_cursor(values)

    async def materialize(self, nodes: NodesT) -> typing.Iterable[typing.Any]:
        """Resolve the accessor into concrete nodes"""
        if inspect.isawaitable(nodes):
            return await nodes  # type: ignore
        return typing.cast(typing.Iterable[typing.Any], nodes)

    async def convert_nodes_to_edges(
        self, nodes: NodesT, args: PaginationArgs, opts: PaginationOptions  # pylint: disable=unused-argument
    ) -> typing.List[Edge]:
        return [{"cursor": self.node_to_cursor(node, opts), "node": node} for node in await self.materialize(nodes)]
