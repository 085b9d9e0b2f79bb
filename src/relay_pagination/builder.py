from __future__ import annotations

import logging
import typing

from relay_pagination.args import PaginationArgs, PaginationOptions, normalize_arguments
from relay_pagination.connection import Connection, Edge, to_page_info
from relay_pagination.exceptions import OperatorContractError
from relay_pagination.operators import NodesOperators, NodesT

__all__ = ["connection_builder", "apollo_connection_builder", "Paginator"]

logger = logging.getLogger(__name__)

Paginator = typing.Callable[..., typing.Awaitable[Connection]]


class _NodesLength:
    """Length of the nodes accessor, fetched at most once per narrowing"""

    def __init__(self, operators: NodesOperators, opts: PaginationOptions, known: typing.Optional[int] = None):
        self.operators = operators
        self.opts = opts
        self.known = known

    async def get(self, nodes) -> int:
        if self.known is None:
            self.known = await self.operators.get_nodes_length(nodes, self.opts)
        return self.known

    async def greater_than(self, nodes, amount: int) -> bool:
        if self.known is None and self.operators.has_cheap_length_check:
            return await self.operators.has_length_greater_than(nodes, amount, self.opts)
        return await self.get(nodes) > amount


def connection_builder(operators: NodesOperators[NodesT]) -> Paginator:
    """Bind an operator set and return a paginate coroutine function

    **Parameters**

    * **operators**: _NodesOperators_ = capability set for the nodes accessor type

    The returned ``paginate(nodes, args=None, opts=None, **kwargs)`` accepts
    Relay arguments (``before``, ``after``, ``first``, ``last``, ``order_by``,
    ``order_direction``) and options (``format_column_fn``, ``modify_edge_fn``,
    ``is_aggregate_fn``, ``skip_total_count``). Keyword arguments are sorted
    into args or options by name.
    """
    if not isinstance(operators, NodesOperators):
        raise OperatorContractError(
            f"Expected an instance of NodesOperators, got {type(operators).__name__}. "
            "Subclass NodesOperators to connect a new backend"
        )

    async def paginate(
        nodes: NodesT,
        args: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        opts: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        **kwargs,
    ) -> Connection:
        all_args = dict(args or {})
        all_opts = dict(opts or {})
        for key, value in kwargs.items():
            if key in PaginationArgs._fields or key in ("orderBy", "orderDirection"):
                all_args[key] = value
            else:
                all_opts[key] = value

        pagination_args, pagination_opts = normalize_arguments(all_args, all_opts)
        logger.debug("Paginating with %s", pagination_args)

        edges, has_previous_page, has_next_page, total_count = await _paginate_nodes(
            operators, nodes, pagination_args, pagination_opts
        )

        modify_edge_fn = pagination_opts.modify_edge_fn
        if modify_edge_fn is not None:
            edges = [modify_edge_fn(edge) for edge in edges]

        logger.debug(
            "Page holds %d edges, has_previous_page=%s has_next_page=%s total_count=%s",
            len(edges),
            has_previous_page,
            has_next_page,
            total_count,
        )

        return {
            "edges": edges,
            "pageInfo": to_page_info(edges, has_previous_page=has_previous_page, has_next_page=has_next_page),
            "totalCount": total_count,
        }

    return paginate


async def _paginate_nodes(
    operators: NodesOperators[NodesT], nodes: NodesT, args: PaginationArgs, opts: PaginationOptions
) -> typing.Tuple[typing.List[Edge], bool, bool, typing.Optional[int]]:
    if operators.orders_nodes:
        nodes = operators.order_nodes_by(nodes, opts)

    # Apply cursors
    if args.after is not None:
        nodes = operators.remove_nodes_before_and_including(nodes, args.after, opts)
    if args.before is not None:
        nodes = operators.remove_nodes_after_and_including(nodes, args.before, opts)

    length = _NodesLength(operators, opts)

    total_count = None
    if not opts.skip_total_count:
        total_count = await length.get(nodes)

    # Existence checks happen before first/last truncation
    has_next_page = False
    if args.first is not None:
        has_next_page = await length.greater_than(nodes, args.first)

    has_previous_page = False
    if args.last is not None:
        has_previous_page = await length.greater_than(nodes, args.last)

    # Edges to return: "first" keeps the head, then "last" keeps the tail of that
    if args.first is not None:
        current = await length.get(nodes)
        if current > args.first:
            nodes = await operators.remove_nodes_from_end(nodes, current - args.first, opts)
            length = _NodesLength(operators, opts, known=args.first)

    if args.last is not None:
        current = await length.get(nodes)
        if current > args.last:
            nodes = await operators.remove_nodes_from_beginning(nodes, current - args.last, opts)

    edges = await operators.convert_nodes_to_edges(nodes, args, opts)
    return edges, has_previous_page, has_next_page, total_count


# Alias
apollo_connection_builder = connection_builder
