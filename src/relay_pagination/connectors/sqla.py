"""
Paginate a SQLAlchemy select statement

Nodes are SelectNodes: the statement plus the connection that executes it.
first/last are tracked as LIMIT/OFFSET and only applied when the statement runs.
"""
# pylint: disable=invalid-name
from __future__ import annotations

import inspect
import logging
import typing

from relay_pagination.args import PaginationOptions
from relay_pagination.builder import connection_builder
from relay_pagination.config import Config
from relay_pagination.cursor import from_cursor
from relay_pagination.exceptions import PaginationArgumentError
from relay_pagination.operators import NodesOperators
from sqlalchemy import and_, func, literal_column, or_, select
from sqlalchemy.sql import ColumnElement, Select

__all__ = ["SelectNodes", "SelectOperators", "sqla_paginator"]

logger = logging.getLogger(__name__)

ONE = literal_column("1")


class SelectNodes(typing.NamedTuple):
    """A select statement that has not been executed yet

    **connection** is anything with an ``execute`` method: a Connection or
    Session, or their asyncio counterparts. A sync connection executes inside
    the paginate coroutine and blocks the event loop while the query runs.

    remove_nodes_from_end needs the row count to turn "drop n" into a LIMIT and
    runs its own COUNT(*), separate from the one behind totalCount.
    """

    stmt: Select
    connection: typing.Any
    offset: int = 0
    limit: typing.Optional[int] = None

    def paged(self) -> Select:
        stmt = self.stmt
        if self.offset:
            stmt = stmt.offset(self.offset)
        if self.limit is not None:
            stmt = stmt.limit(self.limit)
        return stmt


async def execute(connection, stmt):
    result = connection.execute(stmt)
    # AsyncConnection and AsyncSession return awaitables
    if inspect.isawaitable(result):
        result = await result
    return result


def get_column(stmt: Select, column_name: str) -> ColumnElement:
    try:
        return stmt.selected_columns[column_name]
    except KeyError:
        raise PaginationArgumentError(f"No selected column named {column_name}") from None


class SelectOperators(NodesOperators[SelectNodes]):

    has_cheap_length_check = True

    def __init__(self, primary_key: typing.Optional[str] = Config.PRIMARY_KEY, sort: bool = True):
        self.primary_key = primary_key
        self.orders_nodes = sort

    def _ordering_columns(
        self, stmt: Select, opts: PaginationOptions
    ) -> typing.List[typing.Tuple[str, ColumnElement, str]]:
        """(logical name, column expression, direction) for each cursor column"""
        return [
            (column_name, get_column(stmt, opts.formatted_column(column_name)), direction)
            for column_name, direction in self.cursor_columns(opts)
        ]

    def order_nodes_by(self, nodes: SelectNodes, opts: PaginationOptions) -> SelectNodes:
        order_clause = [
            column.asc() if direction == "asc" else column.desc()
            for _, column, direction in self._ordering_columns(nodes.stmt, opts)
        ]
        return nodes._replace(stmt=nodes.stmt.order_by(None).order_by(*order_clause))

    def _apply_cursor(self, nodes: SelectNodes, cursor: str, opts: PaginationOptions, after: bool) -> SelectNodes:
        cursor_struct = from_cursor(cursor)
        ordering = self._ordering_columns(nodes.stmt, opts)

        # Keyset condition: (a > x) or (a = x and b > y) or ...
        alternatives = []
        for ix, (column_name, column, direction) in enumerate(ordering):
            value = cursor_struct.value_for(column_name)
            leading = [
                prev_column == cursor_struct.value_for(prev_name) for prev_name, prev_column, _ in ordering[:ix]
            ]
            is_greater = (direction == "asc") == after
            alternatives.append(and_(*leading, column > value if is_greater else column < value))
        clause = or_(*alternatives)

        if any(opts.is_aggregate(column_name) for column_name, _, _ in ordering):
            return nodes._replace(stmt=nodes.stmt.having(clause))
        return nodes._replace(stmt=nodes.stmt.where(clause))

    def remove_nodes_before_and_including(
        self, nodes: SelectNodes, cursor: str, opts: PaginationOptions
    ) -> SelectNodes:
        return self._apply_cursor(nodes, cursor, opts, after=True)

    def remove_nodes_after_and_including(
        self, nodes: SelectNodes, cursor: str, opts: PaginationOptions
    ) -> SelectNodes:
        return self._apply_cursor(nodes, cursor, opts, after=False)

    async def get_nodes_length(self, nodes: SelectNodes, opts: PaginationOptions) -> int:
        count_stmt = select(func.count()).select_from(nodes.paged().subquery())
        result = await execute(nodes.connection, count_stmt)
        return result.scalar()

    async def has_length_greater_than(self, nodes: SelectNodes, amount: int, opts: PaginationOptions) -> bool:
        exists_stmt = select(ONE).select_from(nodes.paged().subquery()).offset(amount).limit(1)
        result = await execute(nodes.connection, exists_stmt)
        return result.first() is not None

    async def remove_nodes_from_end(self, nodes: SelectNodes, amount: int, opts: PaginationOptions) -> SelectNodes:
        length = await self.get_nodes_length(nodes, opts)
        return nodes._replace(limit=max(length - amount, 0))

    async def remove_nodes_from_beginning(
        self, nodes: SelectNodes, amount: int, opts: PaginationOptions
    ) -> SelectNodes:
        limit = None if nodes.limit is None else max(nodes.limit - amount, 0)
        return nodes._replace(offset=nodes.offset + amount, limit=limit)

    async def materialize(self, nodes: SelectNodes) -> typing.List[typing.Dict[str, typing.Any]]:
        stmt = nodes.paged()
        logger.debug("Fetching nodes with offset=%s limit=%s", nodes.offset, nodes.limit)
        result = await execute(nodes.connection, stmt)
        return [dict(row._mapping) for row in result]


sqla_paginator = connection_builder(SelectOperators())
