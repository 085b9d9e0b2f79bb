from __future__ import annotations

import logging
import typing
import warnings

from relay_pagination.config import Config
from relay_pagination.exceptions import PaginationArgumentError
from typing_extensions import Literal

__all__ = ["PaginationArgs", "PaginationOptions", "normalize_arguments"]

logger = logging.getLogger(__name__)

OrderDirection = Literal["asc", "desc"]

ORDER_DIRECTIONS = ("asc", "desc")

# camelCase names, as received from GraphQL arguments
ARG_ALIASES = {"orderBy": "order_by", "orderDirection": "order_direction"}
OPT_ALIASES = {
    "formatColumnFn": "format_column_fn",
    "modifyEdgeFn": "modify_edge_fn",
    "isAggregateFn": "is_aggregate_fn",
    "skipTotalCount": "skip_total_count",
    "orderColumn": "order_column",
    "ascOrDesc": "asc_or_desc",
}
DEPRECATED_OPTS = {"order_column": "order_by", "asc_or_desc": "order_direction"}


class PaginationArgs(typing.NamedTuple):
    before: typing.Optional[str] = None
    after: typing.Optional[str] = None
    first: typing.Optional[int] = None
    last: typing.Optional[int] = None
    order_by: typing.List[str] = [Config.DEFAULT_ORDER_BY]
    order_direction: typing.List[OrderDirection] = [Config.DEFAULT_ORDER_DIRECTION]  # type: ignore


class PaginationOptions(typing.NamedTuple):
    """Options passed to every operator call

    order_by and order_direction mirror the normalized PaginationArgs so
    that operators only need the options to build comparisons
    """

    order_by: typing.List[str] = [Config.DEFAULT_ORDER_BY]
    order_direction: typing.List[OrderDirection] = [Config.DEFAULT_ORDER_DIRECTION]  # type: ignore
    format_column_fn: typing.Callable[[str], str] = Config.column_name_mapper
    modify_edge_fn: typing.Optional[typing.Callable[[typing.Dict], typing.Dict]] = None
    is_aggregate_fn: typing.Callable[[str], bool] = Config.is_aggregate
    skip_total_count: bool = False

    def formatted_column(self, column: str) -> str:
        return self.format_column_fn(column)

    def is_aggregate(self, column: str) -> bool:
        return bool(self.is_aggregate_fn(column))


def _rename_keys(contents: typing.Mapping[str, typing.Any], aliases: typing.Dict[str, str]) -> typing.Dict:
    renamed: typing.Dict[str, typing.Any] = {}
    for key, value in contents.items():
        canonical = aliases.get(key, key)
        if canonical in renamed and renamed[canonical] is not None and value is None:
            continue
        renamed[canonical] = value
    return renamed


def _check_count(name: str, value: typing.Any) -> typing.Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise PaginationArgumentError(f'"{name}" must be a non-negative integer, got {value!r}')
    if value < 0:
        raise PaginationArgumentError(f'"{name}" must be a non-negative integer, got {value}')
    return value


def _as_list(value: typing.Union[str, typing.Sequence[str]]) -> typing.List[str]:
    if isinstance(value, str):
        return [value]
    return list(value)


def _order_directions(value: typing.Any, n_columns: int) -> typing.List[OrderDirection]:
    directions = [str(x).lower() for x in _as_list(value)]
    for direction in directions:
        if direction not in ORDER_DIRECTIONS:
            raise PaginationArgumentError(f'"order_direction" must be one of {ORDER_DIRECTIONS}, got {direction!r}')

    if len(directions) == 1:
        directions = directions * n_columns
    elif len(directions) != n_columns:
        raise PaginationArgumentError('"order_direction" must have one entry per "order_by" column')
    return typing.cast(typing.List[OrderDirection], directions)


def normalize_arguments(
    args: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    opts: typing.Optional[typing.Mapping[str, typing.Any]] = None,
) -> typing.Tuple[PaginationArgs, PaginationOptions]:
    """Map raw pagination arguments and options onto their canonical form

    - camelCase keys become snake_case
    - deprecated "order_column"/"asc_or_desc" options fill in "order_by"/"order_direction"
      when those were not provided
    - "first" and "last" are validated as non-negative integers
    """
    raw_args = _rename_keys(args or {}, ARG_ALIASES)
    raw_opts = _rename_keys(opts or {}, OPT_ALIASES)

    for deprecated, canonical in DEPRECATED_OPTS.items():
        if deprecated not in raw_opts:
            continue
        value = raw_opts.pop(deprecated)
        if value is None:
            continue
        warnings.warn(f'"{deprecated}" is deprecated in favor of "{canonical}"', DeprecationWarning, stacklevel=3)
        logger.debug("Mapping deprecated option %s onto %s", deprecated, canonical)
        if raw_args.get(canonical) is None:
            raw_args[canonical] = value

    unknown_args = set(raw_args) - set(PaginationArgs._fields)
    if unknown_args:
        raise PaginationArgumentError(f"Unknown pagination arguments: {sorted(unknown_args)}")

    unknown_opts = set(raw_opts) - set(PaginationOptions._fields)
    if unknown_opts:
        raise PaginationArgumentError(f"Unknown pagination options: {sorted(unknown_opts)}")

    order_by = _as_list(raw_args.get("order_by") or Config.DEFAULT_ORDER_BY)
    order_direction = _order_directions(
        raw_args.get("order_direction") or Config.DEFAULT_ORDER_DIRECTION, len(order_by)
    )

    pagination_args = PaginationArgs(
        before=raw_args.get("before"),
        after=raw_args.get("after"),
        first=_check_count("first", raw_args.get("first")),
        last=_check_count("last", raw_args.get("last")),
        order_by=order_by,
        order_direction=order_direction,
    )

    option_values = {key: value for key, value in raw_opts.items() if value is not None}
    pagination_opts = PaginationOptions(**option_values)._replace(order_by=order_by, order_direction=order_direction)
    return pagination_args, pagination_opts
