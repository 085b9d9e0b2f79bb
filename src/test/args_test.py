import warnings

import pytest
from relay_pagination.args import PaginationArgs, PaginationOptions, normalize_arguments
from relay_pagination.config import Config
from relay_pagination.exceptions import PaginationArgumentError


def test_defaults():
    args, opts = normalize_arguments()
    assert args == PaginationArgs(order_by=[Config.DEFAULT_ORDER_BY], order_direction=[Config.DEFAULT_ORDER_DIRECTION])
    assert opts.order_by == args.order_by
    assert not opts.skip_total_count
    assert opts.formatted_column("age") == "age"
    assert not opts.is_aggregate("age")


def test_camel_case_keys():
    args, opts = normalize_arguments(
        {"first": 2, "orderBy": "age", "orderDirection": "desc"},
        {"skipTotalCount": True, "formatColumnFn": str.upper, "isAggregateFn": lambda x: x == "n"},
    )
    assert args.first == 2
    assert args.order_by == ["age"]
    assert args.order_direction == ["desc"]
    assert opts.skip_total_count
    assert opts.formatted_column("age") == "AGE"
    assert opts.is_aggregate("n")


def test_single_direction_applies_to_every_column():
    args, opts = normalize_arguments({"order_by": ["age", "name"], "order_direction": "DESC"})
    assert args.order_direction == ["desc", "desc"]
    assert opts.order_direction == ["desc", "desc"]


def test_direction_per_column():
    args, _ = normalize_arguments({"order_by": ["age", "name"], "order_direction": ["desc", "asc"]})
    assert args.order_direction == ["desc", "asc"]


def test_deprecated_options():
    with pytest.warns(DeprecationWarning):
        args, opts = normalize_arguments({}, {"orderColumn": "age", "ascOrDesc": "desc"})
    assert args.order_by == ["age"]
    assert args.order_direction == ["desc"]
    assert "order_column" not in PaginationOptions._fields
    assert opts.order_by == ["age"]


def test_canonical_wins_over_deprecated():
    with pytest.warns(DeprecationWarning):
        args, _ = normalize_arguments({"order_by": "name"}, {"order_column": "age"})
    assert args.order_by == ["name"]


def test_deprecated_options_passed_as_none_do_not_warn():
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        args, _ = normalize_arguments({"order_by": "name"}, {"orderColumn": None, "asc_or_desc": None})
    assert args.order_by == ["name"]
    assert args.order_direction == [Config.DEFAULT_ORDER_DIRECTION]


def test_none_values_ignored():
    args, opts = normalize_arguments(
        {"first": None, "last": None, "before": None, "after": None, "order_by": None},
        {"modify_edge_fn": None},
    )
    assert args.first is None
    assert args.order_by == [Config.DEFAULT_ORDER_BY]
    assert opts.modify_edge_fn is None


def test_unknown_option():
    with pytest.raises(PaginationArgumentError):
        normalize_arguments({}, {"cache": True})
