"""
Unit tests for the SQL predicate builder.
They check that every present filter yields exactly one condition and that bound names follow append order.
"""

from itertools import product

import pytest

from src.api.query_builder import PredicateBuilder, clean_param, split_csv_param
from src.api.services.debtor_status_service import (
    IDCARD_PREDICATE,
    PROJECT_STATUS_PREDICATE,
    PROMISE_PREDICATE,
    PROVINCE_PREDICATE,
    build_single_filter,
)


def test_fixed_and_bound_predicates_join_in_order() -> None:
    where = (
        PredicateBuilder()
        .add_fixed("a.flag IS TRUE")
        .add("a.x = {param}", 1)
        .add("a.y > {param}", 2)
        .build()
    )

    assert where.sql == "a.flag IS TRUE AND a.x = :p1 AND a.y > :p2"
    assert list(where.params.items()) == [("p1", 1), ("p2", 2)]


def test_add_if_present_skips_blank_values_and_trims() -> None:
    builder = PredicateBuilder()
    builder.add_if_present("a.x = {param}", None)
    builder.add_if_present("a.y = {param}", "   ")
    builder.add_if_present("a.z ILIKE {param}", "  north ", pattern="%{}%")

    where = builder.build()

    assert where.sql == "a.z ILIKE :p1"
    assert where.params == {"p1": "%north%"}


def test_template_must_have_exactly_one_slot() -> None:
    with pytest.raises(ValueError):
        PredicateBuilder().add("a.x = 1", "v")
    with pytest.raises(ValueError):
        PredicateBuilder().add("a.x BETWEEN {param} AND {param}", "v")
    with pytest.raises(ValueError):
        PredicateBuilder().add_fixed("a.x = {param}")


def test_empty_builder_cannot_build() -> None:
    with pytest.raises(ValueError):
        PredicateBuilder().build()


def test_values_are_never_interpolated_into_sql() -> None:
    hostile = "x' OR '1'='1"
    where = build_single_filter(idcard=hostile, promise=None, province=None)

    assert hostile not in where.sql
    assert where.params == {"p1": hostile}


@pytest.mark.parametrize(
    ("idcard", "promise", "province"),
    list(product([None, "1100000000001"], [None, "P-001"], [None, "Bangkok"])),
)
def test_single_filter_has_one_condition_per_present_parameter(
    idcard: str | None, promise: str | None, province: str | None
) -> None:
    where = build_single_filter(idcard=idcard, promise=promise, province=province)

    expected: list[tuple[str, str]] = []
    if idcard:
        expected.append((IDCARD_PREDICATE, idcard))
    if promise:
        expected.append((PROMISE_PREDICATE, promise))
    if province:
        expected.append((PROVINCE_PREDICATE, f"%{province}%"))

    fragments = where.sql.split(" AND ")
    assert fragments[0] == PROJECT_STATUS_PREDICATE
    assert len(fragments) == len(expected) + 1
    assert len(where.params) == len(expected)
    for index, ((template, value), fragment) in enumerate(zip(expected, fragments[1:]), start=1):
        assert fragment == template.replace("{param}", f":p{index}")
        assert where.params[f"p{index}"] == value


def test_clean_param() -> None:
    assert clean_param(None) is None
    assert clean_param("  ") is None
    assert clean_param(" 42 ") == "42"


def test_split_csv_param() -> None:
    assert split_csv_param(None) == []
    assert split_csv_param("A,B,C") == ["A", "B", "C"]
    assert split_csv_param(" A , ,B,") == ["A", "B"]
