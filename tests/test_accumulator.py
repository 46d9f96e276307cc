"""
tests.test_accumulator

Line-item coercion, summing and 2-decimal normalization.
"""

from __future__ import annotations

import math

import pytest

from foodme_api.ordering.accumulator import accumulate, coerce_number, round_total
from foodme_api.ordering.errors import InvalidLineItemError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (3, 3),
        (2.5, 2.5),
        ("4", 4),
        (" 1.25 ", 1.25),
        ("", 0),
        (True, 1),
        (False, 0),
        ("0x10", 16),
        ("0X1f", 31),
        ("0o17", 15),
        ("0b101", 5),
        ("+3", 3),
        ("-2.5", -2.5),
        (".5", 0.5),
        ("5.", 5.0),
        ("1e3", 1000.0),
        ("2.5E-1", 0.25),
    ],
)
def test_coerce_number_accepts_finite_values(raw, expected) -> None:
    assert coerce_number(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "x",
        "1.2.3",
        "nan",
        "inf",
        "infinity",
        "Infinity",
        "-Infinity",
        "1_000",
        "1_0.5",
        "\u0661\u0662",
        "-0x10",
        "0x",
        "0b102",
        "1e",
        ".",
        "1e400",
        math.inf,
        math.nan,
        [],
        {},
        10**400,
    ],
)
def test_coerce_number_rejects_non_finite(raw) -> None:
    assert coerce_number(raw) is None


@pytest.mark.parametrize(
    ("total", "expected"),
    [(6.666, 6.67), (0.125, 0.13), (-0.125, -0.13), (9.99, 9.99), (0.1 + 0.2, 0.3), (10.0, 10.0)],
)
def test_round_total_half_away_from_zero(total, expected) -> None:
    assert round_total(total) == expected


def test_accumulate_sums_count_and_total() -> None:
    acc = accumulate([{"qty": 2, "price": 3.333}, {"qty": "1", "price": "0.50"}])

    assert acc.item_count == 3
    assert acc.order_total == 7.17


def test_accumulate_reports_offending_line() -> None:
    bad = {"qty": 1, "price": "free"}

    with pytest.raises(InvalidLineItemError) as info:
        accumulate([{"qty": 1, "price": 1}, bad, {"qty": "x", "price": 1}])

    assert info.value.index == 1
    assert info.value.item is bad
    assert str(info.value) == "Invalid item qty or price"


def test_accumulate_rejects_overflowing_total() -> None:
    with pytest.raises(InvalidLineItemError):
        accumulate([{"qty": 1e308, "price": 1e308}])


def test_overflow_names_the_line_where_it_happened() -> None:
    overflowing = {"qty": 1e308, "price": 1e308}

    with pytest.raises(InvalidLineItemError) as info:
        accumulate([{"qty": 1, "price": 1}, overflowing, {"qty": 1, "price": 1}])

    assert info.value.index == 1
    assert info.value.item is overflowing


def test_underscore_grouped_quantity_is_not_a_number() -> None:
    with pytest.raises(InvalidLineItemError):
        accumulate([{"qty": "1_0", "price": 1}])


# --- Module Notes -----------------------------------------------------------
# String coercion mirrors JavaScript Number(); see coerce_number.
