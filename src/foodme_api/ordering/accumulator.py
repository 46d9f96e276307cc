"""
foodme_api.ordering.accumulator

Order line accumulation.

Responsibilities:
- Coerce request-supplied `qty`/`price` values to finite numbers.
- Sum item count and order total, normalizing the total to 2 decimal places.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from foodme_api.ordering.errors import InvalidLineItemError

_CENTS = Decimal("0.01")

# String forms accepted by JS `Number()`: ASCII decimal literals and prefixed integers.
_DECIMAL_LITERAL = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)
_PREFIXED_INTEGER = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, slots=True)
class OrderAccumulation:
    item_count: float
    order_total: float


def coerce_number(value: Any) -> float | int | None:
    """
    JSON-value to number, following JavaScript `Number()` for the types a client can send.
    Returns None when the value is not a finite number.
    """

    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value if _fits_float(value) else None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        return _parse_numeric_text(text)
    return None


def _parse_numeric_text(text: str) -> float | int | None:
    if _PREFIXED_INTEGER.fullmatch(text):
        whole = int(text, 0)
        return whole if _fits_float(whole) else None
    if not _DECIMAL_LITERAL.fullmatch(text):
        return None
    if _INTEGER.fullmatch(text):
        whole = int(text)
        return whole if _fits_float(whole) else None
    # "Infinity" parses to inf and is rejected with every other overflow.
    number = float(text)
    return number if math.isfinite(number) else None


def _fits_float(value: int) -> bool:
    try:
        float(value)
    except OverflowError:
        return False
    return True


def round_total(total: float) -> float:
    # Half away from zero over the shortest decimal repr: 6.666 -> 6.67, 0.125 -> 0.13.
    return float(Decimal(repr(total)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def accumulate(items: Sequence[Any]) -> OrderAccumulation:
    """
    Sum `qty` and `qty * price` over `items`.

    Raises InvalidLineItemError for the first line whose qty or price is not a finite
    number; nothing is accumulated in that case.
    """

    item_count: float = 0
    order_total: float = 0.0
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise InvalidLineItemError(item, index)
        qty = coerce_number(item.get("qty"))
        price = coerce_number(item.get("price"))
        if qty is None or price is None:
            raise InvalidLineItemError(item, index)
        item_count += qty
        order_total += qty * price
        if not math.isfinite(order_total) or not math.isfinite(item_count):
            # Finite inputs can still overflow when multiplied/summed.
            raise InvalidLineItemError(item, index)

    return OrderAccumulation(item_count=item_count, order_total=round_total(order_total))
