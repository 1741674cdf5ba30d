# Overview: Pure reductions of box lists into report totals.

from __future__ import annotations

import math
from dataclasses import dataclass, asdict, fields
from typing import Any, Iterable


@dataclass(frozen=True)
class AggregateResult:
    """
    Derived totals over a list of boxes.

    Values are full precision. Rounding for display happens in the
    presentation layer (see to_display).
    """
    totalBoxes: int = 0
    soldBoxes: float = 0
    returnedBoxes: float = 0
    remainingBoxes: float = 0
    soldValue: float = 0
    returnedValue: float = 0
    remainingValue: float = 0
    netValue: float = 0
    returnRate: float = 0

    def to_dict(self) -> dict:
        return asdict(self)


MONEY_FIELDS = ("soldValue", "returnedValue", "remainingValue", "netValue")


def _num(product: Any, key: str) -> float:
    if not isinstance(product, dict):
        return 0
    value = product.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value if math.isfinite(value) else 0


def aggregate(products: Iterable[Any]) -> AggregateResult:
    """
    Reduce boxes into named totals.

    Missing, non-numeric or non-finite sold/returned/stock/price count as 0.
    returnRate is returned/sold * 100, or 0 when nothing was sold.
    """
    total = 0
    sold = returned = remaining = 0
    sold_value = returned_value = remaining_value = 0

    for product in products:
        total += 1
        price = _num(product, "price")
        p_sold = _num(product, "sold")
        p_returned = _num(product, "returned")
        p_stock = _num(product, "stock")

        sold += p_sold
        returned += p_returned
        remaining += p_stock
        sold_value += p_sold * price
        returned_value += p_returned * price
        remaining_value += p_stock * price

    return_rate = (returned / sold * 100) if sold > 0 else 0

    return AggregateResult(
        totalBoxes=total,
        soldBoxes=sold,
        returnedBoxes=returned,
        remainingBoxes=remaining,
        soldValue=sold_value,
        returnedValue=returned_value,
        remainingValue=remaining_value,
        netValue=sold_value - returned_value,
        returnRate=return_rate,
    )


def returns_summary(products: Iterable[Any]) -> dict:
    """Totals shown on the returns view."""
    result = aggregate(products)
    return {
        "totalReturns": result.returnedBoxes,
        "totalValue": result.returnedValue,
    }


def to_display(result: AggregateResult) -> dict:
    """Two-decimal strings for money and rate fields, counts as-is."""
    display = {}
    for f in fields(result):
        value = getattr(result, f.name)
        if f.name in MONEY_FIELDS or f.name == "returnRate":
            display[f.name] = f"{value:.2f}"
        else:
            display[f.name] = value
    return display
