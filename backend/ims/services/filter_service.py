# Overview: Predicate chains narrowing already-fetched folder, box, and sale lists.

from __future__ import annotations

from typing import Any, Iterable, Optional

from ..models import (
    CATEGORY_FILTER_ALL,
    PRODUCT_STATUS_IN_STOCK,
    STATUS_FILTER_IN_STOCK,
    STATUS_FILTER_RETURNED,
    STATUS_FILTER_SOLD,
)
from .normalizer import resolve_category_id, resolve_category_name


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _matches(query: str, *candidates: Any) -> bool:
    """Case-insensitive substring match; an empty query matches everything."""
    if not query:
        return True
    needle = query.lower()
    return any(needle in _text(c).lower() for c in candidates)


def _positive(product: Any, key: str) -> bool:
    value = product.get(key) if isinstance(product, dict) else None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value > 0


def _status_predicate(status_filter: Optional[str], status_authoritative: bool):
    if status_filter == STATUS_FILTER_IN_STOCK:
        if status_authoritative:
            return lambda p: isinstance(p, dict) and p.get("status") == PRODUCT_STATUS_IN_STOCK
        return lambda p: _positive(p, "stock")
    if status_filter == STATUS_FILTER_SOLD:
        return lambda p: _positive(p, "sold")
    if status_filter == STATUS_FILTER_RETURNED:
        return lambda p: _positive(p, "returned")
    return None


def filter_products(
    products: Iterable[Any],
    *,
    category_filter: Optional[str] = CATEGORY_FILTER_ALL,
    status_filter: Optional[str] = None,
    query: Optional[str] = "",
    categories_by_id: Optional[dict] = None,
    status_authoritative: bool = True,
    match_category_name: bool = True,
) -> list:
    """
    Apply category scope, then one derived-status filter, then text search.

    Returns a new list in input order; the input is never mutated.
    With status_authoritative=False, "inStock" means stock > 0 instead of
    status == "In Stock". Unknown status filters act as "all". The query
    matches the box name and, unless match_category_name=False, the name of
    its folder. The query is matched as given, whitespace included.
    """
    result = list(products)

    if category_filter and category_filter != CATEGORY_FILTER_ALL:
        result = [p for p in result if resolve_category_id(p) == category_filter]

    predicate = _status_predicate(status_filter, status_authoritative)
    if predicate is not None:
        result = [p for p in result if predicate(p)]

    query = _text(query)
    if query:
        result = [
            p for p in result
            if isinstance(p, dict)
            and _matches(
                query,
                p.get("name"),
                resolve_category_name(p, categories_by_id) if match_category_name else None,
            )
        ]

    return result


def filter_categories(categories: Iterable[Any], query: Optional[str] = "") -> list:
    """Folder search over name and description."""
    query = _text(query)
    return [
        c for c in categories
        if isinstance(c, dict) and _matches(query, c.get("name"), c.get("description"))
    ]


def filter_sales(sales: Iterable[Any], query: Optional[str] = "") -> list:
    """Order search over the sale number (or record id) and customer name."""
    query = _text(query)
    result = []
    for sale in sales:
        if not isinstance(sale, dict):
            continue
        number = sale.get("saleId") or sale.get("id") or sale.get("_id")
        customer = sale.get("customerName") or sale.get("customer")
        if _matches(query, number, customer):
            result.append(sale)
    return result
