# Overview: Ingestion-boundary normalization of remote API payloads into canonical records.

from __future__ import annotations

import math
from typing import Any, Iterable, Optional


def _record_id(raw: Any) -> Optional[str]:
    """Remote records use "_id"; locally built ones may use "id"."""
    if not isinstance(raw, dict):
        return None
    value = raw.get("id")
    if value is None:
        value = raw.get("_id")
    if value is None:
        return None
    return str(value)


def to_number(value: Any) -> float | int:
    """Missing, malformed or non-finite numerics count as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
        if not math.isfinite(number):
            return 0
        return int(number) if number.is_integer() else number
    return 0


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def resolve_category_id(product: Any) -> Optional[str]:
    """
    Canonical category id of a product.

    The "category" field arrives either embedded ({"_id": ..., "name": ...})
    or as a bare id string. Anything else resolves to None. Never raises.
    """
    if not isinstance(product, dict):
        return None
    category = product.get("category")
    if isinstance(category, dict):
        return _record_id(category)
    if isinstance(category, str):
        return category
    return None


def resolve_category_name(product: Any, categories_by_id: Optional[dict] = None) -> str:
    """Name of the product's category, from the embedded object or a lookup."""
    if not isinstance(product, dict):
        return ""
    name = product.get("categoryName")
    if name:
        return _text(name)
    category = product.get("category")
    if isinstance(category, dict) and category.get("name"):
        return _text(category.get("name"))
    if categories_by_id:
        found = categories_by_id.get(resolve_category_id(product))
        if found:
            return _text(found.get("name"))
    return ""


def normalize_product(raw: Any) -> dict:
    raw = raw if isinstance(raw, dict) else {}
    category = raw.get("category")
    category_name = raw.get("categoryName")
    if category_name is None and isinstance(category, dict):
        category_name = category.get("name")
    return {
        "id": _record_id(raw),
        "name": _text(raw.get("name")),
        "sku": _text(raw.get("sku")),
        "category": resolve_category_id(raw),
        "categoryName": _text(category_name),
        "totalStock": to_number(raw.get("totalStock")),
        "sold": to_number(raw.get("sold")),
        "returned": to_number(raw.get("returned")),
        "stock": to_number(raw.get("stock")),
        "price": to_number(raw.get("price")),
        "status": _text(raw.get("status")),
    }


def normalize_category(raw: Any) -> dict:
    raw = raw if isinstance(raw, dict) else {}
    category = {
        "id": _record_id(raw),
        "name": _text(raw.get("name")),
        "description": _text(raw.get("description")),
    }
    # Optional server-computed counters
    for key in ("productCount", "totalRemainingStock"):
        if raw.get(key) is not None:
            category[key] = to_number(raw.get(key))
    return category


def normalize_sale(raw: Any) -> dict:
    raw = raw if isinstance(raw, dict) else {}
    customer = raw.get("customerName")
    if customer is None:
        customer = raw.get("customer")
    if isinstance(customer, dict):
        customer = customer.get("name")
    sale_id = raw.get("saleId")
    return {
        "id": _record_id(raw),
        "saleId": _text(sale_id) if sale_id is not None else None,
        "customerName": _text(customer),
        "totalAmount": to_number(raw.get("totalAmount")),
        "status": _text(raw.get("status")),
    }


def unwrap_collection(payload: Any, *keys: str) -> list:
    """
    Extract a record list from a list response.

    The remote API answers either with a bare list or with an object wrapping
    the list under one of several keys ("products", "sales", "orders", ...).
    The first key holding a list wins; anything else yields [].
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in keys:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


def normalize_products(payload: Any) -> list[dict]:
    return [normalize_product(p) for p in unwrap_collection(payload, "products", "items")]


def normalize_categories(payload: Any) -> list[dict]:
    return [normalize_category(c) for c in unwrap_collection(payload, "categories")]


def normalize_sales(payload: Any) -> list[dict]:
    return [normalize_sale(s) for s in unwrap_collection(payload, "sales", "orders")]


def index_by_id(records: Iterable[dict]) -> dict:
    return {r["id"]: r for r in records if r.get("id") is not None}
