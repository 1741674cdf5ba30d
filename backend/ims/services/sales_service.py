# Overview: Service-layer operations for sales orders.

from __future__ import annotations

from typing import Any, Optional

from ..validation import ValidationError, validate_sale_status
from .api_client import ImsApiClient
from .filter_service import filter_sales
from .normalizer import normalize_sale, normalize_sales


def list_sales(api: ImsApiClient, *, query: Optional[str] = None, limit: Optional[int] = None) -> list[dict]:
    sales = normalize_sales(api.list_sales(keyword=query, limit=limit))
    # The remote keyword search is loose; narrow to what the UI matches on
    return filter_sales(sales, query)


def get_sale(api: ImsApiClient, sale_id: str) -> dict:
    return normalize_sale(api.get_sale(sale_id))


def create_sale(api: ImsApiClient, payload: Any) -> dict:
    if not isinstance(payload, dict) or not payload:
        raise ValidationError("JSON object body required")
    data = dict(payload)
    if "status" in data:
        data["status"] = validate_sale_status(data["status"])
    return normalize_sale(api.create_sale(data))


def set_sale_status(api: ImsApiClient, sale_id: str, status: Any) -> dict:
    """Any status may follow any other."""
    status = validate_sale_status(status)
    data = api.update_sale(sale_id, {"status": status})
    sale = normalize_sale(data)
    if sale["id"] is None:
        sale["id"] = sale_id
    sale["status"] = status
    return sale


def delete_sale(api: ImsApiClient, sale_id: str) -> None:
    api.delete_sale(sale_id)
