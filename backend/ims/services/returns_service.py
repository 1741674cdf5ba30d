# Overview: Service-layer operations for returns and the returned-boxes view.

from __future__ import annotations

from typing import Any, Optional

from ..validation import ValidationError
from .aggregation_service import returns_summary
from .api_client import ImsApiClient
from .concurrency import fetch_concurrently
from .filter_service import filter_products
from .normalizer import index_by_id, normalize_categories, normalize_products


def fetch_returned_boxes(api: ImsApiClient, *, keyword: Optional[str], limit: int) -> dict:
    products_raw, categories_raw = fetch_concurrently(
        lambda: api.list_returned_products(keyword=keyword, limit=limit),
        api.list_categories,
    )
    return {
        "boxes": normalize_products(products_raw),
        "folders": normalize_categories(categories_raw),
    }


def returns_view(
    data: dict,
    *,
    category_filter: Optional[str] = None,
    query: Optional[str] = None,
) -> dict:
    """Returned boxes scoped by folder and searched by box or folder name."""
    folders = data["folders"]
    boxes = filter_products(
        data["boxes"],
        category_filter=category_filter,
        query=query,
        categories_by_id=index_by_id(folders),
    )
    return {
        "boxes": boxes,
        "folders": folders,
        "count": len(boxes),
        **returns_summary(boxes),
    }


def list_returns(api: ImsApiClient, **params) -> Any:
    return api.list_returns(**params)


def create_return(api: ImsApiClient, payload: Any) -> Any:
    if not isinstance(payload, dict) or not payload:
        raise ValidationError("JSON object body required")
    return api.create_return(payload)


def return_stats(api: ImsApiClient) -> Any:
    return api.return_stats()
