# Overview: Service-layer operations for dashboard, monthly report, and date-range search views.

from __future__ import annotations

from datetime import date
from typing import Optional

from ..models import CATEGORY_FILTER_ALL
from ..time_utils import month_label
from .aggregation_service import aggregate, to_display
from .api_client import ImsApiClient
from .concurrency import fetch_concurrently
from .filter_service import filter_products
from .normalizer import to_number, index_by_id, normalize_categories, normalize_products


DASHBOARD_CARDS = ("totalStockAdded", "totalSold", "totalReturned", "totalRemaining")

ALL_FOLDERS_LABEL = "All folders"
SELECTED_FOLDER_LABEL = "Selected folder"


def dashboard_stats(api: ImsApiClient) -> dict:
    """Dashboard cards straight from the remote stats endpoint; gaps read as 0."""
    stats = api.product_stats()
    stats = stats if isinstance(stats, dict) else {}
    return {key: to_number(stats.get(key)) for key in DASHBOARD_CARDS}


def fetch_report_data(api: ImsApiClient, *, limit: int) -> dict:
    products_raw, categories_raw = fetch_concurrently(
        lambda: api.list_products(limit=limit),
        api.list_categories,
    )
    return {
        "boxes": normalize_products(products_raw),
        "folders": normalize_categories(categories_raw),
    }


def _scope_label(folders: list, category_filter: Optional[str]) -> str:
    if not category_filter or category_filter == CATEGORY_FILTER_ALL:
        return ALL_FOLDERS_LABEL
    folder = index_by_id(folders).get(category_filter)
    if folder and folder.get("name"):
        return folder["name"]
    return SELECTED_FOLDER_LABEL


def monthly_report(data: dict, *, category_filter: Optional[str] = None, on: Optional[date] = None) -> dict:
    """Totals over every fetched box, optionally scoped to one folder."""
    category_filter = category_filter or CATEGORY_FILTER_ALL
    boxes = filter_products(data["boxes"], category_filter=category_filter)
    totals = aggregate(boxes)
    return {
        "title": month_label(on),
        "scope": _scope_label(data["folders"], category_filter),
        "category": category_filter,
        "folders": [{"id": f["id"], "name": f["name"]} for f in data["folders"]],
        "totals": totals.to_dict(),
        "display": to_display(totals),
    }


def fetch_search_data(api: ImsApiClient, *, start_date: str, end_date: str) -> dict:
    """Boxes in the date range; the remote API does the date scoping."""
    products_raw, categories_raw = fetch_concurrently(
        lambda: api.list_products(startDate=start_date, endDate=end_date),
        api.list_categories,
    )
    return {
        "startDate": start_date,
        "endDate": end_date,
        "boxes": normalize_products(products_raw),
        "folders": normalize_categories(categories_raw),
    }


def search_results(
    data: dict,
    *,
    category_filter: Optional[str] = None,
    status_filter: Optional[str] = None,
    query: Optional[str] = None,
) -> dict:
    """
    Totals cover every box in the range; the list honours the filters.

    "inStock" here means stock > 0, as status is only refreshed on edit.
    """
    totals = aggregate(data["boxes"])
    items = filter_products(
        data["boxes"],
        category_filter=category_filter,
        status_filter=status_filter,
        query=query,
        categories_by_id=index_by_id(data["folders"]),
        status_authoritative=False,
    )
    return {
        "startDate": data["startDate"],
        "endDate": data["endDate"],
        "found": len(data["boxes"]),
        "totals": totals.to_dict(),
        "display": to_display(totals),
        "items": items,
        "count": len(items),
    }
