# Overview: Service-layer operations for boxes (products) inside folders.

from __future__ import annotations

import secrets
import string
import time
from typing import Any, Optional

from ..validation import ValidationError, validate_box
from .aggregation_service import aggregate
from .api_client import ImsApiClient
from .concurrency import fetch_concurrently
from .filter_service import filter_products
from .normalizer import normalize_category, normalize_product, normalize_products


SKU_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase
SKU_SUFFIX_LENGTH = 5


def generate_sku(name: str, *, now_ms: Optional[int] = None, suffix: Optional[str] = None) -> str:
    """<name>-<epoch millis>-<5 base-36 chars>, used when a box has no SKU."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    if suffix is None:
        suffix = "".join(secrets.choice(SKU_SUFFIX_ALPHABET) for _ in range(SKU_SUFFIX_LENGTH))
    return f"{name}-{now_ms}-{suffix}"


def list_boxes(api: ImsApiClient, **params) -> list[dict]:
    return normalize_products(api.list_products(**params))


def fetch_folder_contents(api: ImsApiClient, folder_id: str) -> dict:
    """Folder record and every box, fetched together."""
    folder_raw, products_raw = fetch_concurrently(
        lambda: api.get_category(folder_id),
        lambda: api.list_products(),
    )
    return {
        "folder": normalize_category(folder_raw),
        "boxes": filter_products(normalize_products(products_raw), category_filter=folder_id),
    }


def folder_items_view(
    contents: dict,
    *,
    status_filter: Optional[str] = None,
    query: Optional[str] = None,
) -> dict:
    """Folder items screen: filtered boxes plus the folder's totals."""
    boxes = contents["boxes"]
    # Boxes here share one folder, so only the name is searched
    visible = filter_products(
        boxes,
        status_filter=status_filter,
        query=query,
        match_category_name=False,
    )
    return {
        "folder": contents["folder"],
        "boxes": visible,
        "count": len(visible),
        "totals": aggregate(boxes).to_dict(),
    }


def get_box(api: ImsApiClient, box_id: str) -> dict:
    return normalize_product(api.get_product(box_id))


def create_box(api: ImsApiClient, folder_id: str, payload: Any) -> dict:
    patch = validate_box(payload)
    if not patch.get("sku"):
        patch["sku"] = generate_sku(patch["name"])
    patch["category"] = folder_id
    for key in ("totalStock", "sold", "returned"):
        patch.setdefault(key, 0)
    patch.setdefault("price", 0.0)
    return normalize_product(api.create_product(patch))


def update_box(api: ImsApiClient, box_id: str, payload: Any, *, folder_id: Optional[str] = None) -> dict:
    patch = validate_box(payload, partial=True)
    # An empty SKU would wipe the generated one
    if "sku" in patch and not patch["sku"]:
        del patch["sku"]
    if folder_id:
        patch["category"] = folder_id
    if not patch:
        raise ValidationError("No updatable fields provided")
    return normalize_product(api.update_product(box_id, patch))


def delete_box(api: ImsApiClient, box_id: str) -> None:
    api.delete_product(box_id)
