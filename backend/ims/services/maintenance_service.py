# Overview: Service-layer operations for bulk maintenance of remote data.

from __future__ import annotations

import logging
from typing import Callable, Iterable

from .api_client import ImsApiClient, RemoteApiError
from .normalizer import normalize_categories, normalize_products, normalize_sales


def _delete_each(records: Iterable[dict], delete: Callable[[str], object], kind: str, logger: logging.Logger) -> dict:
    deleted = failed = 0
    for record in records:
        record_id = record.get("id")
        if not record_id:
            continue
        try:
            delete(record_id)
            deleted += 1
        except RemoteApiError as exc:
            failed += 1
            logger.warning("Failed to delete %s %s: %s", kind, record_id, exc.message)
    return {"deleted": deleted, "failed": failed}


def clear_all_data(
    api: ImsApiClient,
    *,
    logger: logging.Logger,
    sale_limit: int,
    product_limit: int,
) -> dict:
    """
    Delete every sale, then every box, then every folder.

    A record that fails to delete is logged and counted and the run carries
    on. Failing to list a collection aborts the run.
    """
    sales = normalize_sales(api.list_sales(limit=sale_limit))
    result = {"sales": _delete_each(sales, api.delete_sale, "sale", logger)}

    boxes = normalize_products(api.list_products(limit=product_limit))
    result["boxes"] = _delete_each(boxes, api.delete_product, "box", logger)

    folders = normalize_categories(api.list_categories())
    result["folders"] = _delete_each(folders, api.delete_category, "folder", logger)

    logger.info(
        "Cleared data: %s sales, %s boxes, %s folders deleted",
        result["sales"]["deleted"],
        result["boxes"]["deleted"],
        result["folders"]["deleted"],
    )
    return result
