# Overview: Service-layer operations for folders (categories).

from __future__ import annotations

from typing import Any, Optional

from ..validation import ValidationError, validate_folder
from .api_client import ImsApiClient
from .filter_service import filter_categories
from .normalizer import normalize_categories, normalize_category


def list_folders(api: ImsApiClient, *, query: Optional[str] = None) -> list[dict]:
    folders = normalize_categories(api.list_categories())
    return filter_categories(folders, query)


def get_folder(api: ImsApiClient, folder_id: str) -> dict:
    return normalize_category(api.get_category(folder_id))


def create_folder(api: ImsApiClient, payload: Any) -> dict:
    patch = validate_folder(payload)
    return normalize_category(api.create_category(patch))


def update_folder(api: ImsApiClient, folder_id: str, payload: Any) -> dict:
    patch = validate_folder(payload, partial=True)
    if not patch:
        raise ValidationError("No updatable fields provided")
    return normalize_category(api.update_category(folder_id, patch))


def delete_folder(api: ImsApiClient, folder_id: str) -> None:
    # Boxes in the folder are left to the server
    api.delete_category(folder_id)
