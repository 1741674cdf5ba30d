# Overview: Service-layer operations for PIN authentication and the user profile.

from __future__ import annotations

from typing import Any

from ..validation import ValidationError, coerce_text, validate_pin, validate_pin_change
from .api_client import ImsApiClient, RemoteApiError


PROFILE_FIELDS = ("fullName", "name", "email")


def login_with_pin(api: ImsApiClient, pin: Any) -> dict:
    """
    Exchange a PIN for a session token.

    The PIN is checked locally (4 to 6 digits) before any network call.
    Returns the remote payload, which always includes "token".
    """
    pin = validate_pin(pin)
    data = api.login(pin)
    if not isinstance(data, dict) or not data.get("token"):
        raise RemoteApiError("Login response did not include a token", 502, data)
    return data


def get_profile(api: ImsApiClient) -> dict:
    data = api.get_profile()
    data = data if isinstance(data, dict) else {}
    return {
        "fullName": data.get("fullName") or data.get("name") or "",
        "email": data.get("email") or "",
    }


def update_profile(api: ImsApiClient, payload: Any) -> Any:
    if not isinstance(payload, dict):
        raise ValidationError("JSON object body required")
    patch = {k: coerce_text(k, payload[k]) for k in PROFILE_FIELDS if k in payload}
    if not patch:
        raise ValidationError(f"Provide at least one of: {', '.join(PROFILE_FIELDS)}")
    return api.update_profile(patch)


def change_pin(api: ImsApiClient, payload: Any) -> Any:
    current_pin, new_pin = validate_pin_change(payload)
    return api.update_pin(current_pin, new_pin)
