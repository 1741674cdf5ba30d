from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .models import (
    DEFAULT_FOLDER_DESCRIPTION,
    MAX_PIN_LENGTH,
    MIN_PIN_LENGTH,
    SALE_STATUSES,
    STATUS_FILTERS,
)
from .time_utils import parse_date


# Upper bound for box prices; anything larger is a typo on the keypad
MAX_PRICE = 9_999_999.99


class ValidationError(ValueError):
    """400-level input problem."""


@dataclass(frozen=True)
class FieldPolicy:
    """
    Central policy layer:
    - writable_fields: field name -> coercer (what clients are allowed to set)
    - required_on_create: fields required for POST
    """
    writable_fields: dict[str, Callable[[str, Any], Any]]
    required_on_create: frozenset[str] = frozenset()


def coerce_text(key: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ValidationError(f"{key} must be text")
    return str(value).strip()


def coerce_count(key: str, value: Any) -> int:
    """Non-negative integer; strings must be plain digits."""
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{key} must be an integer, not a decimal")
        number = int(value)
    elif isinstance(value, str):
        stripped = value.strip()
        # Reject scientific notation (e.g., "1e5") and decimals (e.g., "12.5")
        if "e" in stripped.lower():
            raise ValidationError(f"{key} must be a plain integer (scientific notation not allowed)")
        if "." in stripped:
            raise ValidationError(f"{key} must be an integer (no decimals)")
        try:
            number = int(stripped)
        except ValueError:
            raise ValidationError(f"{key} must be an integer")
    else:
        raise ValidationError(f"{key} must be an integer")

    if number < 0:
        raise ValidationError(f"{key} cannot be negative")
    return number


def coerce_price(key: str, value: Any) -> float:
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be a number")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise ValidationError(f"{key} must be a number")
    else:
        raise ValidationError(f"{key} must be a number")

    if number != number or number in (float("inf"), float("-inf")):
        raise ValidationError(f"{key} must be a finite number")
    if number < 0:
        raise ValidationError(f"{key} cannot be negative")
    if number > MAX_PRICE:
        raise ValidationError(f"{key} cannot exceed {MAX_PRICE:,.2f}")
    return number


FOLDER_POLICY = FieldPolicy(
    writable_fields={"name": coerce_text, "description": coerce_text},
    required_on_create=frozenset({"name"}),
)

BOX_POLICY = FieldPolicy(
    writable_fields={
        "name": coerce_text,
        "sku": coerce_text,
        "totalStock": coerce_count,
        "sold": coerce_count,
        "returned": coerce_count,
        "price": coerce_price,
    },
    required_on_create=frozenset({"name"}),
)


def validate_payload(*, payload: Any, policy: FieldPolicy, partial: bool) -> dict:
    """
    Validates + normalizes incoming JSON against a policy.

    Unknown fields are dropped. partial=False enforces required_on_create;
    partial=True only checks fields that are present.
    """
    if not isinstance(payload, dict):
        raise ValidationError("JSON object body required")

    patch = {}
    for key, coerce in policy.writable_fields.items():
        if key in payload:
            patch[key] = coerce(key, payload[key])

    if not partial:
        for key in policy.required_on_create:
            if not patch.get(key):
                raise ValidationError(f"{key} is required")
    else:
        for key in policy.required_on_create:
            if key in patch and not patch[key]:
                raise ValidationError(f"{key} cannot be empty")

    return patch


def validate_folder(payload: Any, *, partial: bool = False) -> dict:
    patch = validate_payload(payload=payload, policy=FOLDER_POLICY, partial=partial)
    if not partial and not patch.get("description"):
        patch["description"] = DEFAULT_FOLDER_DESCRIPTION
    return patch


def validate_box(payload: Any, *, partial: bool = False) -> dict:
    return validate_payload(payload=payload, policy=BOX_POLICY, partial=partial)


def validate_sale_status(value: Any) -> str:
    status = coerce_text("status", value)
    if status not in SALE_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(SALE_STATUSES)}")
    return status


def validate_status_filter(value: Any) -> str:
    status = coerce_text("status", value) or "all"
    if status not in STATUS_FILTERS:
        raise ValidationError(f"status must be one of: {', '.join(STATUS_FILTERS)}")
    return status


def validate_pin(value: Any, *, field: str = "pin") -> str:
    pin = coerce_text(field, value)
    if not pin.isdigit():
        raise ValidationError(f"{field} must contain digits only")
    if len(pin) < MIN_PIN_LENGTH:
        raise ValidationError(f"PIN must be at least {MIN_PIN_LENGTH} digits")
    if len(pin) > MAX_PIN_LENGTH:
        raise ValidationError(f"PIN must be at most {MAX_PIN_LENGTH} digits")
    return pin


def validate_pin_change(payload: Any) -> tuple[str, str]:
    if not isinstance(payload, dict):
        raise ValidationError("JSON object body required")
    current_pin = coerce_text("currentPin", payload.get("currentPin"))
    if not current_pin:
        raise ValidationError("currentPin is required")
    new_pin = validate_pin(payload.get("newPin"), field="newPin")
    if "confirmPin" in payload and coerce_text("confirmPin", payload.get("confirmPin")) != new_pin:
        raise ValidationError("PINs do not match")
    return current_pin, new_pin


def validate_date_range(start: Any, end: Any) -> tuple[str, str]:
    """Both dates required as YYYY-MM-DD, start not after end."""
    if not start or not end:
        raise ValidationError("startDate and endDate are required")
    try:
        start_d = parse_date(str(start))
        end_d = parse_date(str(end))
    except ValueError:
        raise ValidationError("dates must be YYYY-MM-DD")
    if start_d is None or end_d is None:
        raise ValidationError("startDate and endDate are required")
    if start_d > end_d:
        raise ValidationError("startDate cannot be after endDate")
    return start_d.isoformat(), end_d.isoformat()
