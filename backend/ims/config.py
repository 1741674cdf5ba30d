# backend/ims/config.py
from __future__ import annotations
import os


def _int_env(name: str, default: int) -> int:
    return int(os.environ.get(name, str(default)))


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Remote inventory API
    IMS_API_URL = os.environ.get(
        "IMS_API_URL",  # optional alternative backend
        "https://ims-backend-bay.vercel.app/api",  # default hosted backend
    )
    IMS_API_TIMEOUT = float(os.environ.get("IMS_API_TIMEOUT", "30"))

    # Tests swap in an httpx.MockTransport here
    IMS_API_TRANSPORT = None

    # Page sizes requested from the remote list endpoints
    REPORTS_PRODUCT_LIMIT = _int_env("REPORTS_PRODUCT_LIMIT", 1000)
    RETURNS_PRODUCT_LIMIT = _int_env("RETURNS_PRODUCT_LIMIT", 100)
    CLEAR_DATA_SALE_LIMIT = _int_env("CLEAR_DATA_SALE_LIMIT", 1000)
    CLEAR_DATA_PRODUCT_LIMIT = _int_env("CLEAR_DATA_PRODUCT_LIMIT", 5000)

    VIEW_STATE_MAX_ENTRIES = _int_env("VIEW_STATE_MAX_ENTRIES", 256)
    VIEW_STATE_MAX_PER_CALLER = _int_env("VIEW_STATE_MAX_PER_CALLER", 16)

    CORS_ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            "CORS_ALLOWED_ORIGINS",
            "http://localhost:8081,http://127.0.0.1:8081,http://localhost:19006",
        ).split(",")
        if origin.strip()
    ]

    APP_VERSION = os.environ.get("APP_VERSION", "1.0.0")
