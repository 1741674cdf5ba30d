# backend/ims/routes/system.py
"""
System health and version endpoints.

Health reports this service and whether the remote inventory API answers.
"""

import time
from flask import Blueprint, current_app, jsonify

import httpx

from ..extensions import remote_api

system_bp = Blueprint("system", __name__, url_prefix="/api")


def check_remote_api_health() -> dict:
    """
    Probe the remote API base URL.

    Any HTTP answer (even 401/404) means the API is reachable; only
    transport failures count as unhealthy.
    """
    start_time = time.time()
    try:
        response = remote_api.http_client().get("/")
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy" if response.status_code < 500 else "degraded",
            "latency_ms": round(elapsed_ms, 2),
            "http_status": response.status_code,
        }
    except httpx.HTTPError:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Remote API health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Remote API unreachable",
        }


@system_bp.get("/health")
def health():
    remote = check_remote_api_health()
    overall = "healthy" if remote["status"] == "healthy" else remote["status"]
    status_code = 503 if overall == "unhealthy" else 200
    return jsonify({
        "status": overall,
        "checks": {"remote_api": remote},
    }), status_code


@system_bp.get("/version")
def version():
    return jsonify({
        "version": current_app.config["APP_VERSION"],
        "remote_api": current_app.config["IMS_API_URL"],
    }), 200
