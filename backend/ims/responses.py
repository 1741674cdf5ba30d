# Overview: Shared JSON error responses for API routes.

from flask import current_app, jsonify, request

from .services.api_client import RemoteApiError


def remote_error_response(exc: RemoteApiError):
    """Relay a remote API failure; the remote message is shown to the user."""
    current_app.logger.warning(
        "Remote API error on %s %s: HTTP %s %s",
        request.method, request.path, exc.status_code, exc.message,
    )
    return jsonify(exc.to_dict()), exc.http_status


def internal_error_response(log_message: str):
    current_app.logger.exception(log_message)
    return jsonify({"error": "Internal server error"}), 500
