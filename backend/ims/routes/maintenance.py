# Overview: Flask API routes for bulk maintenance operations.

from flask import Blueprint, jsonify, request, g, current_app

from ..decorators import require_auth
from ..extensions import view_states
from ..responses import internal_error_response, remote_error_response
from ..services import maintenance_service
from ..services.api_client import RemoteApiError


maintenance_bp = Blueprint("maintenance", __name__, url_prefix="/api/maintenance")


@maintenance_bp.post("/clear-data")
@require_auth
def clear_data_route():
    """
    Delete all sales, boxes, and folders.

    Request body: {"confirm": true}
    """
    data = request.get_json(silent=True) or {}
    if data.get("confirm") is not True:
        return jsonify({"error": "Set confirm to true to clear all data"}), 400

    try:
        result = maintenance_service.clear_all_data(
            g.api,
            logger=current_app.logger,
            sale_limit=current_app.config["CLEAR_DATA_SALE_LIMIT"],
            product_limit=current_app.config["CLEAR_DATA_PRODUCT_LIMIT"],
        )
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to clear data")

    # Last-known data would resurrect deleted records
    view_states.registry.discard_caller(g.caller_key)
    return jsonify(result), 200
