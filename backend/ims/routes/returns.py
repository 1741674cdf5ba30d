# Overview: Flask API routes for returns and the returned-boxes view.

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_auth
from ..extensions import view_states
from ..responses import internal_error_response, remote_error_response
from ..services import returns_service
from ..services.api_client import RemoteApiError
from ..validation import ValidationError


returns_bp = Blueprint("returns", __name__, url_prefix="/api/returns")


@returns_bp.get("/boxes")
@require_auth
def returned_boxes_route():
    """
    Boxes with returns, plus totals.

    Query params:
    - q: str (optional) - sent to the remote search, then matched locally
      on box name and folder name
    - category: folder id or "all" (default)

    Returns totalReturns (units) and totalValue (units x price) over the
    listed boxes.
    """
    query = request.args.get("q", "")
    limit = current_app.config["RETURNS_PRODUCT_LIMIT"]
    try:
        snapshot = view_states.refresh(
            (g.caller_key, "returns", query),
            lambda: returns_service.fetch_returned_boxes(g.api, keyword=query, limit=limit),
        )
        view = returns_service.returns_view(
            snapshot.data,
            category_filter=request.args.get("category"),
            query=query,
        )
        view["stale"] = snapshot.stale
        return jsonify(view), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to load returned boxes")


@returns_bp.get("")
@require_auth
def list_returns_route():
    try:
        result = returns_service.list_returns(
            g.api,
            keyword=request.args.get("keyword"),
            limit=request.args.get("limit", type=int),
        )
        return jsonify(result), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to list returns")


@returns_bp.post("")
@require_auth
def create_return_route():
    try:
        result = returns_service.create_return(g.api, request.get_json(silent=True))
        return jsonify(result), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to create return")


@returns_bp.get("/stats")
@require_auth
def return_stats_route():
    try:
        return jsonify(returns_service.return_stats(g.api)), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to load return stats")
