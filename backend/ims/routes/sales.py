# Overview: Flask API routes for sales orders.

from flask import Blueprint, request, jsonify, g

from ..decorators import require_auth
from ..models import SALE_STATUSES
from ..responses import internal_error_response, remote_error_response
from ..services import sales_service
from ..services.api_client import RemoteApiError
from ..validation import ValidationError


sales_bp = Blueprint("sales", __name__, url_prefix="/api/sales")


@sales_bp.get("")
@require_auth
def list_sales_route():
    """
    List sales orders.

    Query params:
    - q: str (optional) - match on sale number or customer name
    """
    try:
        sales = sales_service.list_sales(g.api, query=request.args.get("q"))
        return jsonify({"sales": sales, "count": len(sales), "statuses": list(SALE_STATUSES)}), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to list sales")


@sales_bp.post("")
@require_auth
def create_sale_route():
    try:
        sale = sales_service.create_sale(g.api, request.get_json(silent=True))
        return jsonify(sale), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to create sale")


@sales_bp.get("/<sale_id>")
@require_auth
def get_sale_route(sale_id: str):
    try:
        return jsonify(sales_service.get_sale(g.api, sale_id)), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to load sale")


@sales_bp.put("/<sale_id>/status")
@require_auth
def set_sale_status_route(sale_id: str):
    """
    Move a sale to another status.

    Request body: {"status": "Shipped"}
    Any of Pending, Processing, Shipped, Completed, Cancelled, in any order.
    """
    try:
        data = request.get_json(silent=True) or {}
        sale = sales_service.set_sale_status(g.api, sale_id, data.get("status"))
        return jsonify(sale), 200
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to update sale status")


@sales_bp.delete("/<sale_id>")
@require_auth
def delete_sale_route(sale_id: str):
    try:
        sales_service.delete_sale(g.api, sale_id)
        return jsonify({"ok": True}), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to delete sale")
