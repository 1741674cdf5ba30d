# Overview: Flask API routes for individual boxes (products).

from flask import Blueprint, request, jsonify, g

from ..decorators import require_auth
from ..responses import internal_error_response, remote_error_response
from ..services import boxes_service
from ..services.api_client import RemoteApiError
from ..validation import ValidationError, coerce_text


boxes_bp = Blueprint("boxes", __name__, url_prefix="/api/boxes")


@boxes_bp.get("")
@require_auth
def list_boxes_route():
    """Raw box list; limit/keyword are passed to the remote API."""
    try:
        boxes = boxes_service.list_boxes(
            g.api,
            limit=request.args.get("limit", type=int),
            keyword=request.args.get("keyword"),
        )
        return jsonify({"boxes": boxes, "count": len(boxes)}), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to list boxes")


@boxes_bp.get("/<box_id>")
@require_auth
def get_box_route(box_id: str):
    try:
        return jsonify(boxes_service.get_box(g.api, box_id)), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to load box")


@boxes_bp.put("/<box_id>")
@require_auth
def update_box_route(box_id: str):
    """Update a box in place; "folderId" in the body moves it to that folder."""
    try:
        payload = request.get_json(silent=True)
        folder_id = None
        if isinstance(payload, dict):
            folder_id = coerce_text("folderId", payload.get("folderId")) or None
        box = boxes_service.update_box(g.api, box_id, payload, folder_id=folder_id)
        return jsonify(box), 200
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to update box")


@boxes_bp.delete("/<box_id>")
@require_auth
def delete_box_route(box_id: str):
    try:
        boxes_service.delete_box(g.api, box_id)
        return jsonify({"ok": True}), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to delete box")
