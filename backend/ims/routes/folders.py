# Overview: Flask API routes for folders and the boxes inside them.

# backend/ims/routes/folders.py
"""
Folder (category) management routes.

Folder items live here too: a folder's boxes are the full box list scoped
to the folder id, filtered by status and searched by name.
"""

from flask import Blueprint, request, jsonify, g

from ..decorators import require_auth
from ..responses import internal_error_response, remote_error_response
from ..services import boxes_service, folders_service
from ..services.api_client import RemoteApiError
from ..validation import ValidationError, validate_status_filter


folders_bp = Blueprint("folders", __name__, url_prefix="/api/folders")


@folders_bp.get("")
@require_auth
def list_folders_route():
    """
    List folders.

    Query params:
    - q: str (optional) - case-insensitive match on name or description
    """
    try:
        folders = folders_service.list_folders(g.api, query=request.args.get("q"))
        return jsonify({"folders": folders, "count": len(folders)}), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to list folders")


@folders_bp.post("")
@require_auth
def create_folder_route():
    try:
        folder = folders_service.create_folder(g.api, request.get_json(silent=True))
        return jsonify(folder), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to create folder")


@folders_bp.get("/<folder_id>")
@require_auth
def get_folder_route(folder_id: str):
    try:
        return jsonify(folders_service.get_folder(g.api, folder_id)), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to load folder")


@folders_bp.put("/<folder_id>")
@require_auth
def update_folder_route(folder_id: str):
    try:
        folder = folders_service.update_folder(g.api, folder_id, request.get_json(silent=True))
        return jsonify(folder), 200
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to update folder")


@folders_bp.delete("/<folder_id>")
@require_auth
def delete_folder_route(folder_id: str):
    try:
        folders_service.delete_folder(g.api, folder_id)
        return jsonify({"ok": True}), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to delete folder")


@folders_bp.get("/<folder_id>/boxes")
@require_auth
def list_folder_boxes_route(folder_id: str):
    """
    Boxes in one folder.

    Query params:
    - status: all | inStock | sold | returned (default all)
    - q: str (optional) - case-insensitive match on box name
    """
    try:
        status_filter = validate_status_filter(request.args.get("status"))
        contents = boxes_service.fetch_folder_contents(g.api, folder_id)
        view = boxes_service.folder_items_view(
            contents,
            status_filter=status_filter,
            query=request.args.get("q"),
        )
        return jsonify(view), 200
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to list folder boxes")


@folders_bp.post("/<folder_id>/boxes")
@require_auth
def create_folder_box_route(folder_id: str):
    """
    Add a box to a folder.

    Request body:
    {
        "name": "Blue tiles",   // required
        "totalStock": 40,       // integers, default 0
        "sold": 0,
        "returned": 0,
        "price": 125.5,         // decimal, default 0
        "sku": "..."            // optional, generated when absent
    }
    """
    try:
        box = boxes_service.create_box(g.api, folder_id, request.get_json(silent=True))
        return jsonify(box), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to create box")
