# Overview: Flask API routes for PIN login, profile, and PIN changes.

# backend/ims/routes/auth.py
"""
Authentication routes.

The remote API owns users and sessions. Login trades a PIN for a bearer
token; the caller stores it and sends it as "Authorization: Bearer <token>"
on every other route, which forwards it unchanged.
"""

from flask import Blueprint, request, jsonify, g

from ..decorators import require_auth
from ..extensions import remote_api
from ..responses import internal_error_response, remote_error_response
from ..services import auth_service
from ..services.api_client import RemoteApiError
from ..validation import ValidationError


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/login")
def login_route():
    """
    Authenticate with a PIN.

    Request body: {"pin": "1234"}  (4 to 6 digits)

    Returns the remote login payload, including "token".
    """
    try:
        data = request.get_json(silent=True) or {}
        result = auth_service.login_with_pin(remote_api.client(), data.get("pin"))
        return jsonify(result), 200
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to login user by PIN")


@auth_bp.get("/profile")
@require_auth
def get_profile_route():
    try:
        return jsonify(auth_service.get_profile(g.api)), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to load profile")


@auth_bp.put("/profile")
@require_auth
def update_profile_route():
    try:
        result = auth_service.update_profile(g.api, request.get_json(silent=True))
        return jsonify(result or {"message": "Profile updated"}), 200
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to update profile")


@auth_bp.put("/pin")
@require_auth
def change_pin_route():
    """
    Change the current user's PIN.

    Request body:
    {
        "currentPin": "1234",
        "newPin": "5678",      // at least 4 digits
        "confirmPin": "5678"   // must match newPin
    }
    """
    try:
        auth_service.change_pin(g.api, request.get_json(silent=True))
        return jsonify({"message": "PIN changed successfully"}), 200
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to change PIN")
