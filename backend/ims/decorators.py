# Overview: Request decorators for API routes.

import hashlib
from functools import wraps
from flask import request, jsonify, g

from .extensions import remote_api


def bearer_token():
    """Token from the Authorization header, or None."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    token = auth_header.split(" ", 1)[1].strip()
    return token or None


def require_auth(f):
    """
    Require a bearer token and bind a remote API client to it.

    Sets the following Flask g attributes:
    - g.api_token: the caller's token, forwarded to the remote API as-is
    - g.api: an ImsApiClient carrying that token
    - g.caller_key: stable, non-reversible key for per-caller view state

    The token is not validated here; the remote API is authoritative and
    answers 401 for bad tokens, which is passed through.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = bearer_token()
        if not token:
            return jsonify({"error": "Authentication required"}), 401

        g.api_token = token
        g.api = remote_api.client(token)
        g.caller_key = hashlib.sha256(token.encode("utf-8")).hexdigest()

        return f(*args, **kwargs)

    return decorated_function
