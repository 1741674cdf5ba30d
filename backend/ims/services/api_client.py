# Overview: httpx client for the remote inventory API; one method per remote endpoint.

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx


class RemoteApiError(Exception):
    """The remote API answered with an error status."""

    def __init__(self, message: str, status_code: int = 502, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def http_status(self) -> int:
        """Status to answer our own caller with: 4xx passes through, 5xx becomes 502."""
        if 400 <= self.status_code < 500:
            return self.status_code
        return 502

    def to_dict(self) -> dict:
        return {"error": self.message}


class RemoteUnavailableError(RemoteApiError):
    """The remote API could not be reached (connection failure, timeout)."""

    def __init__(self, message: str):
        super().__init__(message, status_code=503)

    @property
    def http_status(self) -> int:
        return 503


class BearerTokenAuth(httpx.Auth):
    """Attach the stored session token to every outgoing request."""

    def __init__(self, token: Optional[str]):
        self.token = token

    def auth_flow(self, request: httpx.Request):
        if self.token:
            request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(response: httpx.Response) -> str:
    """Prefer the backend's own message, as the UI shows it verbatim."""
    body = _json_or_none(response)
    if isinstance(body, dict):
        for key in ("message", "error"):
            if body.get(key):
                return str(body[key])
    return f"Remote API returned HTTP {response.status_code}"


class ImsApiClient:
    """
    Thin proxy over the remote inventory API.

    One instance per caller token; the underlying httpx.Client (and its
    connection pool) is shared across instances.
    """

    def __init__(self, http: httpx.Client, token: Optional[str] = None):
        self.http = http
        self.token = token
        self._auth = BearerTokenAuth(token)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict] = None,
        json: Optional[Dict] = None,
    ) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}
        try:
            response = self.http.request(method, path, params=params or None, json=json, auth=self._auth)
        except httpx.TimeoutException as exc:
            raise RemoteUnavailableError("Remote API timed out") from exc
        except httpx.TransportError as exc:
            raise RemoteUnavailableError(f"Remote API unreachable: {exc}") from exc

        if response.is_error:
            raise RemoteApiError(
                _error_message(response), response.status_code, _json_or_none(response)
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteApiError("Remote API returned a non-JSON body", 502) from exc

    def get(self, path: str, params: Optional[Dict] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Optional[Dict] = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Optional[Dict] = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    # -- auth -------------------------------------------------------------

    def login(self, pin: str) -> Any:
        return self.post("/auth/login", json={"pin": pin})

    def get_profile(self) -> Any:
        return self.get("/auth/profile")

    def update_profile(self, data: dict) -> Any:
        return self.put("/auth/profile", json=data)

    def update_pin(self, current_pin: str, new_pin: str) -> Any:
        return self.put("/auth/pin", json={"currentPin": current_pin, "newPin": new_pin})

    # -- products ---------------------------------------------------------

    def list_products(self, **params) -> Any:
        return self.get("/products", params=params)

    def get_product(self, product_id: str) -> Any:
        return self.get(f"/products/{product_id}")

    def create_product(self, data: dict) -> Any:
        return self.post("/products", json=data)

    def update_product(self, product_id: str, data: dict) -> Any:
        return self.put(f"/products/{product_id}", json=data)

    def delete_product(self, product_id: str) -> Any:
        return self.delete(f"/products/{product_id}")

    def product_stats(self) -> Any:
        return self.get("/products/stats")

    # -- categories -------------------------------------------------------

    def list_categories(self) -> Any:
        return self.get("/categories")

    def get_category(self, category_id: str) -> Any:
        return self.get(f"/categories/{category_id}")

    def create_category(self, data: dict) -> Any:
        return self.post("/categories", json=data)

    def update_category(self, category_id: str, data: dict) -> Any:
        return self.put(f"/categories/{category_id}", json=data)

    def delete_category(self, category_id: str) -> Any:
        return self.delete(f"/categories/{category_id}")

    # -- sales ------------------------------------------------------------

    def list_sales(self, **params) -> Any:
        return self.get("/sales", params=params)

    def get_sale(self, sale_id: str) -> Any:
        return self.get(f"/sales/{sale_id}")

    def create_sale(self, data: dict) -> Any:
        return self.post("/sales", json=data)

    def update_sale(self, sale_id: str, data: dict) -> Any:
        return self.put(f"/sales/{sale_id}", json=data)

    def delete_sale(self, sale_id: str) -> Any:
        return self.delete(f"/sales/{sale_id}")

    # -- returns ----------------------------------------------------------

    def list_returns(self, **params) -> Any:
        return self.get("/returns", params=params)

    def list_returned_products(self, **params) -> Any:
        return self.get("/returns/products", params=params)

    def create_return(self, data: dict) -> Any:
        return self.post("/returns", json=data)

    def return_stats(self) -> Any:
        return self.get("/returns/stats")


def is_transient_error(exc: Exception) -> bool:
    """Failures worth riding out on last-known data: unreachable or 5xx."""
    return isinstance(exc, RemoteApiError) and exc.http_status >= 500
