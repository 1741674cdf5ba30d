# Overview: Flask extension instances for the remote API connection and per-view state.

from __future__ import annotations

import threading
from typing import Any, Callable, Hashable, Optional

import httpx
from flask import Flask, current_app

from .services.api_client import ImsApiClient, is_transient_error
from .services.view_state import ViewSnapshot, ViewStateRegistry


class RemoteApi:
    """
    Owns one pooled httpx.Client per application.

    The client is built lazily so tests can set IMS_API_TRANSPORT after
    create_app() and before the first request.
    """

    def __init__(self, app: Optional[Flask] = None):
        self._lock = threading.Lock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        app.extensions["ims_remote_api"] = {"http": None}

    def _state(self, app: Flask) -> dict:
        return app.extensions["ims_remote_api"]

    def http_client(self, app: Optional[Flask] = None) -> httpx.Client:
        app = app or current_app._get_current_object()
        state = self._state(app)
        if state["http"] is None:
            with self._lock:
                if state["http"] is None:
                    state["http"] = self._build(app)
        return state["http"]

    def _build(self, app: Flask) -> httpx.Client:
        logger = app.logger

        def log_response(response: httpx.Response) -> None:
            request = response.request
            logger.debug(
                "remote %s %s -> %s", request.method, request.url, response.status_code
            )

        return httpx.Client(
            base_url=app.config["IMS_API_URL"],
            timeout=app.config["IMS_API_TIMEOUT"],
            headers={"Content-Type": "application/json"},
            transport=app.config.get("IMS_API_TRANSPORT"),
            event_hooks={"response": [log_response]},
        )

    def client(self, token: Optional[str] = None) -> ImsApiClient:
        """API client bound to the caller's bearer token."""
        return ImsApiClient(self.http_client(), token=token)

    def close(self, app: Optional[Flask] = None) -> None:
        app = app or current_app._get_current_object()
        state = self._state(app)
        if state["http"] is not None:
            state["http"].close()
            state["http"] = None


class ViewStates:
    """Per-application registry of sequenced view state."""

    def init_app(self, app: Flask) -> None:
        app.extensions["ims_view_states"] = ViewStateRegistry(
            max_entries=app.config["VIEW_STATE_MAX_ENTRIES"],
            max_per_caller=app.config["VIEW_STATE_MAX_PER_CALLER"],
        )

    @property
    def registry(self) -> ViewStateRegistry:
        return current_app.extensions["ims_view_states"]

    def refresh(self, key: Hashable, fetch: Callable[[], Any]) -> ViewSnapshot:
        """Sequenced fetch for one view; transient failures fall back to last-known data."""
        return self.registry.get(key).refresh(
            fetch,
            serve_stale_if=is_transient_error,
            logger=current_app.logger,
        )


remote_api = RemoteApi()
view_states = ViewStates()
