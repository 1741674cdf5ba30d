"""
Pytest fixtures for IMS backend tests.

Provides the app wired to an in-memory fake of the remote inventory API
(through httpx.MockTransport), the Flask test client, and seed data.
"""

import itertools
import json

import httpx
import pytest

from ims import create_app
from ims.extensions import remote_api


REMOTE_BASE_URL = "http://remote.test/api"


class FakeRemoteApi:
    """
    In-memory stand-in for the remote inventory API.

    Records use "_id" like the real backend. Every request is logged in
    `requests` as (method, path, params, authorization header).
    """

    def __init__(self):
        self.token = "token-abc123"
        self.pin = "1234"
        self.profile = {"_id": "u1", "name": "Shop Owner", "email": "owner@example.com"}
        self.categories = {}
        self.products = {}
        self.sales = {}
        self.returns = []
        self.stats = {"totalStockAdded": 48, "totalSold": 19, "totalReturned": 3, "totalRemaining": 32}
        self.requests = []
        # (method, path) -> (status, body)
        self.failures = {}
        self.unreachable = False
        self._ids = itertools.count(100)

    # -- seeding ----------------------------------------------------------

    def add_category(self, _id, name, description=""):
        self.categories[_id] = {"_id": _id, "name": name, "description": description}
        return self.categories[_id]

    def add_product(self, _id, name, category, **fields):
        product = {
            "_id": _id,
            "name": name,
            "sku": f"{name}-1700000000000-abcde",
            "category": category,
            "totalStock": 0,
            "sold": 0,
            "returned": 0,
            "stock": 0,
            "price": 0,
            "status": "Out of Stock",
        }
        product.update(fields)
        self.products[_id] = product
        return product

    def add_sale(self, _id, **fields):
        sale = {"_id": _id, "status": "Pending"}
        sale.update(fields)
        self.sales[_id] = sale
        return sale

    def fail(self, method, path, status, message="Server exploded"):
        self.failures[(method, path)] = (status, {"message": message})

    def calls(self, method, path):
        return [r for r in self.requests if r[0] == method and r[1] == path]

    # -- transport --------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith("/api"):
            path = path[len("/api"):]
        method = request.method
        params = dict(request.url.params)
        self.requests.append((method, path, params, request.headers.get("Authorization")))

        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)

        if (method, path) in self.failures:
            status, body = self.failures[(method, path)]
            return httpx.Response(status, json=body)

        body = json.loads(request.content) if request.content else None

        if (method, path) == ("POST", "/auth/login"):
            if body and body.get("pin") == self.pin:
                return httpx.Response(200, json={**self.profile, "token": self.token})
            return httpx.Response(401, json={"message": "Invalid PIN"})

        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"message": "Not authorized, token failed"})

        parts = path.strip("/").split("/")
        resource, rest = parts[0], parts[1:]

        if resource == "auth":
            return self._auth(method, rest, body)
        if resource == "products":
            if rest == ["stats"]:
                return httpx.Response(200, json=self.stats)
            return self._crud(self.products, method, rest, body, params, wrap="products")
        if resource == "categories":
            return self._crud(self.categories, method, rest, body, params, wrap=None)
        if resource == "sales":
            return self._crud(self.sales, method, rest, body, params, wrap="sales")
        if resource == "returns":
            return self._returns(method, rest, body, params)
        return httpx.Response(404, json={"message": "Not found"})

    def _auth(self, method, rest, body):
        if rest == ["profile"] and method == "GET":
            return httpx.Response(200, json=self.profile)
        if rest == ["profile"] and method == "PUT":
            self.profile.update(body or {})
            return httpx.Response(200, json=self.profile)
        if rest == ["pin"] and method == "PUT":
            if body.get("currentPin") != self.pin:
                return httpx.Response(400, json={"message": "Current PIN is incorrect"})
            self.pin = body["newPin"]
            return httpx.Response(200, json={"message": "PIN updated"})
        return httpx.Response(404, json={"message": "Not found"})

    def _list_products(self, params):
        items = list(self.products.values())
        start, end = params.get("startDate"), params.get("endDate")
        if start and end:
            items = [p for p in items if start <= p.get("date", start) <= end]
        return items

    def _crud(self, store, method, rest, body, params, wrap):
        if not rest:
            if method == "GET":
                items = self._list_products(params) if store is self.products else list(store.values())
                if "limit" in params:
                    items = items[:int(params["limit"])]
                return httpx.Response(200, json={wrap: items} if wrap else items)
            if method == "POST":
                _id = f"n{next(self._ids)}"
                record = {**body, "_id": _id}
                store[_id] = record
                return httpx.Response(201, json=record)
            return httpx.Response(405, json={"message": "Method not allowed"})

        _id = rest[0]
        if _id not in store:
            return httpx.Response(404, json={"message": "Resource not found"})
        if method == "GET":
            return httpx.Response(200, json=store[_id])
        if method == "PUT":
            store[_id].update(body or {})
            return httpx.Response(200, json=store[_id])
        if method == "DELETE":
            del store[_id]
            return httpx.Response(200, json={"message": "Deleted"})
        return httpx.Response(405, json={"message": "Method not allowed"})

    def _returns(self, method, rest, body, params):
        if rest == ["products"] and method == "GET":
            keyword = (params.get("keyword") or "").lower()
            items = []
            for product in self.products.values():
                if not product.get("returned") or keyword not in product["name"].lower():
                    continue
                category = product["category"]
                category_id = category["_id"] if isinstance(category, dict) else category
                embedded = self.categories.get(category_id, {"_id": category_id, "name": ""})
                items.append({**product, "category": {"_id": embedded["_id"], "name": embedded["name"]}})
            limit = int(params.get("limit", len(items)))
            return httpx.Response(200, json={"products": items[:limit]})
        if rest == ["stats"] and method == "GET":
            return httpx.Response(200, json={"totalReturns": len(self.returns)})
        if not rest and method == "GET":
            return httpx.Response(200, json={"returns": self.returns})
        if not rest and method == "POST":
            record = {**body, "_id": f"r{next(self._ids)}"}
            self.returns.append(record)
            return httpx.Response(201, json=record)
        return httpx.Response(404, json={"message": "Not found"})


@pytest.fixture()
def remote():
    return FakeRemoteApi()


@pytest.fixture()
def app(remote):
    """Create application for testing."""
    app = create_app()
    app.config.update({
        "TESTING": True,
        "IMS_API_URL": REMOTE_BASE_URL,
        "IMS_API_TRANSPORT": httpx.MockTransport(remote.handle),
    })
    yield app
    with app.app_context():
        remote_api.close()


@pytest.fixture()
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture()
def seeded(remote):
    """Three folders, four boxes, two sales."""
    remote.add_category("c1", "Tiles", "Floor tiles")
    remote.add_category("c2", "Paint", "Wall paint")
    remote.add_category("c3", "Empty", "Configure folders")

    remote.add_product(
        "p1", "Blue tile", {"_id": "c1", "name": "Tiles"},
        totalStock=13, sold=10, returned=2, stock=5, price=100,
        status="In Stock", date="2026-10-05",
    )
    remote.add_product(
        "p2", "White tile", "c1",
        totalStock=20, sold=0, returned=0, stock=20, price=50,
        status="In Stock", date="2026-10-10",
    )
    remote.add_product(
        "p3", "Red paint", "c2",
        totalStock=5, sold=5, returned=0, stock=0, price=30,
        status="Out of Stock", date="2026-09-20",
    )
    remote.add_product(
        "p4", "Blue paint", {"_id": "c2", "name": "Paint"},
        totalStock=10, sold=4, returned=1, stock=7, price=25,
        status="Low Stock", date="2026-10-15",
    )

    remote.add_sale("s1", saleId="SO-1001", customerName="Asha Rao", totalAmount=500, status="Pending")
    remote.add_sale("s2", saleId="SO-1002", customer="Vikram", totalAmount=120.5, status="Shipped")
    return remote


@pytest.fixture()
def headers(remote):
    return auth_headers(remote.token)


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {"Authorization": f"Bearer {token}"}
