import pytest


def test_list_sales(client, seeded, headers):
    resp = client.get("/api/sales", headers=headers)
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["count"] == 2
    assert data["statuses"] == ["Pending", "Processing", "Shipped", "Completed", "Cancelled"]
    customers = {s["id"]: s["customerName"] for s in data["sales"]}
    assert customers == {"s1": "Asha Rao", "s2": "Vikram"}


@pytest.mark.parametrize("query,expected", [("so-1002", ["s2"]), ("asha", ["s1"]), ("nobody", [])])
def test_search_sales(client, seeded, headers, query, expected):
    data = client.get(f"/api/sales?q={query}", headers=headers).get_json()
    assert [s["id"] for s in data["sales"]] == expected


def test_create_sale(client, seeded, headers):
    resp = client.post(
        "/api/sales",
        json={"customerName": "Meera", "totalAmount": 99, "status": "Processing"},
        headers=headers,
    )
    assert resp.status_code == 201
    assert resp.get_json()["status"] == "Processing"


def test_create_sale_bad_status(client, seeded, headers):
    resp = client.post("/api/sales", json={"customerName": "Meera", "status": "Lost"}, headers=headers)
    assert resp.status_code == 400
    assert seeded.calls("POST", "/sales") == []


@pytest.mark.parametrize("status", ["Completed", "Pending", "Cancelled"])
def test_any_status_transition(client, seeded, headers, status):
    resp = client.put("/api/sales/s2/status", json={"status": status}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["status"] == status
    assert seeded.sales["s2"]["status"] == status


def test_unknown_status_rejected(client, seeded, headers):
    resp = client.put("/api/sales/s1/status", json={"status": "shipped"}, headers=headers)
    assert resp.status_code == 400


def test_missing_sale(client, seeded, headers):
    assert client.get("/api/sales/zzz", headers=headers).status_code == 404


def test_delete_sale(client, seeded, headers):
    assert client.delete("/api/sales/s1", headers=headers).status_code == 200
    assert "s1" not in seeded.sales
