"""
Dashboard, monthly report, and search route tests.

Seeded boxes (price x sold/returned/stock):
  p1 Blue tile   Tiles  100 x 10/2/5   In Stock      2026-10-05
  p2 White tile  Tiles   50 x  0/0/20  In Stock      2026-10-10
  p3 Red paint   Paint   30 x  5/0/0   Out of Stock  2026-09-20
  p4 Blue paint  Paint   25 x  4/1/7   Low Stock     2026-10-15
"""

import pytest

from ims.time_utils import current_month_range, month_label


SEP_OCT = "startDate=2026-09-01&endDate=2026-10-31"
OCT = "startDate=2026-10-01&endDate=2026-10-31"


# =============================================================================
# DASHBOARD
# =============================================================================


class TestDashboard:
    def test_cards(self, client, seeded, headers):
        resp = client.get("/api/dashboard", headers=headers)
        assert resp.status_code == 200
        assert resp.get_json() == {
            "totalStockAdded": 48,
            "totalSold": 19,
            "totalReturned": 3,
            "totalRemaining": 32,
            "stale": False,
        }

    def test_missing_cards_read_as_zero(self, client, seeded, headers):
        seeded.stats = {"totalSold": "7"}
        data = client.get("/api/dashboard", headers=headers).get_json()
        assert data["totalSold"] == 7
        assert data["totalStockAdded"] == 0

    def test_serves_last_known_on_server_error(self, client, seeded, headers):
        client.get("/api/dashboard", headers=headers)
        seeded.fail("GET", "/products/stats", 500)
        resp = client.get("/api/dashboard", headers=headers)
        assert resp.status_code == 200
        assert resp.get_json()["stale"] is True
        assert resp.get_json()["totalSold"] == 19

    def test_serves_last_known_when_unreachable(self, client, seeded, headers):
        client.get("/api/dashboard", headers=headers)
        seeded.unreachable = True
        assert client.get("/api/dashboard", headers=headers).get_json()["stale"] is True

    def test_server_error_without_prior_data(self, client, seeded, headers):
        seeded.fail("GET", "/products/stats", 500)
        resp = client.get("/api/dashboard", headers=headers)
        assert resp.status_code == 502
        assert resp.get_json() == {"error": "Server exploded"}

    def test_unreachable_without_prior_data(self, client, seeded, headers):
        seeded.unreachable = True
        assert client.get("/api/dashboard", headers=headers).status_code == 503

    def test_auth_failure_is_never_masked(self, client, seeded, headers):
        client.get("/api/dashboard", headers=headers)
        seeded.fail("GET", "/products/stats", 401, "Not authorized, token failed")
        assert client.get("/api/dashboard", headers=headers).status_code == 401


# =============================================================================
# MONTHLY REPORT
# =============================================================================


class TestMonthlyReport:
    def test_all_folders(self, client, seeded, headers):
        resp = client.get("/api/reports/monthly", headers=headers)
        assert resp.status_code == 200
        report = resp.get_json()
        assert report["title"] == month_label()
        assert report["scope"] == "All folders"
        assert report["category"] == "all"
        totals = report["totals"]
        assert totals["totalBoxes"] == 4
        assert totals["soldBoxes"] == 19
        assert totals["returnedBoxes"] == 3
        assert totals["remainingBoxes"] == 32
        assert totals["soldValue"] == pytest.approx(1250)
        assert totals["returnedValue"] == pytest.approx(225)
        assert totals["remainingValue"] == pytest.approx(1675)
        assert totals["netValue"] == pytest.approx(1025)
        assert totals["returnRate"] == pytest.approx(3 / 19 * 100)
        assert report["display"]["returnRate"] == "15.79"
        assert report["display"]["netValue"] == "1025.00"
        assert report["stale"] is False

    def test_requests_product_limit(self, client, seeded, headers):
        client.get("/api/reports/monthly", headers=headers)
        assert seeded.calls("GET", "/products")[0][2] == {"limit": "1000"}

    def test_single_folder(self, client, seeded, headers):
        report = client.get("/api/reports/monthly?category=c1", headers=headers).get_json()
        assert report["scope"] == "Tiles"
        totals = report["totals"]
        assert totals["totalBoxes"] == 2
        assert totals["soldBoxes"] == 10
        assert totals["remainingBoxes"] == 25
        assert totals["remainingValue"] == pytest.approx(1500)
        assert totals["netValue"] == pytest.approx(800)
        assert report["display"]["returnRate"] == "20.00"

    def test_empty_folder(self, client, seeded, headers):
        report = client.get("/api/reports/monthly?category=c3", headers=headers).get_json()
        assert report["totals"]["totalBoxes"] == 0
        assert report["totals"]["returnRate"] == 0
        assert report["display"]["soldValue"] == "0.00"

    def test_unknown_folder(self, client, seeded, headers):
        report = client.get("/api/reports/monthly?category=gone", headers=headers).get_json()
        assert report["scope"] == "Selected folder"
        assert report["totals"]["totalBoxes"] == 0

    def test_folder_picker(self, client, seeded, headers):
        report = client.get("/api/reports/monthly", headers=headers).get_json()
        assert report["folders"] == [
            {"id": "c1", "name": "Tiles"},
            {"id": "c2", "name": "Paint"},
            {"id": "c3", "name": "Empty"},
        ]


# =============================================================================
# SEARCH
# =============================================================================


class TestSearch:
    def test_defaults_to_current_month(self, client, seeded, headers):
        resp = client.get("/api/search", headers=headers)
        assert resp.status_code == 200
        start, end = current_month_range()
        assert seeded.calls("GET", "/products")[0][2] == {"startDate": start, "endDate": end}
        assert resp.get_json()["startDate"] == start

    def test_range_totals(self, client, seeded, headers):
        data = client.get(f"/api/search?{OCT}", headers=headers).get_json()
        assert data["found"] == 3
        totals = data["totals"]
        assert totals["soldBoxes"] == 14
        assert totals["soldValue"] == pytest.approx(1100)
        assert totals["returnedValue"] == pytest.approx(225)
        assert totals["remainingValue"] == pytest.approx(1675)
        assert totals["netValue"] == pytest.approx(875)
        assert data["display"]["returnRate"] == "21.43"

    @pytest.mark.parametrize(
        "status,expected",
        [
            ("all", ["p1", "p2", "p3", "p4"]),
            ("inStock", ["p1", "p2", "p4"]),
            ("sold", ["p1", "p3", "p4"]),
            ("returned", ["p1", "p4"]),
        ],
    )
    def test_status_filter(self, client, seeded, headers, status, expected):
        data = client.get(f"/api/search?{SEP_OCT}&status={status}", headers=headers).get_json()
        assert [b["id"] for b in data["items"]] == expected
        assert data["count"] == len(expected)
        # Totals ignore the list filters
        assert data["totals"]["totalBoxes"] == 4

    def test_query_matches_folder_name(self, client, seeded, headers):
        data = client.get(f"/api/search?{SEP_OCT}&q=TILES", headers=headers).get_json()
        assert [b["id"] for b in data["items"]] == ["p1", "p2"]

    def test_category_then_query(self, client, seeded, headers):
        data = client.get(f"/api/search?{SEP_OCT}&category=c2&q=blue", headers=headers).get_json()
        assert [b["id"] for b in data["items"]] == ["p4"]

    @pytest.mark.parametrize(
        "query,error",
        [
            ("startDate=2026-10-31&endDate=2026-10-01", "startDate cannot be after endDate"),
            ("startDate=10/01/2026&endDate=2026-10-31", "dates must be YYYY-MM-DD"),
            ("startDate=2026-13-01&endDate=2026-10-31", "dates must be YYYY-MM-DD"),
            (f"{OCT}&status=lost", "status must be one of: all, inStock, sold, returned"),
        ],
    )
    def test_invalid_params(self, client, seeded, headers, query, error):
        resp = client.get(f"/api/search?{query}", headers=headers)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == error
        assert seeded.calls("GET", "/products") == []

    def test_range_served_stale_on_outage(self, client, seeded, headers):
        client.get(f"/api/search?{OCT}", headers=headers)
        seeded.fail("GET", "/categories", 503)
        data = client.get(f"/api/search?{OCT}", headers=headers).get_json()
        assert data["stale"] is True
        assert data["found"] == 3

    def test_other_range_has_no_stale_data(self, client, seeded, headers):
        client.get(f"/api/search?{OCT}", headers=headers)
        seeded.fail("GET", "/categories", 503)
        assert client.get(f"/api/search?{SEP_OCT}", headers=headers).status_code == 502
