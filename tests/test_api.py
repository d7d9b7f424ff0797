"""
Tests for the HTTP transport.
"""

import pytest
from fastapi.testclient import TestClient

from dailyspend.api import create_api
from dailyspend.services.storage import InMemoryRecordStore
from dailyspend.services.transfer import CSV_HEADER
from dailyspend.tracker import ExpenseTracker


@pytest.fixture
def client():
    return TestClient(create_api(ExpenseTracker(InMemoryRecordStore())))


@pytest.fixture
def food_day(client):
    """Create the Food/Transport/Coffee day; returns (food, transport) ids."""
    food = client.post("/api/categories", json={"name": "Food", "color": "#EF4444"}).json()
    transport = client.post("/api/categories", json={"name": "Transport", "color": "#3B82F6"}).json()
    for name, amount, category in [
        ("Lunch", "12.50", food),
        ("Bus", 4, transport),
        ("Coffee", "3.25", food),
    ]:
        response = client.post("/api/expenses", json={
            "name": name,
            "amount": amount,
            "date": "2024-01-15",
            "categoryId": category["id"],
        })
        assert response.status_code == 200
    return food["id"], transport["id"]


class TestCategoryRoutes:
    """Tests for /api/categories."""

    def test_create_and_list(self, client):
        """Test creating a category and reading it back."""
        response = client.post("/api/categories", json={"name": "Food", "color": "#EF4444"})
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Food"
        assert "createdAt" in body

        assert client.get("/api/categories").json() == [body]

    def test_invalid_category(self, client):
        """Test that a missing name answers 400 with a message."""
        response = client.post("/api/categories", json={"color": "#EF4444"})
        assert response.status_code == 400
        assert response.json()["field"] == "name"

    def test_delete(self, client, food_day):
        """Test deleting a category detaches its expenses."""
        food_id, _ = food_day
        assert client.delete(f"/api/categories/{food_id}").json() == {"success": True}

        expenses = client.get("/api/expenses", params={"date": "2024-01-15"}).json()
        assert len(expenses) == 3
        assert [e["categoryId"] for e in expenses if e["name"] == "Lunch"] == [None]

    def test_delete_unknown(self, client):
        """Test that deleting an unknown id still succeeds."""
        assert client.delete("/api/categories/nope").json() == {"success": True}


class TestExpenseRoutes:
    """Tests for /api/expenses."""

    def test_create_expense(self, client):
        """Test the response shape and normalized amount."""
        response = client.post("/api/expenses", json={
            "name": "Lunch", "amount": "12.5", "date": "2024-01-15",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["amount"] == "12.50"
        assert body["categoryId"] is None

    @pytest.mark.parametrize("payload", [
        {"amount": "5", "date": "2024-01-15"},
        {"name": "Lunch", "amount": "-5", "date": "2024-01-15"},
        {"name": "Lunch", "amount": "5"},
        {"name": "Lunch", "amount": "5", "date": "15/01/2024"},
        {"name": "Lunch", "amount": True, "date": "2024-01-15"},
        {"name": "Lunch", "amount": "1e30", "date": "2024-01-15"},
        {"name": "Lunch", "amount": "NaN", "date": "2024-01-15"},
    ])
    def test_invalid_expense(self, client, payload):
        """Test that invalid expenses answer 400 and are not stored."""
        response = client.post("/api/expenses", json=payload)
        assert response.status_code == 400
        assert "message" in response.json()
        assert client.get("/api/expenses").json() == []

    def test_list_filters(self, client, food_day):
        """Test date and range query parameters."""
        client.post("/api/expenses", json={"name": "Old", "amount": "1", "date": "2024-01-01"})

        by_date = client.get("/api/expenses", params={"date": "2024-01-15"}).json()
        assert [e["name"] for e in by_date] == ["Lunch", "Bus", "Coffee"]
        assert by_date[0]["category"]["name"] == "Food"

        in_range = client.get("/api/expenses", params={
            "startDate": "2024-01-01", "endDate": "2024-01-10",
        }).json()
        assert [e["name"] for e in in_range] == ["Old"]

        assert len(client.get("/api/expenses").json()) == 4

    def test_delete_expense(self, client):
        """Test deleting an expense."""
        expense = client.post("/api/expenses", json={
            "name": "Lunch", "amount": "5", "date": "2024-01-15",
        }).json()
        assert client.delete(f"/api/expenses/{expense['id']}").json() == {"success": True}
        assert client.get("/api/expenses").json() == []


class TestAnalyticsRoutes:
    """Tests for /api/analytics."""

    def test_daily_total(self, client, food_day):
        """Test the daily total as a JSON number."""
        response = client.get("/api/analytics/daily-total", params={"date": "2024-01-15"})
        assert response.json() == {"total": 19.75}

    def test_category_totals(self, client, food_day):
        """Test per-category rows."""
        food_id, transport_id = food_day
        rows = client.get("/api/analytics/category-totals", params={"date": "2024-01-15"}).json()
        assert [(r["categoryId"], r["total"]) for r in rows] == [(food_id, 15.75), (transport_id, 4.0)]

    def test_weekly_totals(self, client, food_day):
        """Test the dense weekly series."""
        rows = client.get("/api/analytics/weekly-totals", params={"date": "2024-01-15"}).json()
        assert len(rows) == 7
        assert rows[0] == {"date": "2024-01-09", "total": 0.0}
        assert rows[-1] == {"date": "2024-01-15", "total": 19.75}

    def test_monthly_totals(self, client, food_day):
        """Test the sparse monthly series."""
        rows = client.get("/api/analytics/monthly-totals", params={"year": 2024, "month": 1}).json()
        assert rows == [{"date": "2024-01-15", "total": 19.75}]

    def test_monthly_summary(self, client, food_day):
        """Test the month summary."""
        body = client.get("/api/analytics/monthly-summary", params={"year": 2024, "month": 1}).json()
        assert body["total"] == 19.75
        assert body["daysWithSpending"] == 1
        assert body["highestDay"]["date"] == "2024-01-15"

    @pytest.mark.parametrize("path,params", [
        ("/api/analytics/daily-total", {}),
        ("/api/analytics/category-totals", {}),
        ("/api/analytics/weekly-totals", {}),
        ("/api/analytics/monthly-totals", {"year": 2024}),
        ("/api/analytics/monthly-totals", {"year": 2024, "month": 13}),
    ])
    def test_missing_parameters(self, client, path, params):
        """Test 400 with a message for missing or bad query parameters."""
        response = client.get(path, params=params)
        assert response.status_code == 400
        assert response.json()["message"]


class TestTransferRoutes:
    """Tests for CSV export and import."""

    def test_export_then_import(self, client, food_day):
        """Test that an export can be imported back."""
        response = client.get("/api/export.csv")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "daily-spends-export-" in response.headers["content-disposition"]

        other = TestClient(create_api(ExpenseTracker(InMemoryRecordStore())))
        result = other.post("/api/import", content=response.text.encode("utf-8"))
        assert result.json() == {"categories": 2, "expenses": 3}
        assert other.get("/api/analytics/daily-total", params={"date": "2024-01-15"}).json() == {"total": 19.75}

    def test_import_rejects_empty_file(self, client):
        """Test that an empty upload answers 400."""
        response = client.post("/api/import", content=b"")
        assert response.status_code == 400

    def test_import_rejects_unknown_category(self, client, food_day):
        """Test that a dangling category link answers 400 and keeps data."""
        text = ",".join(CSV_HEADER) + "\nexpense,e1,,,,Lunch,12.50,,gone,,2024-01-15,\n"
        response = client.post("/api/import", content=text.encode("utf-8"))
        assert response.status_code == 400
        assert "unknown category" in response.json()["message"]
        assert len(client.get("/api/expenses").json()) == 3


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"
