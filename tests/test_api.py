"""Tests for the Flask API in api.app."""

import pytest

from api.app import create_app
from expense_ledger.services import ExpenseLedger


@pytest.fixture
def ledger() -> ExpenseLedger:
    return ExpenseLedger()


@pytest.fixture
def client(ledger: ExpenseLedger):
    app = create_app(ledger)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def seeded(client):
    for name, amount, day in [
        ("Groceries", "42.50", "2024-01-10"),
        ("Rent", 1200.00, "2024-02-01"),
        ("Coffee", "3.75", "2024-01-20"),
    ]:
        response = client.post("/expenses", json={"name": name, "amount": amount, "date": day})
        assert response.status_code == 201
    return client


class TestExpenses:
    """Tests for /expenses."""

    def test_create_returns_record(self, client, ledger: ExpenseLedger) -> None:
        """Should append and echo the new expense."""
        response = client.post("/expenses", json={"name": "Tea", "amount": "1.5", "date": "2024-05-05"})

        assert response.status_code == 201
        assert response.get_json() == {"name": "Tea", "amount": 1.5, "date": "2024-05-05"}
        assert len(ledger) == 1

    def test_list_empty(self, client) -> None:
        """Should report an empty view with a zero total."""
        assert client.get("/expenses").get_json() == {"month": None, "items": [], "total": 0.0}

    def test_list_all(self, seeded) -> None:
        """Should list every row in insertion order."""
        body = seeded.get("/expenses").get_json()
        assert [item["name"] for item in body["items"]] == ["Groceries", "Rent", "Coffee"]
        assert body["total"] == pytest.approx(1246.25)

    def test_month_query_leaves_filter_alone(self, seeded, ledger: ExpenseLedger) -> None:
        """Should filter the read without storing the month."""
        body = seeded.get("/expenses?month=1").get_json()
        assert body["month"] == 1
        assert body["total"] == pytest.approx(46.25)
        assert ledger.month_filter is None

    @pytest.mark.parametrize(
        "payload, kind, details",
        [
            ({"name": "Tea", "amount": "lots", "date": "2024-05-05"}, "InvalidAmountError", "amount is not a number"),
            ({"name": "", "amount": "1", "date": "2024-05-05"}, "MissingRequiredFieldError", "empty name or date"),
            ({"name": "Tea", "amount": "1"}, "MissingRequiredFieldError", "empty name or date"),
            ({"name": "Tea", "amount": "1", "date": ""}, "MissingRequiredFieldError", "empty name or date"),
        ],
    )
    def test_create_rejects_invalid(self, client, ledger: ExpenseLedger, payload, kind: str, details: str) -> None:
        """Should answer 400 with the reason and keep the ledger unchanged."""
        response = client.post("/expenses", json=payload)

        assert response.status_code == 400
        body = response.get_json()
        assert body["kind"] == kind
        assert body["details"] == details
        assert len(ledger) == 0

    def test_create_rejects_amount_too_large_for_float(self, client, ledger: ExpenseLedger) -> None:
        """Should answer 400 for an integer beyond float range."""
        response = client.post("/expenses", json={"name": "x", "amount": 10**400, "date": "2024-01-01"})

        assert response.status_code == 400
        assert response.get_json()["kind"] == "InvalidAmountError"
        assert len(ledger) == 0

    def test_month_query_with_non_ascii_digit(self, seeded) -> None:
        """Should answer 400 when the month is a superscript digit."""
        response = seeded.get("/expenses", query_string={"month": "²"})
        assert response.status_code == 400
        assert response.get_json()["details"] == "month must be between 1 and 12"

    def test_create_requires_json_object(self, client) -> None:
        """Should reject a JSON body that is not an object."""
        response = client.post("/expenses", json=["Tea", "1", "2024-05-05"])
        assert response.status_code == 400
        assert response.get_json()["details"] == "JSON body must be an object"

    def test_create_rejects_malformed_date(self, client) -> None:
        """Should answer 400 for a date that cannot be read."""
        response = client.post("/expenses", json={"name": "Tea", "amount": "1", "date": "someday"})
        assert response.status_code == 400
        assert response.get_json()["kind"] == "ValidationError"

    def test_create_requires_json(self, client) -> None:
        """Should reject non-JSON bodies."""
        response = client.post("/expenses", data="name=Tea")
        assert response.status_code == 400
        assert response.get_json()["details"] == "Request content must be application/json"


class TestFilter:
    """Tests for /filter."""

    def test_set_and_clear(self, seeded, ledger: ExpenseLedger) -> None:
        """Should narrow the view then restore it."""
        body = seeded.put("/filter", json={"month": 1}).get_json()
        assert [item["name"] for item in body["items"]] == ["Groceries", "Coffee"]
        assert body["total"] == pytest.approx(46.25)
        assert seeded.get("/expenses").get_json()["month"] == 1

        body = seeded.delete("/filter").get_json()
        assert body["month"] is None
        assert body["total"] == pytest.approx(1246.25)
        assert ledger.month_filter is None

    def test_set_by_name_and_null(self, seeded) -> None:
        """Should accept month names and null."""
        assert seeded.put("/filter", json={"month": "February"}).get_json()["total"] == pytest.approx(1200.0)
        assert seeded.put("/filter", json={"month": None}).get_json()["month"] is None

    def test_out_of_range(self, seeded) -> None:
        """Should answer 400 for an invalid month."""
        response = seeded.put("/filter", json={"month": 13})
        assert response.status_code == 400
        assert response.get_json()["details"] == "month must be between 1 and 12"


class TestCors:
    """Tests for the CORS configuration."""

    def test_allowed_origin_is_echoed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should allow an origin listed in the environment."""
        monkeypatch.setenv("EXPENSE_TRACKER_ENV", "prod")
        monkeypatch.setenv("EXPENSE_TRACKER_ALLOWED_ORIGINS", "http://a.example, http://b.example")
        client = create_app(ExpenseLedger()).test_client()

        response = client.get("/expenses", headers={"Origin": "http://b.example"})
        assert response.headers.get("Access-Control-Allow-Origin") == "http://b.example"

    def test_unlisted_origin_is_not_allowed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should not allow an origin missing from the list."""
        monkeypatch.setenv("EXPENSE_TRACKER_ENV", "prod")
        monkeypatch.setenv("EXPENSE_TRACKER_ALLOWED_ORIGINS", "http://a.example")
        client = create_app(ExpenseLedger()).test_client()

        response = client.get("/expenses", headers={"Origin": "http://evil.example"})
        assert "Access-Control-Allow-Origin" not in response.headers
