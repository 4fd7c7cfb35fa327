"""End-to-end tests for the JSON API."""

import pytest


def _create(client, headers, **overrides):
    payload = {"type": "expense", "amount": 50, "category": "Food", "note": "", "date": "2025-01-05"}
    payload.update(overrides)
    response = client.post("/api/transactions", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def second_headers(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Second", "email": "second@example.com", "password": "password123"},
    )
    return {"Authorization": f"Bearer {response.json()['token']}"}


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "FinTrackr API running successfully!"}


def test_unknown_route(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"message": "Route not found"}


class TestAuthRoutes:
    def test_register(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "New", "email": "NEW@example.com", "password": "secret"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "new@example.com"
        assert "password" not in body["user"]
        assert "passwordHash" not in body["user"]

    def test_register_duplicate(self, client, auth_headers):
        response = client.post(
            "/api/auth/register",
            json={"name": "Dup", "email": "api@example.com", "password": "other"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "User already exists"}

    def test_register_missing_fields_is_server_error(self, client):
        response = client.post("/api/auth/register", json={})

        assert response.status_code == 500
        assert response.json()["message"] == "Server error"
        assert response.json()["error"]

    def test_login(self, client, auth_headers):
        response = client.post(
            "/api/auth/login", json={"email": "api@example.com", "password": "password123"}
        )

        assert response.status_code == 200
        assert response.json()["user"]["lastLogin"] is not None

    @pytest.mark.parametrize(
        "email,password",
        [("api@example.com", "wrong"), ("nobody@example.com", "password123")],
    )
    def test_login_invalid(self, client, auth_headers, email, password):
        response = client.post("/api/auth/login", json={"email": email, "password": password})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid credentials"}

    def test_me(self, client, auth_headers):
        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Api User"

    def test_me_without_token(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json() == {"message": "No token, authorization denied"}

    def test_me_with_bad_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401
        assert response.json() == {"message": "Token is not valid"}

    def test_protected_routes_need_token(self, client):
        assert client.get("/api/transactions").status_code == 401
        assert client.get("/api/budgets/current").status_code == 401
        assert client.get("/api/transactions/export").status_code == 401


class TestTransactionRoutes:
    def test_create(self, client, auth_headers):
        body = _create(client, auth_headers, note="Lunch")

        assert body["_id"] == body["id"]
        assert body["type"] == "expense"
        assert body["amount"] == 50
        assert body["category"] == "Food"
        assert body["note"] == "Lunch"
        assert body["date"].startswith("2025-01-05")
        assert "createdAt" in body and "updatedAt" in body

    def test_create_invalid_type_is_server_error(self, client, auth_headers):
        response = client.post(
            "/api/transactions",
            json={"type": "gift", "amount": 5, "category": "Misc"},
            headers=auth_headers,
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Server error"

    def test_create_missing_fields_is_server_error(self, client, auth_headers):
        response = client.post("/api/transactions", json={}, headers=auth_headers)

        assert response.status_code == 500

    def test_list_newest_first_and_scoped(self, client, auth_headers, second_headers):
        _create(client, auth_headers, category="Old", date="2025-01-01")
        _create(client, auth_headers, category="New", date="2025-03-01")
        _create(client, second_headers, category="Theirs")

        response = client.get("/api/transactions", headers=auth_headers)

        assert response.status_code == 200
        assert [t["category"] for t in response.json()] == ["New", "Old"]

    def test_update(self, client, auth_headers):
        created = _create(client, auth_headers)

        response = client.put(
            f"/api/transactions/{created['id']}",
            json={"amount": 75, "note": "Dinner", "userId": 999},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["amount"] == 75
        assert body["note"] == "Dinner"
        assert body["category"] == "Food"
        assert body["userId"] == created["userId"]

    def test_update_other_users_transaction(self, client, auth_headers, second_headers):
        created = _create(client, auth_headers)

        response = client.put(
            f"/api/transactions/{created['id']}", json={"amount": 1}, headers=second_headers
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Transaction not found"}

    def test_delete_twice(self, client, auth_headers):
        created = _create(client, auth_headers)
        url = f"/api/transactions/{created['id']}"

        first = client.delete(url, headers=auth_headers)
        second = client.delete(url, headers=auth_headers)

        assert first.status_code == 200
        assert first.json() == {"message": "Transaction deleted"}
        assert second.status_code == 404
        assert second.json() == {"message": "Transaction not found"}

    def test_delete_other_users_transaction(self, client, auth_headers, second_headers):
        created = _create(client, auth_headers)

        response = client.delete(f"/api/transactions/{created['id']}", headers=second_headers)

        assert response.status_code == 404
        assert len(client.get("/api/transactions", headers=auth_headers).json()) == 1


class TestExportImportRoutes:
    def test_export_empty(self, client, auth_headers):
        response = client.get("/api/transactions/export", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"message": "No transactions found to export"}

    def test_export(self, client, auth_headers):
        _create(client, auth_headers, note="Lunch, with team")

        response = client.get("/api/transactions/export", headers=auth_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        disposition = response.headers["content-disposition"]
        assert disposition.startswith("attachment; filename=transactions-")
        assert disposition.endswith(".csv")
        lines = response.text.split("\n")
        assert lines[0] == "Date,Type,Amount,Category,Note"
        assert lines[1].endswith('"expense","50","Food","Lunch, with team"')

    def test_import_with_failures(self, client, auth_headers):
        rows = [
            {"type": "expense", "amount": "12.50", "category": "Food", "date": "2025-02-01"},
            {"type": "expense", "amount": "-3", "category": "Bad"},
            {"type": "income", "amount": "100", "category": "Salary", "note": "Feb"},
        ]

        response = client.post("/api/transactions/import", json={"transactions": rows}, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["importedCount"] == 2
        assert body["message"] == "Imported 2 transactions successfully"
        assert body["errors"] == ["Failed to import: Bad - -3"]
        categories = {t["category"] for t in client.get("/api/transactions", headers=auth_headers).json()}
        assert categories == {"Food", "Salary"}

    def test_import_loosely_typed_rows(self, client, auth_headers):
        rows = [
            {"type": "expense", "amount": 20, "category": "Food", "note": 5, "date": 1736035200000},
            {"type": "expense", "amount": 10, "category": "Broken", "date": {"when": "soon"}},
        ]

        response = client.post("/api/transactions/import", json={"transactions": rows}, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["importedCount"] == 1
        assert body["errors"] == ["Failed to import: Broken - 10"]
        stored = client.get("/api/transactions", headers=auth_headers).json()
        assert [(t["category"], t["note"]) for t in stored] == [("Food", "5")]

    def test_import_malformed_body_hides_source_location(self, client, auth_headers):
        response = client.post("/api/transactions/import", json={"transactions": "nope"}, headers=auth_headers)

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Server error"
        assert body["error"].startswith("body.transactions: ")
        assert "File" not in body["error"]
        assert ".py" not in body["error"]

    def test_import_empty_batch(self, client, auth_headers):
        response = client.post("/api/transactions/import", json={"transactions": []}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["importedCount"] == 0
        assert response.json()["errors"] == []


class TestBudgetRoutes:
    def test_set_budget(self, client, auth_headers):
        response = client.post(
            "/api/budgets", json={"month": 1, "year": 2025, "amount": 500}, headers=auth_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["month"] == 1
        assert body["year"] == 2025
        assert body["amount"] == 500

    def test_set_budget_replaces(self, client, auth_headers):
        client.post("/api/budgets", json={"month": 1, "year": 2025, "amount": 500}, headers=auth_headers)
        client.post("/api/budgets", json={"month": 1, "year": 2025, "amount": 800}, headers=auth_headers)

        budgets = client.get("/api/budgets", headers=auth_headers).json()

        assert len(budgets) == 1
        assert budgets[0]["amount"] == 800

    def test_set_budget_invalid_month_is_server_error(self, client, auth_headers):
        response = client.post(
            "/api/budgets", json={"month": 13, "year": 2025, "amount": 500}, headers=auth_headers
        )

        assert response.status_code == 500

    def test_status_ok(self, client, auth_headers):
        client.post("/api/budgets", json={"month": 1, "year": 2025, "amount": 500}, headers=auth_headers)
        _create(client, auth_headers, amount=120, date="2025-01-03")
        _create(client, auth_headers, amount=90, date="2025-01-20")
        _create(client, auth_headers, type="income", amount=1000, date="2025-01-10")
        _create(client, auth_headers, amount=400, date="2025-02-01")

        response = client.get("/api/budgets/current?month=1&year=2025", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["spent"] == 210
        assert body["remaining"] == 290
        assert body["percentage"] == 42
        assert body["budget"]["amount"] == 500

    def test_status_over_budget(self, client, auth_headers):
        client.post("/api/budgets", json={"month": 3, "year": 2025, "amount": 100}, headers=auth_headers)
        _create(client, auth_headers, amount=150, date="2025-03-15")

        body = client.get("/api/budgets/current?month=3&year=2025", headers=auth_headers).json()

        assert body["status"] == "over-budget"
        assert body["remaining"] == -50
        assert body["percentage"] == 150

    def test_status_uses_local_month_for_utc_timestamps(self, client, auth_headers, kolkata_timezone):
        client.post("/api/budgets", json={"month": 2, "year": 2025, "amount": 100}, headers=auth_headers)
        # 2025-02-01 00:30 in UTC+05:30
        _create(client, auth_headers, amount=50, date="2025-01-31T19:00:00.000Z")

        february = client.get("/api/budgets/current?month=2&year=2025", headers=auth_headers).json()
        january = client.get("/api/budgets/current?month=1&year=2025", headers=auth_headers).json()

        assert february["spent"] == 50
        assert february["percentage"] == 50
        assert january["spent"] == 0

    def test_sub_cent_budget_is_rejected(self, client, auth_headers):
        response = client.post(
            "/api/budgets", json={"month": 1, "year": 2025, "amount": "0.004"}, headers=auth_headers
        )

        assert response.status_code == 500
        assert client.get("/api/budgets", headers=auth_headers).json() == []

    def test_status_without_budget(self, client, auth_headers):
        _create(client, auth_headers, amount=30, date="2025-04-02")

        body = client.get("/api/budgets/current?month=4&year=2025", headers=auth_headers).json()

        assert body["status"] == "no-budget"
        assert body["spent"] == 30
        assert "budget" not in body
        assert "percentage" not in body
