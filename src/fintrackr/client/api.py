"""HTTP client for the fintrackr JSON API."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

import httpx

from fintrackr.client.view import TransactionRecord
from fintrackr.domain.errors import (
    AuthError,
    ConflictError,
    DomainError,
    NotFoundError,
    ServerError,
)
from fintrackr.utils.date_parser import parse_datetime


def record_from_json(data: dict[str, Any]) -> TransactionRecord:
    """Decode a transaction from its API representation."""
    return TransactionRecord(
        id=int(data.get("id", data.get("_id"))),
        type=data["type"],
        amount=Decimal(str(data["amount"])),
        category=data["category"],
        note=data.get("note") or "",
        date=parse_datetime(data["date"]),
    )


class ApiClient:
    """Client for one user's session against the API.

    A 401 from any endpoint clears the stored token (forcing a new login)
    and raises AuthError. Other error responses raise the DomainError
    subclass matching their status, carrying the server's message.
    """

    def __init__(self, base_url: str, token: Optional[str] = None, client: Optional[httpx.Client] = None):
        """Initialize the client.

        Args:
            base_url: API root, e.g. "http://localhost:5000/api"
            token: Bearer token from an earlier login
            client: Existing httpx client (e.g. a test client); created when omitted
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.http = client or httpx.Client()

    def close(self) -> None:
        self.http.close()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = self.http.request(method, f"{self.base_url}{path}", headers=self._headers(), **kwargs)
        if response.status_code == 401:
            self.token = None
            raise AuthError(self._message(response))
        if response.status_code == 404:
            raise NotFoundError(self._message(response))
        if response.status_code == 400:
            raise ConflictError(self._message(response))
        if response.status_code >= 500:
            raise ServerError(self._message(response))
        if response.is_error:
            raise DomainError(self._message(response))
        return response

    @staticmethod
    def _message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        message = body.get("message", response.reason_phrase)
        if body.get("error"):
            message = f"{message}: {body['error']}"
        return message

    # Auth
    def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        data = self._request(
            "POST", "/auth/register", json={"name": name, "email": email, "password": password}
        ).json()
        self.token = data["token"]
        return data["user"]

    def login(self, email: str, password: str) -> dict[str, Any]:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password}).json()
        self.token = data["token"]
        return data["user"]

    def logout(self) -> None:
        self.token = None

    def me(self) -> dict[str, Any]:
        return self._request("GET", "/auth/me").json()["user"]

    # Transactions
    def list_transactions(self) -> list[TransactionRecord]:
        return [record_from_json(item) for item in self._request("GET", "/transactions").json()]

    def create_transaction(
        self,
        type: str,
        amount: Any,
        category: str,
        note: Optional[str] = None,
        date: Optional[datetime] = None,
    ) -> TransactionRecord:
        payload: dict[str, Any] = {"type": type, "amount": str(amount), "category": category}
        if note is not None:
            payload["note"] = note
        if date is not None:
            payload["date"] = date.isoformat()
        return record_from_json(self._request("POST", "/transactions", json=payload).json())

    def update_transaction(self, transaction_id: int, **patch: Any) -> TransactionRecord:
        payload = {
            key: (value.isoformat() if isinstance(value, datetime) else value)
            for key, value in patch.items()
        }
        if isinstance(payload.get("amount"), Decimal):
            payload["amount"] = str(payload["amount"])
        return record_from_json(self._request("PUT", f"/transactions/{transaction_id}", json=payload).json())

    def delete_transaction(self, transaction_id: int) -> None:
        self._request("DELETE", f"/transactions/{transaction_id}")

    def export_csv(self) -> str:
        return self._request("GET", "/transactions/export").text

    def import_transactions(self, drafts: list[dict[str, Any]]) -> dict[str, Any]:
        return self._request("POST", "/transactions/import", json={"transactions": drafts}).json()

    # Budgets
    def set_budget(self, month: int, year: int, amount: Any) -> dict[str, Any]:
        return self._request(
            "POST", "/budgets", json={"month": month, "year": year, "amount": str(amount)}
        ).json()

    def budget_status(self, month: Optional[int] = None, year: Optional[int] = None) -> dict[str, Any]:
        params = {}
        if month is not None:
            params["month"] = month
        if year is not None:
            params["year"] = year
        return self._request("GET", "/budgets/current", params=params).json()
