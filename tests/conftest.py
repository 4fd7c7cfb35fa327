"""Shared pytest fixtures for fintrackr tests."""

import tempfile
import os
import time
from pathlib import Path
import pytest

from fintrackr.config import Settings
from fintrackr.database.factories import create_sqlite_database
from fintrackr.domain.auth import AuthService
from fintrackr.domain.budget import BudgetService
from fintrackr.domain.csv_import import CSVImportService
from fintrackr.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    db.session_factory.kw["bind"].dispose()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def settings():
    """Settings with a fixed test secret."""
    return Settings(secret_key="test-secret", token_expire_minutes=60)


@pytest.fixture
def auth_service(temp_db, settings):
    """Create an AuthService with a temporary database."""
    return AuthService(temp_db, settings)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a CSVImportService with a temporary database."""
    return CSVImportService(temp_db)


@pytest.fixture
def sample_user(auth_service):
    """Register a sample user."""
    _, user = auth_service.register("Test User", "test@example.com", "password123")
    return user


@pytest.fixture
def other_user(auth_service):
    """Register a second user for ownership checks."""
    _, user = auth_service.register("Other User", "other@example.com", "password123")
    return user


@pytest.fixture
def app(temp_db, settings):
    """Create the API application on the temporary database."""
    from fintrackr.api.app import create_app

    return create_app(settings=settings, database=temp_db)


@pytest.fixture
def client(app):
    """Create a FastAPI test client."""
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    """Register a user through the API and return its bearer header."""
    response = client.post(
        "/api/auth/register",
        json={"name": "Api User", "email": "api@example.com", "password": "password123"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def kolkata_timezone():
    """Run the test with the process local time zone set to UTC+05:30."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "Asia/Kolkata"
    time.tzset()
    yield
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()
