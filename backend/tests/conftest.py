"""Pytest configuration and fixtures."""

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Generator, List, Tuple

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app
_TEST_DB_DIR = tempfile.mkdtemp(prefix="inventory-cogs-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_TEST_DB_DIR) / 'test.db'}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["FRONTEND_URL"] = "http://testserver/sign-in"
os.environ["SMTP_SUPPRESS_SEND"] = "true"

TEST_SECRET = "test-secret"
TEST_EMAIL = "barista@example.com"


class RecordingMailer:
    """Stands in for MagicLinkMailer and keeps every link it was asked to send."""

    def __init__(self):
        self.sent: List[Tuple[str, str]] = []

    async def send(self, address: str, link: str) -> None:
        self.sent.append((address, link))


@pytest.fixture
def reset_database():
    """Drop and recreate every table."""
    from db.database import create_db_and_tables, drop_db_and_tables

    async def _reset():
        await drop_db_and_tables()
        await create_db_and_tables()

    asyncio.run(_reset())


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def api_client(reset_database, mailer) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client with a recording mailer."""
    from core.mailer import get_mailer
    from main import app

    app.dependency_overrides[get_mailer] = lambda: mailer
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def signer():
    from core.security import TokenSigner

    return TokenSigner(TEST_SECRET)


@pytest.fixture
def auth_headers(signer) -> dict:
    token = signer.issue_session_token(TEST_EMAIL, 3600)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def reference_catalog() -> list:
    from scripts.seed_inventory import REFERENCE_CATALOG

    return [dict(row) for row in REFERENCE_CATALOG]


@pytest.fixture
def seeded_client(api_client, auth_headers, reference_catalog) -> TestClient:
    """API client whose inventory holds the reference coffee catalog."""
    for row in reference_catalog:
        response = api_client.post("/inventory", json=row, headers=auth_headers)
        assert response.status_code == 201, response.text
    return api_client


@pytest.fixture
def coffee_recipe() -> dict:
    """Iced palm-sugar coffee; costs 13250 per cup against the reference catalog."""
    return {
        "number_of_cups": 1,
        "ingredients": {
            "Aren Sugar": {"amount": 15, "unit": "g"},
            "Milk": {"amount": 150, "unit": "ml"},
            "Ice Cube": {"amount": 20, "unit": "g"},
            "Plastic Cup": {"amount": 1, "unit": "pcs"},
            "Coffee Bean": {"amount": 20, "unit": "g"},
            "Mineral Water": {"amount": 50, "unit": "ml"},
        },
    }
