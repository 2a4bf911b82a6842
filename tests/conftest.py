"""Shared fixtures: a fresh SQLite file and upload directory per test."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text

from bizconnect.core.config import Settings, get_settings
from bizconnect.core.security import hash_password
from bizconnect.main import create_application

TEST_PASSWORD = "s3cret-pass"


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture
def settings(tmp_path: Path, db_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Settings]:
    """Point the application at temporary storage."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("SEED_SAMPLE_OPPORTUNITIES", "false")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("ENVIRONMENT", "development")
    get_settings.cache_clear()

    yield get_settings()

    get_settings.cache_clear()


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Test client with the lifespan (schema creation) running."""
    app = create_application()
    with TestClient(app) as test_client:
        yield test_client


def register(client: TestClient, email: str, type: str, **profile) -> dict:
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": TEST_PASSWORD, "type": type, **profile},
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]


@pytest.fixture
def vendor(client: TestClient) -> dict:
    return register(
        client,
        "vendor@example.com",
        "vendor",
        businessName="Acme Paving",
        contactName="Pat Lee",
    )


@pytest.fixture
def agency(client: TestClient) -> dict:
    return register(client, "agency@example.com", "agency", organizationName="District 4 Office")


@pytest.fixture
def admin(client: TestClient, db_path: Path) -> dict:
    """Insert an administrator directly; admins cannot self-register."""
    engine = create_engine(f"sqlite:///{db_path}")
    with engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO users (email, password_hash, type, business_name, status) "
                "VALUES (:email, :hash, 'admin', 'Caltrans Admin', 'active')"
            ),
            {"email": "admin@example.com", "hash": hash_password(TEST_PASSWORD)},
        )
    engine.dispose()

    response = client.post(
        "/api/auth/login",
        json={"email": "admin@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 200, response.text
    body = response.json()
    return {**body["user"], "token": body["adminToken"]}


@pytest.fixture
def admin_headers(admin: dict) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin['token']}"}


def opportunity_payload(posted_by: int, **overrides) -> dict:
    payload = {
        "id": "CAL-5001",
        "title": "Test",
        "scopeSummary": "x" * 100,
        "postedBy": posted_by,
    }
    payload.update(overrides)
    return payload
