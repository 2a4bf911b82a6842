"""Health probe under both mounts."""

import pytest
from sqlalchemy.exc import OperationalError

from bizconnect.db.session import get_db


@pytest.mark.parametrize("path", ["/health", "/api/health"])
def test_health(client, path):
    response = client.get(path)
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["version"] == "2.1.0"
    assert body["database"]["status"] == "connected"


def test_routes_are_dual_mounted(client):
    assert client.get("/opportunities").status_code == 200
    assert client.get("/api/opportunities").status_code == 200


class _UnreachableSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("unable to open database file"))


async def _unreachable_db():
    yield _UnreachableSession()


def test_health_reports_unreachable_database(client):
    client.app.dependency_overrides[get_db] = _unreachable_db
    try:
        response = client.get("/api/health")
    finally:
        client.app.dependency_overrides.clear()

    assert response.status_code == 503
    error = response.json()["error"]
    assert error["code"] == "DB_UNAVAILABLE"
    assert "unable to open database file" in error["details"]["detail"]
