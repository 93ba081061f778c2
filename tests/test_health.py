"""
Health endpoint tests.
"""

from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError


def test_health_returns_ok_when_db_connected(client: TestClient) -> None:
    """Health endpoint returns 200 with database connected (in-memory SQLite)."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "connected"
    assert "version" in data


def test_health_returns_503_when_db_unreachable(client: TestClient) -> None:
    """Health endpoint returns 503 when database is unreachable."""
    from studentstay.db import engine

    with patch.object(
        engine, "connect", side_effect=OperationalError("SELECT 1", {}, Exception("refused"))
    ):
        response = client.get("/health")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["database"] == "disconnected"


def test_lifespan_checks_database() -> None:
    from studentstay.db import engine
    from studentstay.main import app

    # dispose would drop the shared in-memory database
    with (
        patch("studentstay.main.check_db_connection") as check,
        patch.object(engine, "dispose") as dispose,
    ):
        with TestClient(app):
            pass
    check.assert_called_once()
    dispose.assert_called_once()
