"""Tests for API routing and error handling."""

import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError


def _result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


@pytest.mark.asyncio
async def test_unknown_api_route_returns_404(app_client):
    """Unknown API routes return the JSON error shape."""
    response = await app_client.get("/api/nonexistent")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


@pytest.mark.asyncio
async def test_post_to_unknown_api_returns_404(app_client):
    response = await app_client.post("/api/nonexistent", json={})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_missing_person_returns_404(app_client, mock_db_session):
    mock_db_session.execute.return_value = _result(None)

    response = await app_client.get("/api/personnel/5")
    assert response.status_code == 404
    assert response.json() == {"error": "Personnel not found (id=5)"}


@pytest.mark.asyncio
async def test_missing_project_returns_404(app_client, mock_db_session):
    mock_db_session.execute.return_value = _result(None)

    response = await app_client.get("/api/projects/3")
    assert response.status_code == 404
    assert response.json()["error"] == "Project not found (id=3)"


@pytest.mark.asyncio
async def test_duplicate_skill_name_is_conflict(app_client, mock_db_session):
    existing = MagicMock()
    mock_db_session.execute.return_value = _result(existing)

    response = await app_client.post("/api/skills", json={"name": "Python"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_storage_failure_returns_503(app_client, mock_db_session):
    mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

    response = await app_client.get("/api/personnel/1")
    assert response.status_code == 503
    assert response.json() == {"error": "Storage failure"}


@pytest.mark.asyncio
async def test_malformed_body_is_rejected(app_client):
    response = await app_client.post("/api/personnel", json={"name": "No Email"})
    assert response.status_code == 422
