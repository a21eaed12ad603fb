"""
Tests for health and version endpoints
"""
from fastapi import status

from app.core.constants import SERVICE_NAME


def test_health_check(client):
    response = client.get("/api/v1/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok", "service": SERVICE_NAME}


def test_version_endpoint(client):
    response = client.get("/api/v1/version")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["service"] == SERVICE_NAME
    assert "version" in data
    assert data["env"] in ["local", "staging", "prod"]


def test_unknown_route_uses_error_format(client):
    response = client.get("/api/v1/does-not-exist")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    body = response.json()
    assert body["error"] is True
    assert body["path"] == "/api/v1/does-not-exist"
