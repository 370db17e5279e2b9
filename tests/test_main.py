"""Tests for main API endpoints."""

from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient) -> None:
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_unknown_route_uses_error_body(client: TestClient) -> None:
    """Test that HTTP errors use the common error body."""
    response = client.get("/api/v1/unknown-series/")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not Found"}
