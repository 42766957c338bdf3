"""
Tests for health check and fallback endpoints.
"""

from fastapi.testclient import TestClient


def test_health_check(client: TestClient):
    """Test /health endpoint (for load balancers)"""
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "healthy"
    assert data["database"] == "connected"
    assert "version" in data
    assert "timestamp" in data


def test_health_needs_no_session(client: TestClient):
    """Health is reachable without a bearer token"""
    response = client.get("/health")
    assert response.status_code == 200


def test_dashboard_requires_session(client: TestClient):
    """Test / endpoint without a token"""
    response = client.get("/")

    assert response.status_code == 401
    assert "Sign in" in response.json()["detail"]


def test_unknown_path(client: TestClient):
    """Unmatched paths get the not-found page"""
    response = client.get("/no/such/page")

    assert response.status_code == 404
    data = response.json()
    assert data["detail"] == "Page not found"
    assert data["path"] == "/no/such/page"
