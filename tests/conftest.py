"""
Pytest fixtures for API testing.
"""

import pytest
from fastapi.testclient import TestClient

from api.config import Settings
from barangay.database import RowStore


# Override settings for testing
def get_settings_override():
    return Settings(
        database_url="sqlite://",
        session_timeout_minutes=30
    )


@pytest.fixture
def store():
    """
    Fresh in-memory row store, schema created.
    """
    row_store = RowStore("sqlite://")
    yield row_store
    row_store.engine.dispose()


@pytest.fixture
def client(store):
    """
    FastAPI test client bound to the ``store`` fixture.
    """
    from api.main import app
    from api.dependencies import get_settings, get_row_store

    app.dependency_overrides[get_settings] = get_settings_override
    app.dependency_overrides[get_row_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client: TestClient):
    """
    Authorization header for a freshly signed-up user.
    """
    response = client.post("/auth/sign-up", json={
        "email": "secretary@barangay.gov.ph",
        "password": "kagawad123",
        "display_name": "Lisa Reyes"
    })
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def resident_payload():
    """
    Valid resident form.
    """
    return {
        "first_name": "Juan",
        "last_name": "Cruz",
        "middle_name": "Santos",
        "age": 45,
        "gender": "Male",
        "civil_status": "Married",
        "address": "Mabini St., Zone 1",
        "house_number": "123",
        "contact": "09123456789",
        "occupation": "Farmer",
        "status": ["Voter", "Head of Household"]
    }
