"""
Tests for household endpoints.
"""

from fastapi.testclient import TestClient


def add_resident(client, headers, payload, **changes):
    response = client.post("/residents", json={**payload, **changes}, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_households_require_session(client: TestClient):
    """Test /households without a token"""
    response = client.get("/households")
    assert response.status_code == 401


def test_list_groups_residents(client: TestClient, auth_headers, resident_payload):
    """Residents sharing a house number form one household"""
    add_resident(client, auth_headers, resident_payload)
    add_resident(client, auth_headers, resident_payload, first_name="Maria", age=42,
                 gender="Female", status=["Voter"], contact="09123456789")
    add_resident(client, auth_headers, resident_payload, first_name="Pedro", age=30,
                 house_number="456", address="Rizal Ave., Zone 2", status=[], contact="09181112222")

    response = client.get("/households", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 2
    assert data["total_residents"] == 3

    first = data["households"][0]
    assert first["house_number"] == "123"
    assert first["total_members"] == 2
    assert first["head_of_household"] == "Juan Santos Cruz"
    assert first["contacts"] == ["09123456789"]

    second = data["households"][1]
    assert second["house_number"] == "456"
    assert second["head_of_household"] == "Pedro Santos Cruz"


def test_list_filters_by_zone(client: TestClient, auth_headers, resident_payload):
    """Zone filter matches the address"""
    add_resident(client, auth_headers, resident_payload)
    add_resident(client, auth_headers, resident_payload, first_name="Pedro",
                 house_number="456", address="Rizal Ave., Zone 2", status=[])

    response = client.get("/households", params={"zone": "zone 2"}, headers=auth_headers)

    data = response.json()
    assert data["count"] == 1
    assert data["households"][0]["house_number"] == "456"


def test_create_household_record(client: TestClient, auth_headers):
    """Test registering a household without residents"""
    payload = {
        "house_number": "99",
        "address": "Bonifacio St., Zone 5",
        "utilities": {"electricity": True, "water": True, "internet": False},
        "monthly_income": 12000
    }

    response = client.post("/households", json=payload, headers=auth_headers)

    assert response.status_code == 201
    assert response.json()["house_number"] == "99"

    listing = client.get("/households", headers=auth_headers).json()
    assert listing["count"] == 1
    household = listing["households"][0]
    assert household["total_members"] == 0
    assert household["residents"] == []
    assert household["utilities"]["water"] is True
    assert household["monthly_income"] == 12000


def test_duplicate_house_number_rejected(client: TestClient, auth_headers):
    """A second record for a house number returns 409"""
    payload = {"house_number": "99", "address": "Bonifacio St., Zone 5"}
    assert client.post("/households", json=payload, headers=auth_headers).status_code == 201

    response = client.post("/households", json=payload, headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["detail"] == "A household with this house number already exists"


def test_household_detail(client: TestClient, auth_headers, resident_payload):
    add_resident(client, auth_headers, resident_payload)

    response = client.get("/households/123", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total_members"] == 1
    assert data["residents"][0]["first_name"] == "Juan"


def test_household_detail_not_found(client: TestClient, auth_headers):
    response = client.get("/households/000", headers=auth_headers)

    assert response.status_code == 404
    assert "not found" in response.json()["detail"]


def test_update_creates_record_for_resident_household(client: TestClient, auth_headers, resident_payload):
    """PUT on a resident-only household stores utilities and income"""
    add_resident(client, auth_headers, resident_payload)

    response = client.put(
        "/households/123",
        json={"utilities": {"electricity": True}, "monthly_income": 8000},
        headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["address"] == "Mabini St., Zone 1"
    assert data["monthly_income"] == 8000

    view = client.get("/households/123", headers=auth_headers).json()
    assert view["utilities"] == {"electricity": True, "water": False, "internet": False}
    assert view["monthly_income"] == 8000


def test_update_keeps_omitted_fields(client: TestClient, auth_headers):
    client.post("/households", json={
        "house_number": "77",
        "address": "Luna St., Zone 3",
        "monthly_income": 5000
    }, headers=auth_headers)

    response = client.put("/households/77", json={"address": "Luna St., Zone 4"}, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["address"] == "Luna St., Zone 4"
    assert data["monthly_income"] == 5000


def test_residents_without_house_number(client: TestClient, auth_headers, resident_payload):
    """Residents lacking a house number share the sentinel bucket"""
    add_resident(client, auth_headers, resident_payload, house_number=None)

    data = client.get("/households", headers=auth_headers).json()

    assert data["households"][0]["house_number"] == "No House Number"


def test_export_households(client: TestClient, auth_headers, resident_payload):
    add_resident(client, auth_headers, resident_payload)

    response = client.get("/households/export", headers=auth_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.strip().splitlines()
    assert len(lines) == 2
    assert "123" in lines[1]
    assert "Juan Santos Cruz" in lines[1]


def test_reserved_house_number_rejected(client: TestClient, auth_headers, resident_payload):
    """The no-house-number label cannot be used as a real house number"""
    resident = client.post("/residents", json={**resident_payload, "house_number": "no house number"},
                           headers=auth_headers)
    household = client.post("/households", json={"house_number": "No House Number", "address": "Zone 1"},
                            headers=auth_headers)

    assert resident.status_code == 422
    assert household.status_code == 422


def test_reserved_house_number_rejected_on_update(client: TestClient, auth_headers, resident_payload):
    created = add_resident(client, auth_headers, resident_payload)

    response = client.patch(f"/residents/{created['id']}", json={"house_number": "No House Number"},
                            headers=auth_headers)

    assert response.status_code == 422


def test_unassigned_bucket_not_editable(client: TestClient, auth_headers, resident_payload):
    add_resident(client, auth_headers, resident_payload, house_number=None)

    response = client.put("/households/No House Number", json={"monthly_income": 100}, headers=auth_headers)

    assert response.status_code == 422
    data = response.json()
    assert data["field"] == "house_number"
    assert "Assign a house number" in data["detail"]
