"""
Tests for record types.
"""

import pytest

from barangay.errors import RecordValidationError
from barangay.models import (
    Activity,
    BarangaySettings,
    HouseholdRecord,
    Official,
    ResidentRecord,
    Utilities,
    Gender,
)


def test_resident_from_row():
    record = ResidentRecord.from_row({
        'first_name': "Juan", 'middle_name': "Santos", 'last_name': "Cruz", 'age': "61",
        'gender': Gender.MALE, 'civil_status': "Widower", 'address': "Zone 1",
        'status': None, 'unexpected': "ignored"
    })

    assert record.gender == "Male"
    assert record.age == 61
    assert record.status == []
    assert record.full_name() == "Juan Santos Cruz"
    assert record.is_senior()
    assert record.to_dict()['full_name'] == "Juan Santos Cruz"


@pytest.mark.parametrize("row", [
    {'first_name': "Juan", 'last_name': "Cruz", 'gender': "M", 'civil_status': "Single"},
    {'first_name': "Juan", 'last_name': "Cruz", 'gender': "Male", 'civil_status': "Divorced"},
    {'first_name': "", 'last_name': "Cruz", 'gender': "Male", 'civil_status': "Single"},
])
def test_resident_rejects_bad_rows(row):
    with pytest.raises(RecordValidationError):
        ResidentRecord.from_row(row)


def test_utilities_from_value():
    assert Utilities.from_value(None) == Utilities()
    assert Utilities.from_value({'water': 1}) == Utilities(water=True)


def test_household_record_income():
    assert HouseholdRecord.from_row({'house_number': "1", 'monthly_income': "2500"}).monthly_income == 2500.0
    assert HouseholdRecord.from_row({'house_number': "1"}).monthly_income is None
    with pytest.raises(RecordValidationError):
        HouseholdRecord.from_row({'house_number': "1", 'monthly_income': -1})


def test_official_defaults():
    official = Official.from_row({'name': "Maria", 'position': "Kagawad", 'status': None})

    assert official.status == "active"
    assert not official.is_on_duty()


def test_activity_is_full():
    assert Activity(title="Fun run", type="Sports", attendees=50, max_attendees=50).is_full()
    assert not Activity(title="Fun run", type="Sports", attendees=10).is_full()


def test_settings_merge_defaults():
    settings = BarangaySettings.from_row({
        'user_id': "u1",
        'barangay_info': {'name': "Barangay Malinis"},
        'notifications': None,
    })

    assert settings.barangay_info['name'] == "Barangay Malinis"
    assert settings.barangay_info['captain_name'] == "Juan C. Dela Cruz"
    assert settings.notifications['email_notifications'] is True
    assert settings.system['session_timeout_minutes'] == 30
