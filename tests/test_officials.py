"""
Tests for the officials duty cycle.
"""

from datetime import datetime

import pytest

from barangay.errors import NotAuthenticatedError, RecordNotFoundError
from barangay.officials import DutyCycle
from barangay.resources import ResourceList


MORNING = datetime(2024, 3, 4, 8, 0)
EVENING = datetime(2024, 3, 4, 17, 0)


@pytest.fixture
def officials(store):
    return ResourceList(store, 'officials')


@pytest.fixture
def official(officials):
    return officials.create({'name': "Maria Santos", 'position': "Barangay Captain"}, "user-1")


def test_time_in(officials, official):
    record = DutyCycle(officials).time_in(official.id, "user-1", now=MORNING)

    assert record.is_on_duty()
    assert record.time_in == MORNING
    assert record.time_out is None


def test_time_out(officials, official):
    cycle = DutyCycle(officials)
    cycle.time_in(official.id, "user-1", now=MORNING)

    record = cycle.time_out(official.id, "user-1", now=EVENING)

    assert not record.is_on_duty()
    assert record.time_in == MORNING
    assert record.time_out == EVENING


def test_time_in_twice_is_noop(officials, official):
    cycle = DutyCycle(officials)
    cycle.time_in(official.id, "user-1", now=MORNING)

    record = cycle.time_in(official.id, "user-1", now=EVENING)

    assert record.time_in == MORNING


def test_time_out_while_off_duty_is_noop(officials, official):
    record = DutyCycle(officials).time_out(official.id, "user-1", now=EVENING)

    assert record.duty_status == "off_duty"
    assert record.time_out is None


def test_time_in_clears_previous_time_out(officials, official):
    cycle = DutyCycle(officials)
    cycle.time_in(official.id, "user-1", now=MORNING)
    cycle.time_out(official.id, "user-1", now=EVENING)

    record = cycle.time_in(official.id, "user-1", now=MORNING)

    assert record.is_on_duty()
    assert record.time_out is None


def test_toggle(officials, official):
    cycle = DutyCycle(officials)

    assert cycle.toggle(official.id, "user-1").is_on_duty()
    assert not cycle.toggle(official.id, "user-1").is_on_duty()


def test_requires_user(officials, official):
    with pytest.raises(NotAuthenticatedError):
        DutyCycle(officials).time_in(official.id, None)


def test_unknown_official(officials):
    with pytest.raises(RecordNotFoundError):
        DutyCycle(officials).time_in("missing", "user-1")


def test_rejects_other_collections(store):
    with pytest.raises(ValueError):
        DutyCycle(ResourceList(store, 'residents'))
