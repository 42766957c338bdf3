"""
Tests for the SQLAlchemy row store.
"""

from datetime import date

import pytest

from barangay.database import RowStore, get_store
from barangay.errors import DuplicateKeyError, GatewayReadError, RecordNotFoundError


def test_insert_returns_stored_row(store: RowStore):
    row = store.insert('households', {'house_number': "12", 'address': "Zone 1"})

    assert row['id']
    assert row['house_number'] == "12"
    assert row['created_at'] is not None


def test_insert_ignores_unknown_keys(store: RowStore):
    row = store.insert('households', {'house_number': "12", 'not_a_column': 1})
    assert 'not_a_column' not in row


def test_select_order_and_filter(store: RowStore):
    for number in ["30", "10", "20"]:
        store.insert('households', {'house_number': number, 'address': "Zone 1"})

    ascending = store.select('households', order_by='house_number')
    descending = store.select('households', order_by='house_number', descending=True)
    matched = store.select('households', where={'house_number': "20"})

    assert [r['house_number'] for r in ascending] == ["10", "20", "30"]
    assert [r['house_number'] for r in descending] == ["30", "20", "10"]
    assert len(matched) == 1


def test_nulls_sort_last(store: RowStore):
    store.insert('ordinances', {'number': "ORD-1", 'title': "A", 'category': "Health"})
    store.insert('ordinances', {
        'number': "ORD-2", 'title': "B", 'category': "Health", 'date_enacted': date(2024, 1, 15)
    })

    rows = store.select('ordinances', order_by='date_enacted', descending=True)

    assert [r['number'] for r in rows] == ["ORD-2", "ORD-1"]


def test_unknown_collection(store: RowStore):
    with pytest.raises(ValueError):
        store.select('taxes')


def test_duplicate_key(store: RowStore):
    store.insert('households', {'house_number': "12"})

    with pytest.raises(DuplicateKeyError):
        store.insert('households', {'house_number': "12"})


def test_update(store: RowStore):
    row = store.insert('households', {'house_number': "12", 'monthly_income': 100})

    updated = store.update('households', {'monthly_income': 250}, row['id'])

    assert updated['monthly_income'] == 250
    assert updated['house_number'] == "12"


def test_update_missing_row(store: RowStore):
    with pytest.raises(RecordNotFoundError):
        store.update('households', {'monthly_income': 1}, "missing-id")


def test_upsert_inserts_then_updates(store: RowStore):
    first = store.upsert('households', {'house_number': "12", 'address': "Zone 1"}, ['house_number'])
    second = store.upsert('households', {'house_number': "12", 'address': "Zone 2"}, ['house_number'])

    assert first['id'] == second['id']
    assert second['address'] == "Zone 2"
    assert store.count('households') == 1


def test_upsert_requires_conflict_values(store: RowStore):
    with pytest.raises(ValueError):
        store.upsert('households', {'address': "Zone 1"}, ['house_number'])


def test_json_column_round_trip(store: RowStore):
    row = store.insert('residents', {
        'first_name': "Ana", 'last_name': "Cruz", 'age': 30, 'gender': "Female",
        'civil_status': "Single", 'address': "Zone 1", 'status': ["Voter", "Student"]
    })

    assert store.get('residents', row['id'])['status'] == ["Voter", "Student"]


def test_delete(store: RowStore):
    row = store.insert('households', {'house_number': "12"})

    assert store.delete('households', row['id']) is True
    assert store.delete('households', row['id']) is False
    assert store.get('households', row['id']) is None


def test_read_failure_raises_gateway_error(store: RowStore):
    with store.engine.begin() as conn:
        conn.exec_driver_sql("DROP TABLE households")

    with pytest.raises(GatewayReadError):
        store.select('households')


def test_ping(store: RowStore):
    assert store.ping() is True


def test_get_store_caches_by_url():
    assert get_store("sqlite://") is get_store("sqlite://")


def test_missing_connection_string(monkeypatch):
    monkeypatch.delenv('DATABASE_URL', raising=False)
    with pytest.raises(ValueError):
        RowStore()
