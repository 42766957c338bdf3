"""
Tests for the dashboard summary, CSV export and ticket numbering.
"""

import io
from datetime import date

import pandas as pd

from barangay.aggregator import aggregate_households
from barangay.dashboard import build_dashboard, count_tags
from barangay.export import households_frame, residents_frame, to_csv
from barangay.models import Activity, HouseholdRecord, Report, ResidentRecord, Utilities
from barangay.reports import next_ticket_number


def resident(first_name, house_number, age=30, status=None):
    return ResidentRecord(
        first_name=first_name,
        last_name="Reyes",
        age=age,
        gender="Female",
        civil_status="Single",
        address="Zone 1",
        house_number=house_number,
        status=status or [],
    )


def report(ticket_number, status="pending"):
    return Report(
        ticket_number=ticket_number,
        title="Broken light",
        category="Infrastructure",
        description="Dark street",
        reported_by="Ana",
        status=status,
    )


def test_build_dashboard():
    residents = [
        resident("Ana", "1", age=65, status=["Senior Citizen", "Voter"]),
        resident("Bea", "1", status=["Voter"]),
        resident("Cora", None),
    ]
    views = aggregate_households(residents, [HouseholdRecord(house_number="2")])
    activities = [
        Activity(title="Clean-up", type="Environmental", status="ongoing"),
        Activity(title="Feeding", type="Health", status="upcoming"),
        Activity(title="Sports fest", type="Sports", status="completed"),
        Activity(title="Seminar", type="Education", status="upcoming"),
    ]
    reports = [report("RPT-2024-001"), report("RPT-2024-002", "resolved")]

    summary = build_dashboard(residents, views, activities, reports)

    assert summary['total_residents'] == 3
    assert summary['total_households'] == 2
    assert summary['unassigned_residents'] == 1
    assert summary['senior_citizens'] == 1
    assert summary['ongoing_activities'] == 1
    assert summary['reports_submitted'] == 2
    assert summary['pending_reports'] == 1
    assert summary['resident_tags'] == {"Voter": 2, "Senior Citizen": 1}
    assert summary['activities_by_status']['upcoming'] == 2
    assert summary['activities_by_status']['cancelled'] == 0
    assert summary['reports_by_status']['in-progress'] == 0
    assert [a['title'] for a in summary['recent_activities']] == ["Clean-up", "Feeding", "Sports fest"]


def test_empty_dashboard():
    summary = build_dashboard([], [], [], [])

    assert summary['total_residents'] == 0
    assert summary['total_households'] == 0
    assert summary['resident_tags'] == {}
    assert summary['recent_activities'] == []


def test_count_tags_without_tags():
    assert count_tags([resident("Ana", "1")]) == {}


def test_households_csv():
    residents = [resident("Ana", "1", status=["Head of Household"]), resident("Bea", "1")]
    households = [HouseholdRecord(house_number="1", utilities=Utilities(water=True), monthly_income=9000)]

    frame = pd.read_csv(io.StringIO(to_csv(households_frame(aggregate_households(residents, households)))))

    assert len(frame) == 1
    row = frame.iloc[0]
    assert row['head_of_household'] == "Ana Reyes"
    assert row['members'] == "Ana Reyes; Bea Reyes"
    assert bool(row['water']) is True
    assert row['monthly_income'] == 9000


def test_residents_csv():
    frame = residents_frame([resident("Ana", "1", status=["Voter", "PWD"])])

    assert list(frame.columns)[:2] == ['last_name', 'first_name']
    assert frame.iloc[0]['status'] == "Voter; PWD"


def test_empty_export_keeps_header():
    assert to_csv(households_frame([])).startswith("house_number,address")


def test_next_ticket_number():
    reports = [report("RPT-2024-001"), report("RPT-2024-007"), report("RPT-2023-042")]

    assert next_ticket_number(reports, date(2024, 5, 1)) == "RPT-2024-008"
    assert next_ticket_number(reports, date(2025, 1, 2)) == "RPT-2025-001"
    assert next_ticket_number([], date(2024, 5, 1)) == "RPT-2024-001"
