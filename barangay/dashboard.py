"""
Dashboard summary for the console index.
"""

from typing import Dict, List, Sequence

import pandas as pd

from .models import (
    Activity,
    ActivityStatus,
    HouseholdView,
    Report,
    ReportStatus,
    ResidentRecord,
    NO_HOUSE_NUMBER,
)

RECENT_ACTIVITY_COUNT = 3


def count_tags(residents: Sequence[ResidentRecord]) -> Dict[str, int]:
    """Number of residents carrying each status tag"""
    tags = pd.Series([r.status for r in residents], dtype=object).explode().dropna()
    if tags.empty:
        return {}
    counts = tags.value_counts()
    return {str(tag): int(n) for tag, n in counts.items()}


def count_by_status(records: Sequence, statuses: List[str]) -> Dict[str, int]:
    """Records per status value, with zero for statuses that have none"""
    counts = pd.Series([r.status for r in records], dtype=object).value_counts()
    return {status: int(counts.get(status, 0)) for status in statuses}


def build_dashboard(
    residents: Sequence[ResidentRecord],
    households: Sequence[HouseholdView],
    activities: Sequence[Activity],
    reports: Sequence[Report]
) -> dict:
    """
    Summarize the registry.

    Args:
        residents: All resident records
        households: Aggregated household views
        activities: Activities, most recent first
        reports: All reports

    Returns:
        Dictionary of headline counts and breakdowns
    """
    activity_counts = count_by_status(activities, [s.value for s in ActivityStatus])
    report_counts = count_by_status(reports, [s.value for s in ReportStatus])

    return {
        'total_residents': len(residents),
        'total_households': sum(1 for h in households if h.house_number != NO_HOUSE_NUMBER),
        'unassigned_residents': sum(
            h.total_members for h in households if h.house_number == NO_HOUSE_NUMBER
        ),
        'senior_citizens': sum(1 for r in residents if r.is_senior()),
        'ongoing_activities': activity_counts[ActivityStatus.ONGOING.value],
        'reports_submitted': len(reports),
        'pending_reports': report_counts[ReportStatus.PENDING.value],
        'resident_tags': count_tags(residents),
        'activities_by_status': activity_counts,
        'reports_by_status': report_counts,
        'recent_activities': [a.to_dict() for a in activities[:RECENT_ACTIVITY_COUNT]],
    }
