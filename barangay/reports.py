"""
Ticket numbering for resident reports.

Tickets read RPT-<year>-<sequence>, e.g. RPT-2024-001. The sequence
restarts every year.
"""

import re
from datetime import date
from typing import Iterable

from .models import Report

TICKET_PATTERN = re.compile(r"^RPT-(\d{4})-(\d+)$")


def next_ticket_number(reports: Iterable[Report], today: date) -> str:
    """
    Next free ticket number for ``today``'s year.

    Args:
        reports: Existing reports
        today: Submission date

    Returns:
        Ticket number one past the highest sequence used this year
    """
    highest = 0
    for report in reports:
        match = TICKET_PATTERN.match(report.ticket_number or "")
        if match and int(match.group(1)) == today.year:
            highest = max(highest, int(match.group(2)))
    return f"RPT-{today.year}-{highest + 1:03d}"
