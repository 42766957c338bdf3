"""
Resident report (ticket) endpoints.
"""

from datetime import date
from typing import Annotated
from fastapi import APIRouter, Depends, Query

from barangay.reports import next_ticket_number
from barangay.resources import ResourceList
from ..dependencies import CurrentUser, resource_list
from ..models import (
    ReportCreate,
    ReportListResponse,
    ReportResponse,
    ReportUpdate,
)


router = APIRouter(
    prefix="/reports",
    tags=["reports"]
)

Reports = Annotated[ResourceList, Depends(resource_list('reports'))]


@router.get("", response_model=ReportListResponse)
def list_reports(
    user: CurrentUser,
    reports: Reports,
    search: str = Query("", description="Substring of title, ticket number or reporter"),
    status: str = Query("all", description="pending, in-progress, resolved, rejected or all")
):
    reports.load()
    items = reports.filtered(search, status)
    return ReportListResponse(
        reports=[ReportResponse(**r.to_dict()) for r in items],
        count=len(items)
    )


@router.get("/{report_id}", response_model=ReportResponse)
def get_report(report_id: str, user: CurrentUser, reports: Reports):
    return ReportResponse(**reports.get(report_id).to_dict())


@router.post("", response_model=ReportResponse, status_code=201)
def create_report(request: ReportCreate, user: CurrentUser, reports: Reports):
    """
    File a report.

    When no ticket number is given, the next RPT-<year>-<seq> number for
    the submission year is assigned.
    """
    form = request.model_dump()
    form['date_submitted'] = form.get('date_submitted') or date.today()
    if not (form.get('ticket_number') or "").strip():
        reports.validate(form)
        form['ticket_number'] = next_ticket_number(reports.load(), form['date_submitted'])

    record = reports.create(form, user.id)
    return ReportResponse(**record.to_dict())


@router.patch("/{report_id}", response_model=ReportResponse)
def update_report(
    report_id: str,
    request: ReportUpdate,
    user: CurrentUser,
    reports: Reports
):
    record = reports.update(report_id, request.model_dump(exclude_unset=True), user.id)
    return ReportResponse(**record.to_dict())
