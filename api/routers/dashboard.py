"""
Dashboard (console index) endpoint.
"""

from typing import Annotated
from fastapi import APIRouter, Depends

from barangay.aggregator import aggregate_households
from barangay.dashboard import build_dashboard
from barangay.resources import ResourceList
from ..dependencies import CurrentUser, resource_list
from ..models import DashboardResponse


router = APIRouter(tags=["dashboard"])


@router.get("/", response_model=DashboardResponse)
def dashboard(
    user: CurrentUser,
    residents: Annotated[ResourceList, Depends(resource_list('residents'))],
    households: Annotated[ResourceList, Depends(resource_list('households'))],
    activities: Annotated[ResourceList, Depends(resource_list('activities'))],
    reports: Annotated[ResourceList, Depends(resource_list('reports'))]
):
    """
    Registry summary.

    Headline counts (residents, households, ongoing activities, reports),
    resident tag breakdown and the three most recent activities.
    """
    resident_records = residents.load()
    views = aggregate_households(resident_records, households.load())
    return DashboardResponse(**build_dashboard(
        resident_records,
        views,
        activities.load(),
        reports.load()
    ))
