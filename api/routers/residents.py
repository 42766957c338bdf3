"""
Resident registry endpoints.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query, Response

from barangay.export import residents_frame, to_csv
from barangay.resources import ResourceList
from ..dependencies import CurrentUser, resource_list
from ..models import (
    ResidentCreate,
    ResidentListResponse,
    ResidentResponse,
    ResidentUpdate,
)


router = APIRouter(
    prefix="/residents",
    tags=["residents"]
)

Residents = Annotated[ResourceList, Depends(resource_list('residents'))]


@router.get("", response_model=ResidentListResponse)
def list_residents(
    user: CurrentUser,
    residents: Residents,
    search: str = Query("", description="Substring of name, address or house number"),
    status: str = Query("all", description="Tag filter, e.g. 'Senior Citizen'")
):
    """
    List residents.

    Residents are ordered by house number. Both filters are
    case-insensitive substring matches.
    """
    residents.load()
    items = residents.filtered(search, status)
    return ResidentListResponse(
        residents=[ResidentResponse(**r.to_dict()) for r in items],
        count=len(items)
    )


@router.get("/export")
def export_residents(user: CurrentUser, residents: Residents):
    """Download all residents as CSV"""
    csv = to_csv(residents_frame(residents.load()))
    return Response(
        content=csv,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="residents.csv"'}
    )


@router.get("/{resident_id}", response_model=ResidentResponse)
def get_resident(resident_id: str, user: CurrentUser, residents: Residents):
    return ResidentResponse(**residents.get(resident_id).to_dict())


@router.post("", response_model=ResidentResponse, status_code=201)
def create_resident(request: ResidentCreate, user: CurrentUser, residents: Residents):
    """
    Register a resident.

    Residents sharing a house number are grouped into one household.
    """
    record = residents.create(request.model_dump(), user.id)
    return ResidentResponse(**record.to_dict())


@router.patch("/{resident_id}", response_model=ResidentResponse)
def update_resident(
    resident_id: str,
    request: ResidentUpdate,
    user: CurrentUser,
    residents: Residents
):
    record = residents.update(resident_id, request.model_dump(exclude_unset=True), user.id)
    return ResidentResponse(**record.to_dict())
