"""
Barangay officials endpoints, including the on/off duty cycle.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query

from barangay.officials import DutyCycle
from barangay.resources import ResourceList
from ..dependencies import CurrentUser, resource_list
from ..models import (
    OfficialCreate,
    OfficialListResponse,
    OfficialResponse,
    OfficialUpdate,
)


router = APIRouter(
    prefix="/officials",
    tags=["officials"]
)

Officials = Annotated[ResourceList, Depends(resource_list('officials'))]


@router.get("", response_model=OfficialListResponse)
def list_officials(
    user: CurrentUser,
    officials: Officials,
    search: str = Query("", description="Substring of name or position"),
    status: str = Query("all", description="active, inactive or all")
):
    officials.load()
    items = officials.filtered(search, status)
    return OfficialListResponse(
        officials=[OfficialResponse(**o.to_dict()) for o in items],
        count=len(items),
        on_duty=sum(1 for o in officials.items if o.is_on_duty())
    )


@router.get("/{official_id}", response_model=OfficialResponse)
def get_official(official_id: str, user: CurrentUser, officials: Officials):
    return OfficialResponse(**officials.get(official_id).to_dict())


@router.post("", response_model=OfficialResponse, status_code=201)
def create_official(request: OfficialCreate, user: CurrentUser, officials: Officials):
    """Add an official. New officials start active and off duty."""
    record = officials.create(request.model_dump(), user.id)
    return OfficialResponse(**record.to_dict())


@router.patch("/{official_id}", response_model=OfficialResponse)
def update_official(
    official_id: str,
    request: OfficialUpdate,
    user: CurrentUser,
    officials: Officials
):
    record = officials.update(official_id, request.model_dump(exclude_unset=True), user.id)
    return OfficialResponse(**record.to_dict())


@router.post("/{official_id}/time-in", response_model=OfficialResponse)
def time_in(official_id: str, user: CurrentUser, officials: Officials):
    """
    Put an official on duty.

    Sets time_in and clears time_out. Repeating the call while the official
    is already on duty changes nothing.
    """
    return OfficialResponse(**DutyCycle(officials).time_in(official_id, user.id).to_dict())


@router.post("/{official_id}/time-out", response_model=OfficialResponse)
def time_out(official_id: str, user: CurrentUser, officials: Officials):
    """Take an official off duty. Repeating the call changes nothing."""
    return OfficialResponse(**DutyCycle(officials).time_out(official_id, user.id).to_dict())


@router.post("/{official_id}/toggle-duty", response_model=OfficialResponse)
def toggle_duty(official_id: str, user: CurrentUser, officials: Officials):
    return OfficialResponse(**DutyCycle(officials).toggle(official_id, user.id).to_dict())
