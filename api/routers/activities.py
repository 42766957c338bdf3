"""
Community activity endpoints.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query

from barangay.resources import ResourceList
from ..dependencies import CurrentUser, resource_list
from ..models import (
    ActivityCreate,
    ActivityListResponse,
    ActivityResponse,
    ActivityUpdate,
)


router = APIRouter(
    prefix="/activities",
    tags=["activities"]
)

Activities = Annotated[ResourceList, Depends(resource_list('activities'))]


@router.get("", response_model=ActivityListResponse)
def list_activities(
    user: CurrentUser,
    activities: Activities,
    search: str = Query("", description="Substring of title or type"),
    status: str = Query("all", description="upcoming, ongoing, completed, cancelled or all")
):
    activities.load()
    items = activities.filtered(search, status)
    return ActivityListResponse(
        activities=[ActivityResponse(**a.to_dict()) for a in items],
        count=len(items)
    )


@router.get("/{activity_id}", response_model=ActivityResponse)
def get_activity(activity_id: str, user: CurrentUser, activities: Activities):
    return ActivityResponse(**activities.get(activity_id).to_dict())


@router.post("", response_model=ActivityResponse, status_code=201)
def create_activity(request: ActivityCreate, user: CurrentUser, activities: Activities):
    record = activities.create(request.model_dump(), user.id)
    return ActivityResponse(**record.to_dict())


@router.patch("/{activity_id}", response_model=ActivityResponse)
def update_activity(
    activity_id: str,
    request: ActivityUpdate,
    user: CurrentUser,
    activities: Activities
):
    record = activities.update(activity_id, request.model_dump(exclude_unset=True), user.id)
    return ActivityResponse(**record.to_dict())
