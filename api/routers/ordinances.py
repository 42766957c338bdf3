"""
Ordinance endpoints.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query

from barangay.resources import ResourceList
from ..dependencies import CurrentUser, resource_list
from ..models import (
    OrdinanceCreate,
    OrdinanceListResponse,
    OrdinanceResponse,
    OrdinanceUpdate,
)


router = APIRouter(
    prefix="/ordinances",
    tags=["ordinances"]
)

Ordinances = Annotated[ResourceList, Depends(resource_list('ordinances'))]


@router.get("", response_model=OrdinanceListResponse)
def list_ordinances(
    user: CurrentUser,
    ordinances: Ordinances,
    search: str = Query("", description="Substring of title or ordinance number"),
    category: str = Query("all", description="Category, e.g. 'Environment'")
):
    """List ordinances, most recently enacted first."""
    ordinances.load()
    items = ordinances.filtered(search, category)
    return OrdinanceListResponse(
        ordinances=[OrdinanceResponse(**o.to_dict()) for o in items],
        count=len(items)
    )


@router.get("/{ordinance_id}", response_model=OrdinanceResponse)
def get_ordinance(ordinance_id: str, user: CurrentUser, ordinances: Ordinances):
    return OrdinanceResponse(**ordinances.get(ordinance_id).to_dict())


@router.post("", response_model=OrdinanceResponse, status_code=201)
def create_ordinance(request: OrdinanceCreate, user: CurrentUser, ordinances: Ordinances):
    """Record an ordinance. Ordinance numbers are unique."""
    record = ordinances.create(request.model_dump(), user.id)
    return OrdinanceResponse(**record.to_dict())


@router.patch("/{ordinance_id}", response_model=OrdinanceResponse)
def update_ordinance(
    ordinance_id: str,
    request: OrdinanceUpdate,
    user: CurrentUser,
    ordinances: Ordinances
):
    record = ordinances.update(ordinance_id, request.model_dump(exclude_unset=True), user.id)
    return OrdinanceResponse(**record.to_dict())
