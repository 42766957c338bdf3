"""
Household endpoints.

Households are not stored as a whole: each request groups the resident
rows by house number and merges in the standalone household records.
"""

from typing import Annotated, List
from fastapi import APIRouter, Depends, Query, Response

from barangay.aggregator import aggregate_households, filter_households, household_key
from barangay.errors import InvalidFieldError, RecordNotFoundError
from barangay.export import households_frame, to_csv
from barangay.models import HouseholdView, NO_HOUSE_NUMBER
from barangay.resources import ResourceList
from ..dependencies import CurrentUser, resource_list
from ..models import (
    HouseholdCreate,
    HouseholdListResponse,
    HouseholdRecordResponse,
    HouseholdUpdate,
    HouseholdViewResponse,
)


router = APIRouter(
    prefix="/households",
    tags=["households"]
)

Residents = Annotated[ResourceList, Depends(resource_list('residents'))]
Households = Annotated[ResourceList, Depends(resource_list('households'))]


def load_household_views(residents: ResourceList, households: ResourceList) -> List[HouseholdView]:
    """Fetch both collections and group them into household views"""
    return aggregate_households(residents.load(), households.load())


def find_household_view(views: List[HouseholdView], house_number: str) -> HouseholdView:
    key = household_key(house_number)
    for view in views:
        if view.house_number == key:
            return view
    raise RecordNotFoundError(f"Household {house_number} not found")


@router.get("", response_model=HouseholdListResponse)
def list_households(
    user: CurrentUser,
    residents: Residents,
    households: Households,
    search: str = Query("", description="Substring of house number, address or head of household"),
    zone: str = Query("all", description="Substring of address, e.g. 'zone 1'")
):
    """
    List households.

    ## Response

    One entry per house number, with:
    - Residents in house-number order and their total count
    - Head of household (tagged resident, else the sole occupant)
    - De-duplicated contact numbers
    - Utilities and monthly income from the household record, if any

    Residents without a house number are grouped under "No House Number".
    """
    views = filter_households(load_household_views(residents, households), search, zone)
    return HouseholdListResponse(
        households=[HouseholdViewResponse(**v.to_dict()) for v in views],
        count=len(views),
        total_residents=sum(v.total_members for v in views)
    )


@router.get("/export")
def export_households(
    user: CurrentUser,
    residents: Residents,
    households: Households,
    search: str = Query(""),
    zone: str = Query("all")
):
    """Download the listed households as CSV"""
    views = filter_households(load_household_views(residents, households), search, zone)
    return Response(
        content=to_csv(households_frame(views)),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="households.csv"'}
    )


@router.get("/{house_number}", response_model=HouseholdViewResponse)
def get_household(house_number: str, user: CurrentUser, residents: Residents, households: Households):
    """Household details: members, contacts, utilities and income"""
    view = find_household_view(load_household_views(residents, households), house_number)
    return HouseholdViewResponse(**view.to_dict())


@router.post("", response_model=HouseholdRecordResponse, status_code=201)
def create_household(request: HouseholdCreate, user: CurrentUser, households: Households):
    """
    Register a household record.

    House numbers are unique; a second record for the same house number
    is rejected with 409.
    """
    record = households.create(request.model_dump(), user.id)
    return HouseholdRecordResponse(**record.to_dict())


@router.put("/{house_number}", response_model=HouseholdRecordResponse)
def update_household(
    house_number: str,
    request: HouseholdUpdate,
    user: CurrentUser,
    residents: Residents,
    households: Households
):
    """
    Edit a household's address, utilities and monthly income.

    Works for households known only through their residents too: the
    household record is created on first edit. Omitted fields keep their
    current values.
    """
    view = find_household_view(load_household_views(residents, households), house_number)
    if view.house_number == NO_HOUSE_NUMBER:
        raise InvalidFieldError(
            'house_number', "Assign a house number to these residents before editing household details"
        )

    fields = request.model_fields_set
    utilities = request.utilities.model_dump() if request.utilities else view.utilities.to_dict()
    row = {
        'house_number': view.house_number,
        'address': request.address if 'address' in fields else view.address,
        'utilities': utilities,
        'monthly_income': request.monthly_income if 'monthly_income' in fields else view.monthly_income,
    }
    record = households.upsert(row, user.id)
    return HouseholdRecordResponse(**record.to_dict())
