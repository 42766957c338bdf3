"""
Household aggregation.

Groups resident rows into households by house number and merges in the
standalone household rows (utilities, monthly income). The result is a
list of HouseholdView objects rebuilt from scratch on every load.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .models import (
    HouseholdRecord,
    HouseholdView,
    ResidentRecord,
    Utilities,
    NO_HOUSE_NUMBER,
)

logger = logging.getLogger(__name__)


def household_key(house_number: Optional[str]) -> str:
    """
    Grouping key for a house number.

    Missing, null and blank values all map to the NO_HOUSE_NUMBER bucket.
    """
    if house_number is None:
        return NO_HOUSE_NUMBER
    key = str(house_number).strip()
    return key or NO_HOUSE_NUMBER


def aggregate_households(
    residents: Iterable[ResidentRecord],
    households: Iterable[HouseholdRecord]
) -> List[HouseholdView]:
    """
    Build one HouseholdView per distinct house number.

    Residents are folded in input order, so the caller's ordering (usually
    ascending house number) decides member order and which tagged resident
    becomes head of household. Household rows are merged afterwards: a
    matching bucket gets its utilities replaced and its income set when the
    row has one; an unmatched row becomes a zero-member bucket.

    Args:
        residents: Resident records in display order
        households: Standalone household records

    Returns:
        Household views in first-seen key order
    """
    buckets: Dict[str, HouseholdView] = {}

    for resident in residents:
        key = household_key(resident.house_number)
        view = buckets.get(key)
        if view is None:
            view = HouseholdView(house_number=key, address=resident.address or "")
            buckets[key] = view

        view.residents.append(resident)
        view.total_members += 1

        contact = (resident.contact or "").strip()
        if contact and contact not in view.contacts:
            view.contacts.append(contact)

        if view.head_of_household is None and resident.is_head_of_household():
            view.head_of_household = resident.full_name()

    # A sole occupant stands in as head when nobody carries the tag
    for view in buckets.values():
        if view.head_of_household is None and view.total_members == 1:
            view.head_of_household = view.residents[0].full_name()

    for record in households:
        key = household_key(record.house_number)
        view = buckets.get(key)
        if view is None:
            buckets[key] = HouseholdView(
                house_number=key,
                address=record.address or "",
                utilities=Utilities.from_value(record.utilities),
                monthly_income=record.monthly_income,
            )
            continue

        view.utilities = Utilities.from_value(record.utilities)
        if record.monthly_income is not None:
            view.monthly_income = record.monthly_income

    logger.debug(f"Aggregated {len(buckets)} households")
    return list(buckets.values())


def filter_households(
    views: Iterable[HouseholdView],
    search: str = "",
    zone: str = "all"
) -> List[HouseholdView]:
    """
    Filter household views the way the households screen does.

    Args:
        views: Aggregated household views
        search: Substring of house number, address or head of household
        zone: Substring of address (e.g. "zone 1"); "all" disables it

    Returns:
        Matching views in their original order
    """
    term = (search or "").strip().lower()
    zone_term = (zone or "").strip().lower()
    if zone_term == "all":
        zone_term = ""

    result = []
    for view in views:
        address = (view.address or "").lower()
        if term:
            matches_search = (
                term in view.house_number.lower()
                or term in address
                or term in (view.head_of_household or "").lower()
            )
            if not matches_search:
                continue
        if zone_term and zone_term not in address:
            continue
        result.append(view)
    return result
