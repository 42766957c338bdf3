"""
Barangay Registry Package

Core of the barangay administrative console: record types, the row store
and identity gateways, household aggregation and the generic resource list
behind every console screen.
"""

from .aggregator import aggregate_households, filter_households, household_key
from .database import RowStore, get_store
from .identity import AuthSession, IdentityGateway
from .models import (
    Activity,
    BarangaySettings,
    CivilStatus,
    DutyStatus,
    Gender,
    HouseholdRecord,
    HouseholdView,
    Official,
    Ordinance,
    Report,
    ResidentRecord,
    User,
    Utilities,
    HEAD_OF_HOUSEHOLD,
    NO_HOUSE_NUMBER,
)
from .officials import DutyCycle
from .resources import LoadState, ResourceList

__version__ = "1.0.0"

__all__ = [
    # Aggregation
    'aggregate_households',
    'filter_households',
    'household_key',

    # Gateways
    'RowStore',
    'get_store',
    'IdentityGateway',
    'AuthSession',

    # Records
    'ResidentRecord',
    'HouseholdRecord',
    'HouseholdView',
    'Utilities',
    'Official',
    'Ordinance',
    'Activity',
    'Report',
    'BarangaySettings',
    'User',

    # Enums and constants
    'Gender',
    'CivilStatus',
    'DutyStatus',
    'HEAD_OF_HOUSEHOLD',
    'NO_HOUSE_NUMBER',

    # Screens
    'ResourceList',
    'LoadState',
    'DutyCycle',
]
