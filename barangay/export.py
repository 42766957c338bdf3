"""
CSV export of households and residents.
"""

from typing import Sequence

import pandas as pd

from .models import HouseholdView, ResidentRecord

HOUSEHOLD_COLUMNS = [
    'house_number',
    'address',
    'head_of_household',
    'total_members',
    'members',
    'contacts',
    'electricity',
    'water',
    'internet',
    'monthly_income',
]

RESIDENT_COLUMNS = [
    'last_name',
    'first_name',
    'middle_name',
    'age',
    'gender',
    'civil_status',
    'address',
    'house_number',
    'contact',
    'occupation',
    'status',
]


def households_frame(views: Sequence[HouseholdView]) -> pd.DataFrame:
    """One row per household view; members and contacts joined with '; '"""
    rows = [
        {
            'house_number': v.house_number,
            'address': v.address,
            'head_of_household': v.head_of_household or "",
            'total_members': v.total_members,
            'members': "; ".join(r.full_name() for r in v.residents),
            'contacts': "; ".join(v.contacts),
            'electricity': v.utilities.electricity,
            'water': v.utilities.water,
            'internet': v.utilities.internet,
            'monthly_income': v.monthly_income,
        }
        for v in views
    ]
    return pd.DataFrame(rows, columns=HOUSEHOLD_COLUMNS)


def residents_frame(residents: Sequence[ResidentRecord]) -> pd.DataFrame:
    rows = []
    for r in residents:
        row = {name: getattr(r, name) for name in RESIDENT_COLUMNS}
        row['status'] = "; ".join(r.status)
        rows.append(row)
    return pd.DataFrame(rows, columns=RESIDENT_COLUMNS)


def to_csv(frame: pd.DataFrame) -> str:
    return frame.to_csv(index=False)
