"""
Collection metadata.

One entry per collection served by the console. ResourceList reads its
ordering, search fields, filter, required fields, default status and
user-facing messages from here.
"""

from .models import (
    Activity,
    ActivityStatus,
    BarangaySettings,
    HouseholdRecord,
    Official,
    OfficialStatus,
    Ordinance,
    OrdinanceStatus,
    Report,
    ReportStatus,
    ResidentRecord,
)

# filter_mode:
#   equals - row[filter_field] equals the filter value (case-insensitive)
#   tag    - row[filter_field] is a list; any entry contains the filter value
COLLECTION_METADATA = {
    'residents': {
        'record': ResidentRecord,
        'label': 'resident',
        'order_by': 'house_number',
        'descending': False,
        'search_fields': ('first_name', 'middle_name', 'last_name', 'address', 'house_number'),
        'filter_field': 'status',
        'filter_mode': 'tag',
        'required_fields': ('first_name', 'last_name', 'age', 'gender', 'civil_status', 'address'),
        'default_status': None,
        'conflict_keys': (),
        'duplicate_message': "This resident already exists",
    },
    'households': {
        'record': HouseholdRecord,
        'label': 'household information',
        'order_by': 'house_number',
        'descending': False,
        'search_fields': ('house_number', 'address'),
        'filter_field': 'address',
        'filter_mode': 'contains',
        'required_fields': ('house_number', 'address'),
        'default_status': None,
        'conflict_keys': ('house_number',),
        'duplicate_message': "A household with this house number already exists",
    },
    'officials': {
        'record': Official,
        'label': 'official',
        'order_by': 'name',
        'descending': False,
        'search_fields': ('name', 'position'),
        'filter_field': 'status',
        'filter_mode': 'equals',
        'required_fields': ('name', 'position'),
        'default_status': OfficialStatus.ACTIVE.value,
        'conflict_keys': (),
        'duplicate_message': "This official already exists",
    },
    'ordinances': {
        'record': Ordinance,
        'label': 'ordinance',
        'order_by': 'date_enacted',
        'descending': True,
        'search_fields': ('title', 'number'),
        'filter_field': 'category',
        'filter_mode': 'equals',
        'required_fields': ('number', 'title', 'category'),
        'default_status': OrdinanceStatus.ACTIVE.value,
        'conflict_keys': (),
        'duplicate_message': "An ordinance with this number already exists",
    },
    'activities': {
        'record': Activity,
        'label': 'activity',
        'order_by': 'date',
        'descending': True,
        'search_fields': ('title', 'type'),
        'filter_field': 'status',
        'filter_mode': 'equals',
        'required_fields': ('title', 'type', 'date', 'location'),
        'default_status': ActivityStatus.UPCOMING.value,
        'conflict_keys': (),
        'duplicate_message': "This activity already exists",
    },
    'reports': {
        'record': Report,
        'label': 'report',
        'order_by': 'date_submitted',
        'descending': True,
        'search_fields': ('title', 'ticket_number', 'reported_by'),
        'filter_field': 'status',
        'filter_mode': 'equals',
        'required_fields': ('title', 'category', 'description', 'reported_by'),
        'default_status': ReportStatus.PENDING.value,
        'conflict_keys': (),
        'duplicate_message': "A report with this ticket number already exists",
    },
    'settings': {
        'record': BarangaySettings,
        'label': 'settings',
        'order_by': None,
        'descending': False,
        'search_fields': (),
        'filter_field': None,
        'filter_mode': 'equals',
        'required_fields': (),
        'default_status': None,
        'conflict_keys': ('user_id',),
        'duplicate_message': "Settings already exist for this user",
    },
}

ORDINANCE_CATEGORIES = ['Environment', 'Business', 'Public Safety', 'Health', 'Transportation']

ACTIVITY_TYPES = ['Environmental', 'Health', 'Social Services', 'Education', 'Sports', 'Cultural']

REPORT_CATEGORIES = [
    'Infrastructure', 'Public Safety', 'Health', 'Environment',
    'Animal Control', 'Utilities', 'Others',
]

ZONES = ['zone 1', 'zone 2', 'zone 3', 'zone 4']


def get_metadata(collection: str) -> dict:
    if collection not in COLLECTION_METADATA:
        raise ValueError(
            f"Unknown collection '{collection}'. Available: {list(COLLECTION_METADATA)}"
        )
    return COLLECTION_METADATA[collection]
