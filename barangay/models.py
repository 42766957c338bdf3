"""
Data models for the barangay registry.

Defines the record types read from and written to the row store, and the
derived household view built by the aggregator.
"""

from dataclasses import dataclass, field, fields, asdict
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from .errors import RecordValidationError

# Alias so Activity.date can be annotated without shadowing
EventDate = date


class Gender(Enum):
    """Resident gender options"""
    MALE = "Male"
    FEMALE = "Female"


class CivilStatus(Enum):
    """Resident civil status options"""
    SINGLE = "Single"
    MARRIED = "Married"
    WIDOW = "Widow"
    WIDOWER = "Widower"
    SEPARATED = "Separated"


class OfficialStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class DutyStatus(Enum):
    """Two-state duty cycle for officials"""
    OFF_DUTY = "off_duty"
    ON_DUTY = "on_duty"


class OrdinanceStatus(Enum):
    ACTIVE = "active"
    SUPERSEDED = "superseded"
    REPEALED = "repealed"


class ActivityStatus(Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ReportStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class ReportPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# Role and benefit tags a resident can carry
HEAD_OF_HOUSEHOLD = "Head of Household"

RESIDENT_TAGS = [
    "Voter",
    "Senior Citizen",
    "PWD",
    "4Ps Beneficiary",
    HEAD_OF_HOUSEHOLD,
    "Healthcare Worker",
    "Student",
    "Solo Parent",
]

# Bucket key for residents without a house number
NO_HOUSE_NUMBER = "No House Number"


# ============================================================================
# Row helpers
# ============================================================================

def _known_fields(cls: Type, row: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only the keys of ``row`` that are fields of dataclass ``cls``"""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in row.items() if k in names}


def _choice(value: Any, enum_cls: Type[Enum], field_name: str) -> str:
    """Return the string value of ``value`` if it is a member of ``enum_cls``"""
    if isinstance(value, enum_cls):
        return value.value
    allowed = [e.value for e in enum_cls]
    if value not in allowed:
        raise RecordValidationError(
            f"Invalid {field_name} {value!r}; must be one of: {allowed}"
        )
    return value


def _required(row: Dict[str, Any], *names: str) -> None:
    for name in names:
        value = row.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise RecordValidationError(f"Row is missing required field '{name}'")


# ============================================================================
# Residents and households
# ============================================================================

@dataclass
class ResidentRecord:
    """
    A registered resident.

    ``status`` holds role and benefit tags such as "Voter" or
    "Head of Household". ``house_number`` is free text and may be absent.
    """
    first_name: str
    last_name: str
    id: Optional[str] = None
    middle_name: Optional[str] = None
    age: int = 0
    gender: str = ""  # Gender value
    civil_status: str = ""  # CivilStatus value
    address: str = ""
    house_number: Optional[str] = None
    contact: Optional[str] = None
    occupation: Optional[str] = None
    status: List[str] = field(default_factory=list)
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ResidentRecord":
        _required(row, 'first_name', 'last_name')
        data = _known_fields(cls, row)
        data['gender'] = _choice(row.get('gender'), Gender, 'gender')
        data['civil_status'] = _choice(row.get('civil_status'), CivilStatus, 'civil_status')
        data['status'] = list(row.get('status') or [])
        data['age'] = int(row.get('age') or 0)
        return cls(**data)

    def full_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p for p in parts if p)

    def has_tag(self, tag: str) -> bool:
        return tag in self.status

    def is_head_of_household(self) -> bool:
        return self.has_tag(HEAD_OF_HOUSEHOLD)

    def is_senior(self) -> bool:
        """Check if resident is 60+ (local senior citizen threshold)"""
        return self.age >= 60

    def to_dict(self) -> dict:
        data = asdict(self)
        data['full_name'] = self.full_name()
        return data


@dataclass
class Utilities:
    """Utility connections of a household"""
    electricity: bool = False
    water: bool = False
    internet: bool = False

    @classmethod
    def from_value(cls, value: Any) -> "Utilities":
        """
        Build from a stored value.

        Missing sub-flags default to False; ``None`` means no connections.
        """
        if isinstance(value, Utilities):
            return cls(value.electricity, value.water, value.internet)
        value = value or {}
        return cls(
            electricity=bool(value.get('electricity', False)),
            water=bool(value.get('water', False)),
            internet=bool(value.get('internet', False)),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class HouseholdRecord:
    """A standalone household row keyed by house number"""
    house_number: str
    address: Optional[str] = None
    utilities: Utilities = field(default_factory=Utilities)
    monthly_income: Optional[float] = None
    id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "HouseholdRecord":
        _required(row, 'house_number')
        data = _known_fields(cls, row)
        data['utilities'] = Utilities.from_value(row.get('utilities'))
        income = row.get('monthly_income')
        if income is not None:
            income = float(income)
            if income < 0:
                raise RecordValidationError("monthly_income must not be negative")
        data['monthly_income'] = income
        return cls(**data)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class HouseholdView:
    """
    Household as shown to users, derived from residents and household rows.

    Never persisted; rebuilt on every load by ``aggregate_households``.
    """
    house_number: str
    address: str = ""
    residents: List[ResidentRecord] = field(default_factory=list)
    total_members: int = 0
    head_of_household: Optional[str] = None
    contacts: List[str] = field(default_factory=list)
    utilities: Utilities = field(default_factory=Utilities)
    monthly_income: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            'house_number': self.house_number,
            'address': self.address,
            'residents': [r.to_dict() for r in self.residents],
            'total_members': self.total_members,
            'head_of_household': self.head_of_household,
            'contacts': list(self.contacts),
            'utilities': self.utilities.to_dict(),
            'monthly_income': self.monthly_income,
        }


# ============================================================================
# Officials, ordinances, activities, reports
# ============================================================================

@dataclass
class Official:
    """A barangay official with an on/off duty cycle"""
    name: str
    position: str
    id: Optional[str] = None
    term: Optional[str] = None
    contact: Optional[str] = None
    email: Optional[str] = None
    photo: Optional[str] = None
    status: str = OfficialStatus.ACTIVE.value
    duty_status: str = DutyStatus.OFF_DUTY.value
    time_in: Optional[datetime] = None
    time_out: Optional[datetime] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Official":
        _required(row, 'name', 'position')
        data = _known_fields(cls, row)
        data['status'] = _choice(row.get('status') or OfficialStatus.ACTIVE.value, OfficialStatus, 'status')
        data['duty_status'] = _choice(
            row.get('duty_status') or DutyStatus.OFF_DUTY.value, DutyStatus, 'duty_status'
        )
        return cls(**data)

    def is_on_duty(self) -> bool:
        return self.duty_status == DutyStatus.ON_DUTY.value

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Ordinance:
    number: str
    title: str
    category: str
    id: Optional[str] = None
    date_enacted: Optional[date] = None
    description: Optional[str] = None
    status: str = OrdinanceStatus.ACTIVE.value
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Ordinance":
        _required(row, 'number', 'title', 'category')
        data = _known_fields(cls, row)
        data['status'] = _choice(row.get('status') or OrdinanceStatus.ACTIVE.value, OrdinanceStatus, 'status')
        return cls(**data)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Activity:
    """A community activity or event"""
    title: str
    type: str
    id: Optional[str] = None
    description: Optional[str] = None
    date: Optional[EventDate] = None
    time: Optional[str] = None  # e.g. "06:00 AM"
    location: str = ""
    budget: float = 0
    attendees: int = 0
    max_attendees: Optional[int] = None
    status: str = ActivityStatus.UPCOMING.value
    organizer: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Activity":
        _required(row, 'title', 'type')
        data = _known_fields(cls, row)
        data['status'] = _choice(row.get('status') or ActivityStatus.UPCOMING.value, ActivityStatus, 'status')
        data['budget'] = float(row.get('budget') or 0)
        data['attendees'] = int(row.get('attendees') or 0)
        return cls(**data)

    def is_full(self) -> bool:
        return self.max_attendees is not None and self.attendees >= self.max_attendees

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Report:
    """An incident or complaint ticket filed by a resident"""
    ticket_number: str
    title: str
    category: str
    description: str
    reported_by: str
    id: Optional[str] = None
    date_submitted: Optional[date] = None
    status: str = ReportStatus.PENDING.value
    priority: str = ReportPriority.MEDIUM.value
    assigned_to: Optional[str] = None
    resolution: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Report":
        _required(row, 'ticket_number', 'title')
        data = _known_fields(cls, row)
        data['category'] = row.get('category') or ""
        data['description'] = row.get('description') or ""
        data['reported_by'] = row.get('reported_by') or ""
        data['status'] = _choice(row.get('status') or ReportStatus.PENDING.value, ReportStatus, 'status')
        data['priority'] = _choice(
            row.get('priority') or ReportPriority.MEDIUM.value, ReportPriority, 'priority'
        )
        return cls(**data)

    def to_dict(self) -> dict:
        return asdict(self)


# ============================================================================
# Settings and users
# ============================================================================

DEFAULT_BARANGAY_INFO = {
    'name': "Barangay San Miguel",
    'address': "San Miguel, Bulacan, Philippines",
    'contact_number': "+63-44-123-4567",
    'email': "sanmiguel.barangay@gmail.com",
    'captain_name': "Juan C. Dela Cruz",
    'description': "A progressive barangay committed to serving its community with integrity and excellence.",
}

DEFAULT_NOTIFICATIONS = {
    'email_notifications': True,
    'sms_notifications': False,
    'system_alerts': True,
    'report_updates': True,
}

DEFAULT_SYSTEM = {
    'auto_backup': True,
    'data_retention_months': 12,
    'session_timeout_minutes': 30,
    'two_factor_auth': False,
}


@dataclass
class BarangaySettings:
    """Per-user console settings; unset keys fall back to the defaults above"""
    user_id: Optional[str] = None
    id: Optional[str] = None
    barangay_info: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_BARANGAY_INFO))
    notifications: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_NOTIFICATIONS))
    system: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_SYSTEM))
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "BarangaySettings":
        data = _known_fields(cls, row)
        data['barangay_info'] = {**DEFAULT_BARANGAY_INFO, **(row.get('barangay_info') or {})}
        data['notifications'] = {**DEFAULT_NOTIFICATIONS, **(row.get('notifications') or {})}
        data['system'] = {**DEFAULT_SYSTEM, **(row.get('system') or {})}
        return cls(**data)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class User:
    """An account that can sign in to the console"""
    id: str
    email: str
    display_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "User":
        _required(row, 'id', 'email')
        return cls(**_known_fields(cls, row))

    def to_dict(self) -> dict:
        return asdict(self)
