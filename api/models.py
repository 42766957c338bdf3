"""
Pydantic models for API requests and responses.

These models define the structure of data sent to and from the API.
"""

import datetime as dt
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from barangay.models import (
    ActivityStatus,
    CivilStatus,
    Gender,
    OfficialStatus,
    OrdinanceStatus,
    ReportPriority,
    ReportStatus,
    NO_HOUSE_NUMBER,
)


class FormModel(BaseModel):
    """Base for submitted forms; enums are stored by value"""
    model_config = ConfigDict(use_enum_values=True)


# ============================================================================
# AUTH
# ============================================================================

class SignUpRequest(FormModel):
    email: str = Field(..., description="Account email", examples=["secretary@barangay.gov.ph"])
    password: str = Field(..., description="Password (6+ characters)")
    display_name: Optional[str] = Field(None, description="Name shown in the console")


class SignInRequest(FormModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: str
    email: str
    display_name: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: dt.datetime
    user: UserResponse


# ============================================================================
# RESIDENTS
# ============================================================================

def _unique_tags(tags: List[str]) -> List[str]:
    seen = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def _real_house_number(value: Optional[str]) -> Optional[str]:
    if value is not None and value.strip().lower() == NO_HOUSE_NUMBER.lower():
        raise ValueError(f"'{NO_HOUSE_NUMBER}' is reserved for residents without a house number")
    return value


class ResidentCreate(FormModel):
    """Request model for registering a resident"""

    first_name: str = Field(..., examples=["Juan"])
    last_name: str = Field(..., examples=["Dela Cruz"])
    middle_name: Optional[str] = None
    age: int = Field(..., ge=1, le=149, description="Age in years")
    gender: Gender
    civil_status: CivilStatus
    address: str = Field(..., examples=["Mabini St., Zone 1"])
    house_number: Optional[str] = Field(None, description="House number used to group households")
    contact: Optional[str] = None
    occupation: Optional[str] = None
    status: List[str] = Field(default_factory=list, description="Tags such as 'Voter' or 'Head of Household'")

    @field_validator('status')
    @classmethod
    def dedupe_status(cls, v):
        return _unique_tags(v)

    @field_validator('house_number')
    @classmethod
    def check_house_number(cls, v):
        return _real_house_number(v)


class ResidentUpdate(FormModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    age: Optional[int] = Field(None, ge=1, le=149)
    gender: Optional[Gender] = None
    civil_status: Optional[CivilStatus] = None
    address: Optional[str] = None
    house_number: Optional[str] = None
    contact: Optional[str] = None
    occupation: Optional[str] = None
    status: Optional[List[str]] = None

    @field_validator('status')
    @classmethod
    def dedupe_status(cls, v):
        return _unique_tags(v) if v is not None else v

    @field_validator('house_number')
    @classmethod
    def check_house_number(cls, v):
        return _real_house_number(v)


class ResidentResponse(BaseModel):
    id: Optional[str] = None
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    full_name: str
    age: int
    gender: str
    civil_status: str
    address: str
    house_number: Optional[str] = None
    contact: Optional[str] = None
    occupation: Optional[str] = None
    status: List[str] = []
    user_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class ResidentListResponse(BaseModel):
    residents: List[ResidentResponse]
    count: int


# ============================================================================
# HOUSEHOLDS
# ============================================================================

class UtilitiesModel(BaseModel):
    electricity: bool = False
    water: bool = False
    internet: bool = False


class HouseholdCreate(FormModel):
    """Request model for registering a household record"""

    house_number: str = Field(..., examples=["123"])
    address: str = Field(..., examples=["Mabini St., Zone 1"])
    utilities: UtilitiesModel = Field(default_factory=UtilitiesModel)
    monthly_income: Optional[float] = Field(None, ge=0, description="Monthly household income")

    @field_validator('house_number')
    @classmethod
    def check_house_number(cls, v):
        return _real_house_number(v)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "house_number": "123",
                "address": "Mabini St., Zone 1",
                "utilities": {"electricity": True, "water": True, "internet": False},
                "monthly_income": 25000
            }
        }
    )


class HouseholdUpdate(FormModel):
    address: Optional[str] = None
    utilities: Optional[UtilitiesModel] = None
    monthly_income: Optional[float] = Field(None, ge=0)


class HouseholdRecordResponse(BaseModel):
    id: Optional[str] = None
    house_number: str
    address: Optional[str] = None
    utilities: UtilitiesModel
    monthly_income: Optional[float] = None
    user_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class HouseholdViewResponse(BaseModel):
    """A household as grouped from residents and household records"""
    house_number: str
    address: str
    residents: List[ResidentResponse]
    total_members: int
    head_of_household: Optional[str] = None
    contacts: List[str]
    utilities: UtilitiesModel
    monthly_income: Optional[float] = None


class HouseholdListResponse(BaseModel):
    households: List[HouseholdViewResponse]
    count: int = Field(..., description="Number of households shown")
    total_residents: int = Field(..., description="Residents across the households shown")


# ============================================================================
# OFFICIALS
# ============================================================================

class OfficialCreate(FormModel):
    name: str = Field(..., examples=["Maria Santos"])
    position: str = Field(..., examples=["Barangay Captain"])
    term: Optional[str] = Field(None, examples=["2023-2026"])
    contact: Optional[str] = None
    email: Optional[str] = None
    photo: Optional[str] = None
    status: Optional[OfficialStatus] = None


class OfficialUpdate(FormModel):
    name: Optional[str] = None
    position: Optional[str] = None
    term: Optional[str] = None
    contact: Optional[str] = None
    email: Optional[str] = None
    photo: Optional[str] = None
    status: Optional[OfficialStatus] = None


class OfficialResponse(BaseModel):
    id: Optional[str] = None
    name: str
    position: str
    term: Optional[str] = None
    contact: Optional[str] = None
    email: Optional[str] = None
    photo: Optional[str] = None
    status: str
    duty_status: str
    time_in: Optional[dt.datetime] = None
    time_out: Optional[dt.datetime] = None
    user_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class OfficialListResponse(BaseModel):
    officials: List[OfficialResponse]
    count: int
    on_duty: int


# ============================================================================
# ORDINANCES
# ============================================================================

class OrdinanceCreate(FormModel):
    number: str = Field(..., examples=["ORD-2024-001"])
    title: str = Field(..., examples=["Anti-Littering Ordinance"])
    category: str = Field(..., examples=["Environment"])
    date_enacted: Optional[dt.date] = None
    description: Optional[str] = None
    status: Optional[OrdinanceStatus] = None


class OrdinanceUpdate(FormModel):
    number: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None
    date_enacted: Optional[dt.date] = None
    description: Optional[str] = None
    status: Optional[OrdinanceStatus] = None


class OrdinanceResponse(BaseModel):
    id: Optional[str] = None
    number: str
    title: str
    category: str
    date_enacted: Optional[dt.date] = None
    description: Optional[str] = None
    status: str
    user_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class OrdinanceListResponse(BaseModel):
    ordinances: List[OrdinanceResponse]
    count: int


# ============================================================================
# ACTIVITIES
# ============================================================================

class ActivityCreate(FormModel):
    title: str = Field(..., examples=["Community Clean-up Drive"])
    type: str = Field(..., examples=["Environmental"])
    description: Optional[str] = None
    date: dt.date
    time: Optional[str] = Field(None, examples=["06:00 AM"])
    location: str = Field(..., examples=["Barangay Hall - Main Street"])
    budget: float = Field(0, ge=0)
    attendees: int = Field(0, ge=0)
    max_attendees: Optional[int] = Field(None, ge=1)
    status: Optional[ActivityStatus] = None
    organizer: Optional[str] = None


class ActivityUpdate(FormModel):
    title: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    location: Optional[str] = None
    budget: Optional[float] = Field(None, ge=0)
    attendees: Optional[int] = Field(None, ge=0)
    max_attendees: Optional[int] = Field(None, ge=1)
    status: Optional[ActivityStatus] = None
    organizer: Optional[str] = None


class ActivityResponse(BaseModel):
    id: Optional[str] = None
    title: str
    type: str
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    location: str = ""
    budget: float = 0
    attendees: int = 0
    max_attendees: Optional[int] = None
    status: str
    organizer: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class ActivityListResponse(BaseModel):
    activities: List[ActivityResponse]
    count: int


# ============================================================================
# REPORTS
# ============================================================================

class ReportCreate(FormModel):
    title: str = Field(..., examples=["Broken Street Light on Rizal Street"])
    category: str = Field(..., examples=["Infrastructure"])
    description: str
    reported_by: str = Field(..., examples=["Maria Santos"])
    ticket_number: Optional[str] = Field(None, description="Generated as RPT-<year>-<seq> when omitted")
    date_submitted: Optional[dt.date] = None
    priority: Optional[ReportPriority] = None
    status: Optional[ReportStatus] = None
    assigned_to: Optional[str] = None
    resolution: Optional[str] = None


class ReportUpdate(FormModel):
    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    reported_by: Optional[str] = None
    priority: Optional[ReportPriority] = None
    status: Optional[ReportStatus] = None
    assigned_to: Optional[str] = None
    resolution: Optional[str] = None


class ReportResponse(BaseModel):
    id: Optional[str] = None
    ticket_number: str
    title: str
    category: str
    description: str
    reported_by: str
    date_submitted: Optional[dt.date] = None
    status: str
    priority: str
    assigned_to: Optional[str] = None
    resolution: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class ReportListResponse(BaseModel):
    reports: List[ReportResponse]
    count: int


# ============================================================================
# SETTINGS
# ============================================================================

class BarangayInfo(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    contact_number: Optional[str] = None
    email: Optional[str] = None
    captain_name: Optional[str] = None
    description: Optional[str] = None


class NotificationSettings(BaseModel):
    email_notifications: Optional[bool] = None
    sms_notifications: Optional[bool] = None
    system_alerts: Optional[bool] = None
    report_updates: Optional[bool] = None


class SystemSettings(BaseModel):
    auto_backup: Optional[bool] = None
    data_retention_months: Optional[int] = Field(None, ge=1, le=120)
    session_timeout_minutes: Optional[int] = Field(None, ge=5, le=1440)
    two_factor_auth: Optional[bool] = None


class SettingsUpdate(FormModel):
    """Partial settings; omitted keys keep their saved or default values"""
    barangay_info: Optional[BarangayInfo] = None
    notifications: Optional[NotificationSettings] = None
    system: Optional[SystemSettings] = None


class SettingsResponse(BaseModel):
    barangay_info: Dict[str, object]
    notifications: Dict[str, object]
    system: Dict[str, object]
    updated_at: Optional[dt.datetime] = None


# ============================================================================
# DASHBOARD & HEALTH
# ============================================================================

class DashboardResponse(BaseModel):
    total_residents: int
    total_households: int
    unassigned_residents: int
    senior_citizens: int
    ongoing_activities: int
    reports_submitted: int
    pending_reports: int
    resident_tags: Dict[str, int]
    activities_by_status: Dict[str, int]
    reports_by_status: Dict[str, int]
    recent_activities: List[ActivityResponse]


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    database: str = Field(..., description="Database connection status")
    timestamp: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc),
        description="Check timestamp (UTC)"
    )
