"""
Console settings endpoints.

Settings are kept per signed-in user; a user who never saved any sees the
defaults.
"""

from typing import Annotated
from fastapi import APIRouter, Depends

from barangay.models import BarangaySettings
from barangay.resources import ResourceList
from ..dependencies import CurrentUser, resource_list
from ..models import SettingsResponse, SettingsUpdate


router = APIRouter(
    prefix="/settings",
    tags=["settings"]
)

SettingsList = Annotated[ResourceList, Depends(resource_list('settings'))]


def current_settings(settings: ResourceList, user_id: str) -> BarangaySettings:
    saved = settings.find(user_id=user_id)
    return saved[0] if saved else BarangaySettings(user_id=user_id)


@router.get("", response_model=SettingsResponse)
def get_console_settings(user: CurrentUser, settings: SettingsList):
    return SettingsResponse(**current_settings(settings, user.id).to_dict())


@router.put("", response_model=SettingsResponse)
def save_console_settings(request: SettingsUpdate, user: CurrentUser, settings: SettingsList):
    """
    Save settings.

    Only the keys present in the request change; everything else keeps its
    saved or default value.
    """
    current = current_settings(settings, user.id)
    row = {
        'user_id': user.id,
        'barangay_info': {**current.barangay_info, **_changes(request.barangay_info)},
        'notifications': {**current.notifications, **_changes(request.notifications)},
        'system': {**current.system, **_changes(request.system)},
    }
    return SettingsResponse(**settings.upsert(row, user.id).to_dict())


def _changes(section) -> dict:
    return section.model_dump(exclude_none=True) if section is not None else {}
