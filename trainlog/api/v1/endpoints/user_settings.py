"""
User settings endpoints.
"""

from fastapi import APIRouter, Depends

from trainlog.api.dependencies import get_settings_store
from trainlog.schemas.user_settings import UserSettingsResponse, UserSettingsUpdate
from trainlog.services.settings_service import UserSettingsStore

router = APIRouter()


def _to_response(store: UserSettingsStore) -> UserSettingsResponse:
    return UserSettingsResponse(weight_unit=store.weight_unit, updated_at=store.updated_at)


@router.get("", summary="Get the user settings.", response_model=UserSettingsResponse)
async def get_user_settings(store: UserSettingsStore = Depends(get_settings_store)):
    return _to_response(store)


@router.put("", summary="Update the weight unit.", response_model=UserSettingsResponse)
async def update_user_settings(data: UserSettingsUpdate, store: UserSettingsStore = Depends(get_settings_store)):
    store.update_weight_unit(data.weight_unit)
    return _to_response(store)
