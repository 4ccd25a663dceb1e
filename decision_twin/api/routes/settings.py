"""Settings Routes — app preferences and integration settings (partial updates)."""

from fastapi import APIRouter, Body, Depends

from decision_twin.api.dependencies import get_settings_service
from decision_twin.schemas.preferences import AppSettings, IntegrationSettings
from decision_twin.services.settings_service import SettingsService

router = APIRouter(prefix="/api/v1/settings", tags=["settings"])


@router.get("", response_model=AppSettings)
async def get_app_settings(service: SettingsService = Depends(get_settings_service)):
    return await service.get_settings()


@router.patch("", response_model=AppSettings)
async def update_app_settings(
    body: dict = Body(...), service: SettingsService = Depends(get_settings_service),
):
    return await service.save_settings(body)


@router.post("/reset", response_model=AppSettings)
async def reset_app_settings(service: SettingsService = Depends(get_settings_service)):
    return await service.reset_settings()


@router.get("/integrations", response_model=IntegrationSettings)
async def get_integrations(service: SettingsService = Depends(get_settings_service)):
    return await service.get_integration_settings()


@router.patch("/integrations", response_model=IntegrationSettings)
async def update_integrations(
    body: dict = Body(...), service: SettingsService = Depends(get_settings_service),
):
    return await service.save_integration_settings(body)
