"""API endpoints for the library-wide system settings."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import APIResponse
from app.schemas.system_settings import SystemSettingsResponse
from app.services.settings_service import get_settings_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _serialize(settings_row) -> dict:
    return SystemSettingsResponse.model_validate(settings_row).model_dump(
        mode="json", by_alias=True
    )


@router.get("")
async def get_system_settings(
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Get the current system settings, creating defaults on first use."""
    service = get_settings_service()
    settings_row = await service.get(db)
    return APIResponse(status="success", data=_serialize(settings_row))


@router.api_route("", methods=["PUT", "PATCH"])
async def update_system_settings(
    body: Any = Body(...),
    db: AsyncSession = Depends(get_db),
) -> APIResponse:
    """Apply a partial update; omitted fields keep their current values."""
    service = get_settings_service()
    settings_row = await service.update(db, body)
    return APIResponse(
        status="success",
        data=_serialize(settings_row),
        message="Settings updated successfully",
    )
