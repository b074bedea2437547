"""
PayDesk HR - Settings Router
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.database import get_async_session
from paydesk.schemas.settings import PayrollSettingsSchema
from paydesk.services.settings_service import SettingsService


router = APIRouter()


@router.get("", response_model=PayrollSettingsSchema, summary="Get payroll settings")
async def get_settings(db: AsyncSession = Depends(get_async_session)):
    """Stored settings merged over the configured defaults."""
    return PayrollSettingsSchema(**await SettingsService(db).get_settings())


@router.put("", response_model=PayrollSettingsSchema, summary="Save payroll settings")
async def save_settings(
    request: PayrollSettingsSchema,
    db: AsyncSession = Depends(get_async_session),
):
    """Replace all stored settings."""
    saved = await SettingsService(db).save_settings(request.model_dump())
    return PayrollSettingsSchema(**saved)
