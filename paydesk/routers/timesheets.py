"""
PayDesk HR - Timesheets Router

API endpoints for daily attendance marks.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.database import get_async_session
from paydesk.schemas.timesheet import (
    TimesheetBulkUpsertRequest,
    TimesheetEntryResponse,
    TimesheetListResponse,
)
from paydesk.services.timesheet_service import TimesheetService


router = APIRouter()


@router.get(
    "",
    response_model=TimesheetListResponse,
    summary="List timesheet entries of a month",
)
async def list_entries(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    employee_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_async_session),
):
    entries = await TimesheetService(db).get_month_entries(year, month, employee_id)
    return TimesheetListResponse(
        entries=[TimesheetEntryResponse.model_validate(entry) for entry in entries],
        total=len(entries),
    )


@router.put(
    "",
    response_model=TimesheetListResponse,
    summary="Bulk upsert timesheet entries",
)
async def upsert_entries(
    request: TimesheetBulkUpsertRequest,
    db: AsyncSession = Depends(get_async_session),
):
    entries = await TimesheetService(db).upsert_entries(
        [entry.model_dump() for entry in request.entries]
    )
    return TimesheetListResponse(
        entries=[TimesheetEntryResponse.model_validate(entry) for entry in entries],
        total=len(entries),
    )


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete timesheet entry",
)
async def delete_entry(
    entry_id: UUID,
    db: AsyncSession = Depends(get_async_session),
):
    deleted = await TimesheetService(db).delete_entry(entry_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Timesheet entry not found",
        )
