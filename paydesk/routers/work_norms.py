"""
PayDesk HR - Work Norms Router
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.database import get_async_session
from paydesk.schemas.timesheet import WorkNormRequest, WorkNormResponse
from paydesk.services.work_norm_service import WorkNormService


router = APIRouter()


@router.get("", response_model=List[WorkNormResponse], summary="List work norms")
async def list_work_norms(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    db: AsyncSession = Depends(get_async_session),
):
    work_norms = await WorkNormService(db).list_work_norms(year)
    return [WorkNormResponse.model_validate(work_norm) for work_norm in work_norms]


@router.get("/{year}/{month}", response_model=WorkNormResponse, summary="Get work norm of a month")
async def get_work_norm(
    year: int,
    month: int,
    db: AsyncSession = Depends(get_async_session),
):
    work_norm = await WorkNormService(db).get_work_norm(year, month)
    if work_norm is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No work norm for {year}-{month:02d}",
        )
    return WorkNormResponse.model_validate(work_norm)


@router.put("", response_model=WorkNormResponse, summary="Create or replace work norm")
async def upsert_work_norm(
    request: WorkNormRequest,
    db: AsyncSession = Depends(get_async_session),
):
    work_norm = await WorkNormService(db).upsert_work_norm(**request.model_dump())
    return WorkNormResponse.model_validate(work_norm)


@router.delete("/{work_norm_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete work norm")
async def delete_work_norm(
    work_norm_id: UUID,
    db: AsyncSession = Depends(get_async_session),
):
    deleted = await WorkNormService(db).delete_work_norm(work_norm_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Work norm not found",
        )
