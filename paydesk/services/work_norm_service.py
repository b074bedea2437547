"""
PayDesk HR - Work Norm Service

Standard working time per calendar month.
"""

import uuid
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.models.timesheet import WorkNorm
from paydesk.utils.error_handling import InvalidPeriodException


class WorkNormService:
    """Service for work norms keyed by (year, month)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_work_norms(self, year: Optional[int] = None) -> List[WorkNorm]:
        query = select(WorkNorm)
        if year is not None:
            query = query.where(WorkNorm.year == year)
        query = query.order_by(WorkNorm.year, WorkNorm.month)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_work_norm(self, year: int, month: int) -> Optional[WorkNorm]:
        result = await self.db.execute(
            select(WorkNorm)
            .where(WorkNorm.year == year)
            .where(WorkNorm.month == month)
        )
        return result.scalar_one_or_none()

    async def upsert_work_norm(
        self,
        year: int,
        month: int,
        norm_hours: Decimal,
        working_days: int = 20,
        holiday_days: int = 0,
        pre_holiday_days: Optional[int] = None,
    ) -> WorkNorm:
        """Create or replace the norm for a month."""
        if not 1 <= month <= 12:
            raise InvalidPeriodException(year, month)

        work_norm = await self.get_work_norm(year, month)
        if work_norm is None:
            work_norm = WorkNorm(year=year, month=month)
            self.db.add(work_norm)

        work_norm.norm_hours = norm_hours
        work_norm.working_days = working_days
        work_norm.holiday_days = holiday_days
        work_norm.pre_holiday_days = pre_holiday_days

        await self.db.commit()
        await self.db.refresh(work_norm)
        return work_norm

    async def delete_work_norm(self, work_norm_id: uuid.UUID) -> bool:
        work_norm = await self.db.get(WorkNorm, work_norm_id)
        if work_norm is None:
            return False
        await self.db.delete(work_norm)
        await self.db.commit()
        return True
