"""
PayDesk HR - Timesheet Service

Daily attendance entries and worked-day counts per employee and month.
"""

import logging
import uuid
from calendar import monthrange
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.models.employee import Employee
from paydesk.models.timesheet import DayStatus, TimesheetEntry
from paydesk.services.calculators.attendance import AttendanceAggregator
from paydesk.utils.error_handling import EmployeeNotFoundException, InvalidPeriodException

logger = logging.getLogger(__name__)


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a month."""
    if not 1 <= month <= 12:
        raise InvalidPeriodException(year, month)
    return date(year, month, 1), date(year, month, monthrange(year, month)[1])


class TimesheetService:
    """Service for timesheet entries."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.aggregator = AttendanceAggregator()

    async def get_month_entries(
        self,
        year: int,
        month: int,
        employee_id: Optional[uuid.UUID] = None,
    ) -> List[TimesheetEntry]:
        """Entries of a month, optionally for one employee."""
        start, end = month_bounds(year, month)

        query = select(TimesheetEntry).where(
            and_(
                TimesheetEntry.work_date >= start,
                TimesheetEntry.work_date <= end,
            )
        )
        if employee_id is not None:
            query = query.where(TimesheetEntry.employee_id == employee_id)

        query = query.order_by(TimesheetEntry.work_date, TimesheetEntry.created_at)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def upsert_entries(self, entries: Iterable[Dict[str, Any]]) -> List[TimesheetEntry]:
        """
        Bulk create or update entries.

        An entry with ``id`` updates that row; otherwise the first row for the
        same employee and date is updated, or a new row is created.
        """
        saved: List[TimesheetEntry] = []

        for data in entries:
            entry: Optional[TimesheetEntry] = None

            if data.get("id"):
                entry = await self.db.get(TimesheetEntry, data["id"])
            if entry is None:
                result = await self.db.execute(
                    select(TimesheetEntry)
                    .where(TimesheetEntry.employee_id == data["employee_id"])
                    .where(TimesheetEntry.work_date == data["work_date"])
                    .order_by(TimesheetEntry.created_at)
                )
                entry = result.scalars().first()

            status = DayStatus(data.get("status") or DayStatus.WORK)
            if entry is None:
                entry = TimesheetEntry(
                    employee_id=data["employee_id"],
                    work_date=data["work_date"],
                    status=status,
                )
                self.db.add(entry)
            else:
                entry.status = status

            saved.append(entry)

        await self.db.commit()
        for entry in saved:
            await self.db.refresh(entry)

        return saved

    async def delete_entry(self, entry_id: uuid.UUID) -> bool:
        entry = await self.db.get(TimesheetEntry, entry_id)
        if entry is None:
            return False
        await self.db.delete(entry)
        await self.db.commit()
        return True

    async def count_worked_days(self, employee_id: uuid.UUID, year: int, month: int) -> int:
        """
        Worked days of an employee in a month.

        Entries after the employee's termination date are ignored.
        """
        employee = await self.db.get(Employee, employee_id)
        if employee is None:
            raise EmployeeNotFoundException(employee_id)

        entries = await self.get_month_entries(year, month, employee_id)
        worked_days = self.aggregator.count_worked_days(
            entries, month, year, employee.termination_date
        )

        logger.debug(
            f"Worked days for employee {employee_id} in {year}-{month:02d}: {worked_days} "
            f"{self.aggregator.status_distribution(entries, month, year, employee.termination_date)}"
        )
        return worked_days
