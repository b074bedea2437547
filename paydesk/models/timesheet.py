"""
PayDesk HR - Timesheet Models

Daily attendance entries and the monthly work norm used as the
daily-rate denominator.
"""

import uuid
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Date, ForeignKey, Integer, Numeric, Enum as SQLEnum, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paydesk.models.base import BaseModel

if TYPE_CHECKING:
    from paydesk.models.employee import Employee


class DayStatus(str, Enum):
    """Attendance status of a single day."""
    WORK = "work"
    SICK = "sick"
    UNPAID = "unpaid"
    VACATION = "vacation"
    NONE = "none"


class TimesheetEntry(BaseModel):
    """
    One attendance mark for an employee on a date.

    Several entries for the same date may exist (later corrections are
    stored next to earlier ones); readers merge them with "work wins".
    """

    __tablename__ = "timesheet_entries"

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    work_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    status: Mapped[DayStatus] = mapped_column(
        SQLEnum(DayStatus),
        default=DayStatus.WORK,
        nullable=False,
    )

    employee: Mapped["Employee"] = relationship("Employee", back_populates="timesheet_entries")


class WorkNorm(BaseModel):
    """Standard working time for a calendar month."""

    __tablename__ = "work_norms"
    __table_args__ = (
        UniqueConstraint("year", "month", name="uq_work_norms_year_month"),
    )

    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    norm_hours: Mapped[Decimal] = mapped_column(
        Numeric(precision=6, scale=2),
        nullable=False,
        default=Decimal("0"),
    )
    working_days: Mapped[int] = mapped_column(
        Integer, nullable=False, default=20,
        comment="Standard working days, pre-holiday days included",
    )
    holiday_days: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
        comment="Shortened pre-holiday working days within working_days",
    )
    pre_holiday_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    @property
    def total_working_days(self) -> int:
        """Daily-rate denominator."""
        return (self.working_days or 0) + (self.holiday_days or 0)
