"""
PayDesk HR - Employee Model

Employees are paid either from an FTE rate applied to the global minimum
salary or from an explicit base salary. A base salary, when set, always
overrides the rate-derived figure.
"""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Date, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paydesk.models.base import BaseModel

if TYPE_CHECKING:
    from paydesk.models.payroll import PayrollRecord
    from paydesk.models.timesheet import TimesheetEntry
    from paydesk.models.vacation import VacationRequest


class Employee(BaseModel):
    """Employee record."""

    __tablename__ = "employees"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    position: Mapped[str] = mapped_column(String(150), nullable=False, default="")
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    termination_date: Mapped[Optional[date]] = mapped_column(
        Date, nullable=True,
        comment="Last working day; null while employed",
    )

    # Compensation basis
    rate: Mapped[Decimal] = mapped_column(
        Numeric(precision=5, scale=2),
        nullable=False,
        default=Decimal("1.00"),
        comment="FTE multiplier applied to the minimum salary (0.25, 0.5, 1)",
    )
    base_salary: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=True,
        comment="Explicit monthly salary, overrides rate * min_salary",
    )

    # Contacts
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    tax_identifier: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    # Relationships
    timesheet_entries: Mapped[List["TimesheetEntry"]] = relationship(
        "TimesheetEntry",
        back_populates="employee",
        cascade="all, delete-orphan",
    )
    payroll_records: Mapped[List["PayrollRecord"]] = relationship(
        "PayrollRecord",
        back_populates="employee",
        cascade="all, delete-orphan",
    )
    vacation_requests: Mapped[List["VacationRequest"]] = relationship(
        "VacationRequest",
        back_populates="employee",
        cascade="all, delete-orphan",
    )
