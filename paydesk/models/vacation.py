"""
PayDesk HR - Vacation Models

Vacation requests with their computed payment, yearly day balances and
payment disbursements.
"""

import uuid
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    Boolean, Date, ForeignKey, Integer, Numeric, Text, Enum as SQLEnum, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paydesk.models.base import BaseModel

if TYPE_CHECKING:
    from paydesk.models.employee import Employee


class VacationStatus(str, Enum):
    """Vacation request lifecycle."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


class VacationRequest(BaseModel):
    """A vacation filed by or for an employee."""

    __tablename__ = "vacation_requests"

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    days_count: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[VacationStatus] = mapped_column(
        SQLEnum(VacationStatus),
        default=VacationStatus.PENDING,
        nullable=False,
    )
    payment_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2), nullable=False, default=Decimal("0.00"),
    )
    average_salary: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2), nullable=False, default=Decimal("0.00"),
    )
    calculation_period_start: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    calculation_period_end: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    employee: Mapped["Employee"] = relationship("Employee", back_populates="vacation_requests")
    payments: Mapped[List["VacationPayment"]] = relationship(
        "VacationPayment",
        back_populates="vacation_request",
        cascade="all, delete-orphan",
        order_by="VacationPayment.payment_date",
    )


class VacationBalance(BaseModel):
    """Vacation days entitled and consumed by an employee in a year."""

    __tablename__ = "vacation_balances"
    __table_args__ = (
        UniqueConstraint("employee_id", "year", name="uq_vacation_balances_employee_year"),
    )

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    days_entitled: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    days_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    days_scheduled: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    days_remaining: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def recalculate_remaining(self) -> int:
        self.days_remaining = (
            (self.days_entitled or 0) - (self.days_used or 0) - (self.days_scheduled or 0)
        )
        return self.days_remaining


class VacationPayment(BaseModel):
    """A disbursement against a vacation request."""

    __tablename__ = "vacation_payments"

    vacation_request_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("vacation_requests.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    payment_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    vacation_request: Mapped["VacationRequest"] = relationship(
        "VacationRequest", back_populates="payments",
    )
