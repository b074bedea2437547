"""
PayDesk HR - Payroll Models

One payroll record per employee per month. Input amounts are edited by
operators; derived amounts are always recomputed by the payroll
calculator before the record is written.
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Date, ForeignKey, Integer, Numeric, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paydesk.models.base import BaseModel

if TYPE_CHECKING:
    from paydesk.models.employee import Employee


def _money(comment: Optional[str] = None):
    return mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
        default=Decimal("0.00"),
        comment=comment,
    )


# Operator-editable amounts
PAYROLL_INPUT_FIELDS = (
    "worked_days",
    "bonus",
    "extra_pay",
    "vacation_pay_current",
    "vacation_pay_next",
    "sick_leave_payment",
    "advance_payment",
    "other_deductions",
)

# Amounts written only by the payroll calculator
PAYROLL_DERIVED_FIELDS = (
    "salary_accrued",
    "total_accrued",
    "income_tax",
    "pension_tax",
    "total_deductions",
    "total_payable",
    "payable_without_advance",
    "fszn_tax",
    "insurance_tax",
    "total_employee_cost",
    "is_tax_benefit_applied",
)


class PayrollRecord(BaseModel):
    """Monthly payroll accrual and deduction breakdown for an employee."""

    __tablename__ = "payroll_records"
    __table_args__ = (
        UniqueConstraint("employee_id", "year", "month", name="uq_payroll_records_employee_period"),
    )

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    month: Mapped[int] = mapped_column(Integer, nullable=False)

    # Inputs
    worked_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bonus: Mapped[Decimal] = _money()
    extra_pay: Mapped[Decimal] = _money()
    vacation_pay_current: Mapped[Decimal] = _money("Vacation pay attributed to this month")
    vacation_pay_next: Mapped[Decimal] = _money("Vacation pay for next month's vacations paid now")
    sick_leave_payment: Mapped[Decimal] = _money()
    advance_payment: Mapped[Decimal] = _money("Mid-month advance, not a deduction")
    other_deductions: Mapped[Decimal] = _money()
    payment_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Derived
    salary_accrued: Mapped[Decimal] = _money()
    total_accrued: Mapped[Decimal] = _money()
    income_tax: Mapped[Decimal] = _money()
    pension_tax: Mapped[Decimal] = _money()
    total_deductions: Mapped[Decimal] = _money()
    total_payable: Mapped[Decimal] = _money()
    payable_without_advance: Mapped[Decimal] = _money()
    fszn_tax: Mapped[Decimal] = _money("Employer FSZN contribution")
    insurance_tax: Mapped[Decimal] = _money("Employer insurance contribution")
    total_employee_cost: Mapped[Decimal] = _money()
    is_tax_benefit_applied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    employee: Mapped["Employee"] = relationship("Employee", back_populates="payroll_records")

    @property
    def period_label(self) -> str:
        return f"{self.year}-{self.month:02d}"
