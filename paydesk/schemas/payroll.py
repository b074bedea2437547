"""
PayDesk HR - Payroll Schemas

Pydantic schemas for payroll requests and responses.
Amounts are non-negative at the API boundary; the calculator itself does
not validate them.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from paydesk.schemas.settings import PayrollSettingsSchema


# ===========================================
# INPUT AMOUNTS
# ===========================================

class PayrollAmountsBase(BaseModel):
    """Operator-editable payroll inputs."""
    worked_days: int = Field(0, ge=0, le=31)
    bonus: Decimal = Field(default=Decimal("0"), ge=0)
    extra_pay: Decimal = Field(default=Decimal("0"), ge=0)
    vacation_pay_current: Decimal = Field(default=Decimal("0"), ge=0)
    vacation_pay_next: Decimal = Field(default=Decimal("0"), ge=0)
    sick_leave_payment: Decimal = Field(default=Decimal("0"), ge=0)
    advance_payment: Decimal = Field(default=Decimal("0"), ge=0)
    other_deductions: Decimal = Field(default=Decimal("0"), ge=0)


class PayrollCalculateRequest(PayrollAmountsBase):
    """
    Stateless calculation; nothing is read from or written to the database.

    Settings default to the configured payroll defaults when omitted.
    """
    working_days: int = Field(..., ge=0, le=31)
    holiday_days: int = Field(0, ge=0, le=31)
    rate: Decimal = Field(Decimal("1"), ge=0, le=10)
    base_salary: Optional[Decimal] = Field(None, ge=0)
    settings: Optional[PayrollSettingsSchema] = None


class PayrollUpsertRequest(BaseModel):
    """
    Create or update a payroll record.

    Omitted amounts keep their stored values. Derived amounts cannot be sent.
    """
    employee_id: UUID
    year: int = Field(..., ge=2000, le=2100)
    month: int = Field(..., ge=1, le=12)
    worked_days: Optional[int] = Field(None, ge=0, le=31)
    bonus: Optional[Decimal] = Field(None, ge=0)
    extra_pay: Optional[Decimal] = Field(None, ge=0)
    vacation_pay_current: Optional[Decimal] = Field(None, ge=0)
    vacation_pay_next: Optional[Decimal] = Field(None, ge=0)
    sick_leave_payment: Optional[Decimal] = Field(None, ge=0)
    advance_payment: Optional[Decimal] = Field(None, ge=0)
    other_deductions: Optional[Decimal] = Field(None, ge=0)
    payment_date: Optional[date] = None


class PayrollComputeRequest(PayrollUpsertRequest):
    """Recompute from timesheet (and optionally KPI results)."""
    use_kpi_bonus: bool = False


class PayrollPeriodRequest(BaseModel):
    year: int = Field(..., ge=2000, le=2100)
    month: int = Field(..., ge=1, le=12)


# ===========================================
# RESPONSE SCHEMAS
# ===========================================

class PayrollBreakdownResponse(BaseModel):
    """Calculator output."""
    base_salary: Decimal
    daily_rate: Decimal
    salary_accrued: Decimal
    total_accrued: Decimal
    taxable_base: Decimal
    income_tax: Decimal
    pension_tax: Decimal
    total_deductions: Decimal
    total_payable: Decimal
    payable_without_advance: Decimal
    fszn_tax: Decimal
    insurance_tax: Decimal
    total_employee_cost: Decimal
    is_tax_benefit_applied: bool
    suggested_advance_payment: Decimal


class PayrollRecordResponse(BaseModel):
    """Stored payroll record."""
    id: UUID
    employee_id: UUID
    year: int
    month: int

    # Inputs
    worked_days: int
    bonus: Decimal
    extra_pay: Decimal
    vacation_pay_current: Decimal
    vacation_pay_next: Decimal
    sick_leave_payment: Decimal
    advance_payment: Decimal
    other_deductions: Decimal
    payment_date: Optional[date] = None

    # Derived
    salary_accrued: Decimal
    total_accrued: Decimal
    income_tax: Decimal
    pension_tax: Decimal
    total_deductions: Decimal
    total_payable: Decimal
    payable_without_advance: Decimal
    fszn_tax: Decimal
    insurance_tax: Decimal
    total_employee_cost: Decimal
    is_tax_benefit_applied: bool

    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PayrollListResponse(BaseModel):
    payrolls: List[PayrollRecordResponse]
    total: int
