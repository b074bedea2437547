"""
PayDesk HR - Vacation Schemas

Pydantic schemas for vacation requests, balances, payments and the vacation
pay calculation.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from paydesk.models.vacation import VacationStatus


class DateRangeMixin(BaseModel):
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def validate_date_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


# ===========================================
# VACATION PAY
# ===========================================

class VacationPayCalculateRequest(DateRangeMixin):
    employee_id: UUID
    days_count: int = Field(..., ge=1, le=366)


class VacationPayResponse(BaseModel):
    """A zero payment means the amount could not be determined."""
    payment_amount: Decimal
    average_salary: Decimal
    period_start: date
    period_end: date


class AccruedDaysResponse(BaseModel):
    employee_id: UUID
    as_of: date
    accrued_days: Decimal


# ===========================================
# REQUESTS
# ===========================================

class VacationRequestCreate(DateRangeMixin):
    """Omit payment_amount to have vacation pay calculated."""
    employee_id: UUID
    days_count: int = Field(..., ge=1, le=366)
    status: VacationStatus = VacationStatus.PENDING
    payment_amount: Optional[Decimal] = Field(None, ge=0)
    average_salary: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None


class VacationRequestUpdate(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    days_count: Optional[int] = Field(None, ge=1, le=366)
    payment_amount: Optional[Decimal] = Field(None, ge=0)
    average_salary: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_date_range(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class VacationStatusUpdate(BaseModel):
    status: VacationStatus


class VacationRequestResponse(BaseModel):
    id: UUID
    employee_id: UUID
    start_date: date
    end_date: date
    days_count: int
    status: VacationStatus
    payment_amount: Decimal
    average_salary: Decimal
    calculation_period_start: Optional[date] = None
    calculation_period_end: Optional[date] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class VacationRequestListResponse(BaseModel):
    requests: List[VacationRequestResponse]
    total: int


# ===========================================
# BALANCES
# ===========================================

class VacationBalanceRequest(BaseModel):
    employee_id: UUID
    year: int = Field(..., ge=2000, le=2100)
    days_entitled: Optional[int] = Field(None, ge=0)
    days_used: Optional[int] = Field(None, ge=0)
    days_scheduled: Optional[int] = Field(None, ge=0)


class VacationBalanceResponse(BaseModel):
    id: UUID
    employee_id: UUID
    year: int
    days_entitled: int
    days_used: int
    days_scheduled: int
    days_remaining: int

    class Config:
        from_attributes = True


# ===========================================
# PAYMENTS
# ===========================================

class VacationPaymentCreate(BaseModel):
    vacation_request_id: UUID
    payment_date: date
    amount: Decimal = Field(..., ge=0)
    is_paid: bool = False


class VacationPaymentUpdate(BaseModel):
    payment_date: Optional[date] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    is_paid: Optional[bool] = None


class VacationPaymentResponse(BaseModel):
    id: UUID
    vacation_request_id: UUID
    payment_date: date
    amount: Decimal
    is_paid: bool

    class Config:
        from_attributes = True


class EmployeePayoutTotal(BaseModel):
    employee_id: UUID
    employee_name: str
    amount: Decimal


class VacationPayoutsResponse(BaseModel):
    total_amount: Decimal
    employee_totals: List[EmployeePayoutTotal]
