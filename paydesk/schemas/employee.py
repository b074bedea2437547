"""
PayDesk HR - Employee Schemas

Pydantic schemas for employee management.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator


# ===========================================
# REQUEST SCHEMAS
# ===========================================

class EmployeeCreateRequest(BaseModel):
    """Schema for creating an employee."""
    name: str = Field(..., min_length=1, max_length=200)
    position: str = Field("", max_length=150)
    hire_date: date
    termination_date: Optional[date] = None

    # Compensation basis
    rate: Decimal = Field(Decimal("1.00"), ge=0, le=10, description="FTE multiplier, e.g. 0.25, 0.5, 1")
    base_salary: Optional[Decimal] = Field(None, ge=0, description="Overrides rate * minimum salary when > 0")

    # Contacts
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    tax_identifier: Optional[str] = Field(None, max_length=30)

    @model_validator(mode="after")
    def validate_dates(self):
        if self.termination_date and self.termination_date < self.hire_date:
            raise ValueError("termination_date cannot be before hire_date")
        return self


class EmployeeUpdateRequest(BaseModel):
    """Schema for updating an employee."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    position: Optional[str] = Field(None, max_length=150)
    hire_date: Optional[date] = None
    termination_date: Optional[date] = None
    rate: Optional[Decimal] = Field(None, ge=0, le=10)
    base_salary: Optional[Decimal] = Field(None, ge=0)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    tax_identifier: Optional[str] = Field(None, max_length=30)


# ===========================================
# RESPONSE SCHEMAS
# ===========================================

class EmployeeResponse(BaseModel):
    """Schema for employee response."""
    id: UUID
    name: str
    position: str
    hire_date: date
    termination_date: Optional[date] = None
    rate: Decimal
    base_salary: Optional[Decimal] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    tax_identifier: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EmployeeListResponse(BaseModel):
    """List of employees response."""
    employees: List[EmployeeResponse]
    total: int


class WorkedDaysResponse(BaseModel):
    """Worked days of an employee in a month."""
    employee_id: UUID
    year: int
    month: int
    worked_days: int
