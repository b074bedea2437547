"""
PayDesk HR - Timesheet Schemas

Pydantic schemas for timesheet entries and monthly work norms.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from paydesk.models.timesheet import DayStatus


# ===========================================
# TIMESHEET SCHEMAS
# ===========================================

class TimesheetEntryRequest(BaseModel):
    """One attendance mark to create or update."""
    id: Optional[UUID] = None
    employee_id: UUID
    work_date: date
    status: DayStatus = DayStatus.WORK


class TimesheetBulkUpsertRequest(BaseModel):
    """Bulk create/update of attendance marks."""
    entries: List[TimesheetEntryRequest] = Field(..., min_length=1)


class TimesheetEntryResponse(BaseModel):
    id: UUID
    employee_id: UUID
    work_date: date
    status: DayStatus
    updated_at: datetime

    class Config:
        from_attributes = True


class TimesheetListResponse(BaseModel):
    entries: List[TimesheetEntryResponse]
    total: int


# ===========================================
# WORK NORM SCHEMAS
# ===========================================

class WorkNormRequest(BaseModel):
    """Schema for creating or replacing a month's work norm."""
    year: int = Field(..., ge=2000, le=2100)
    month: int = Field(..., ge=1, le=12)
    norm_hours: Decimal = Field(..., ge=0)
    working_days: int = Field(20, ge=0, le=31)
    holiday_days: int = Field(0, ge=0, le=31)
    pre_holiday_days: Optional[int] = Field(None, ge=0, le=31)


class WorkNormResponse(BaseModel):
    id: UUID
    year: int
    month: int
    norm_hours: Decimal
    working_days: int
    holiday_days: int
    pre_holiday_days: Optional[int] = None
    total_working_days: int

    class Config:
        from_attributes = True
