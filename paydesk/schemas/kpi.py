"""
PayDesk HR - KPI Schemas

Pydantic schemas for KPI metrics, tiers and results.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from paydesk.models.kpi import MetricType


# ===========================================
# TIER SCHEMAS
# ===========================================

class KpiTierSchema(BaseModel):
    """[min, max] band; max None means unbounded."""
    min_value: Decimal
    max_value: Optional[Decimal] = None
    rate: Decimal = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.max_value is not None and self.max_value < self.min_value:
            raise ValueError("max_value cannot be less than min_value")
        return self

    class Config:
        from_attributes = True


# ===========================================
# METRIC SCHEMAS
# ===========================================

class KpiMetricCreateRequest(BaseModel):
    """Schema for creating a metric."""
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: MetricType
    base_rate: Optional[Decimal] = Field(None, ge=0)
    tiers: List[KpiTierSchema] = Field(default_factory=list)
    employee_ids: List[UUID] = Field(default_factory=list)


class KpiMetricUpdateRequest(BaseModel):
    """Schema for updating a metric; tiers, when given, replace the existing ones."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    type: Optional[MetricType] = None
    base_rate: Optional[Decimal] = Field(None, ge=0)
    tiers: Optional[List[KpiTierSchema]] = None


class KpiMetricResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    type: MetricType
    base_rate: Optional[Decimal] = None
    tiers: List[KpiTierSchema] = []
    employee_ids: List[UUID] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class KpiMetricListResponse(BaseModel):
    metrics: List[KpiMetricResponse]
    total: int


class EmployeeAssignmentRequest(BaseModel):
    """Full set of employees assigned to a metric."""
    employee_ids: List[UUID]


# ===========================================
# BONUS CALCULATION
# ===========================================

class KpiBonusCalculateRequest(BaseModel):
    """Stateless bonus calculation for one metric definition and value."""
    type: MetricType
    base_rate: Optional[Decimal] = Field(None, ge=0)
    tiers: List[KpiTierSchema] = Field(default_factory=list)
    value: Decimal


class KpiBonusResponse(BaseModel):
    bonus: Decimal


class EmployeeBonusResponse(BaseModel):
    employee_id: UUID
    period: date
    total_bonus: Decimal


# ===========================================
# RESULT SCHEMAS
# ===========================================

class KpiResultRequest(BaseModel):
    employee_id: UUID
    metric_id: UUID
    period: date = Field(..., description="Any day of the month; stored as the first day")
    value: Decimal


class KpiResultsSaveRequest(BaseModel):
    results: List[KpiResultRequest] = Field(..., min_length=1)


class KpiResultResponse(BaseModel):
    id: UUID
    employee_id: UUID
    metric_id: UUID
    period: date
    value: Decimal
    calculated_bonus: Decimal

    class Config:
        from_attributes = True


class KpiResultListResponse(BaseModel):
    results: List[KpiResultResponse]
    total: int
