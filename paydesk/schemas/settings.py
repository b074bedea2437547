"""
PayDesk HR - Settings Schemas
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class PayrollSettingsSchema(BaseModel):
    """Payroll parameters; rates are percentages."""
    min_salary: Decimal = Field(..., ge=0)
    income_tax_rate: Decimal = Field(..., ge=0, le=100)
    fszn_rate: Decimal = Field(..., ge=0, le=100)
    insurance_rate: Decimal = Field(..., ge=0, le=100)
    benefit_amount: Decimal = Field(..., ge=0)
    tax_deduction: Decimal = Field(..., ge=0)
    salary_payment_day: int = Field(..., ge=1, le=31)
    vacation_days_per_year: int = Field(24, ge=0, le=366)
