"""
PayDesk HR - Payroll Router

API endpoints for payroll calculation and monthly payroll records.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.database import get_async_session
from paydesk.schemas.payroll import (
    PayrollCalculateRequest,
    PayrollUpsertRequest,
    PayrollComputeRequest,
    PayrollPeriodRequest,
    PayrollBreakdownResponse,
    PayrollRecordResponse,
    PayrollListResponse,
)
from paydesk.schemas.settings import PayrollSettingsSchema
from paydesk.services.calculators.payroll import (
    PayrollInput,
    PayrollSettings,
    compute_payroll,
    default_advance_payment,
    resolve_base_salary,
)
from paydesk.services.payroll_service import PayrollService
from paydesk.services.settings_service import default_payroll_settings


router = APIRouter()

UPSERT_META_FIELDS = {"employee_id", "year", "month", "payment_date", "use_kpi_bonus"}


def to_payroll_settings(schema: Optional[PayrollSettingsSchema]) -> PayrollSettings:
    """Request settings, or the configured defaults when none were sent."""
    if schema is None:
        return default_payroll_settings()
    return PayrollSettings(
        min_salary=schema.min_salary,
        income_tax_rate=schema.income_tax_rate,
        fszn_rate=schema.fszn_rate,
        insurance_rate=schema.insurance_rate,
        benefit_amount=schema.benefit_amount,
        tax_deduction=schema.tax_deduction,
        salary_payment_day=schema.salary_payment_day,
    )


@router.post(
    "/calculate",
    response_model=PayrollBreakdownResponse,
    summary="Calculate payroll",
    description="Stateless payroll calculation for one employee-month. Nothing is stored.",
)
async def calculate_payroll(request: PayrollCalculateRequest):
    payroll_settings = to_payroll_settings(request.settings)
    breakdown = compute_payroll(
        PayrollInput(
            worked_days=request.worked_days,
            working_days=request.working_days,
            holiday_days=request.holiday_days,
            rate=request.rate,
            base_salary=request.base_salary,
            bonus=request.bonus,
            extra_pay=request.extra_pay,
            vacation_pay_current=request.vacation_pay_current,
            vacation_pay_next=request.vacation_pay_next,
            sick_leave_payment=request.sick_leave_payment,
            advance_payment=request.advance_payment,
            other_deductions=request.other_deductions,
        ),
        payroll_settings,
    )
    full_salary = resolve_base_salary(request.rate, request.base_salary, payroll_settings.min_salary)
    return PayrollBreakdownResponse(
        **breakdown.to_dict(),
        suggested_advance_payment=default_advance_payment(full_salary),
    )


@router.get(
    "",
    response_model=PayrollListResponse,
    summary="List payroll records of a month",
)
async def list_payrolls(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    employee_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_async_session),
):
    records = await PayrollService(db).list_payrolls(year, month, employee_id)
    return PayrollListResponse(
        payrolls=[PayrollRecordResponse.model_validate(record) for record in records],
        total=len(records),
    )


@router.post(
    "/upsert",
    response_model=PayrollRecordResponse,
    summary="Create or update payroll record",
    description="Stores input amounts and recomputes every derived amount.",
)
async def upsert_payroll(
    request: PayrollUpsertRequest,
    db: AsyncSession = Depends(get_async_session),
):
    inputs = request.model_dump(exclude_none=True, exclude=UPSERT_META_FIELDS)
    record = await PayrollService(db).upsert_payroll(
        request.employee_id,
        request.year,
        request.month,
        inputs,
        payment_date=request.payment_date,
    )
    return PayrollRecordResponse.model_validate(record)


@router.post(
    "/compute",
    response_model=PayrollRecordResponse,
    summary="Compute payroll from timesheet",
    description="Worked days from the timesheet; optionally the KPI total as bonus.",
)
async def compute_payroll_from_sources(
    request: PayrollComputeRequest,
    db: AsyncSession = Depends(get_async_session),
):
    inputs = request.model_dump(exclude_none=True, exclude=UPSERT_META_FIELDS)
    record = await PayrollService(db).compute_from_sources(
        request.employee_id,
        request.year,
        request.month,
        inputs=inputs,
        use_kpi_bonus=request.use_kpi_bonus,
        payment_date=request.payment_date,
    )
    return PayrollRecordResponse.model_validate(record)


@router.post(
    "/apply-vacation-pay",
    response_model=PayrollListResponse,
    summary="Apply vacation pay to payroll",
    description="Books approved vacation pay into the month's payroll records.",
)
async def apply_vacation_pay(
    request: PayrollPeriodRequest,
    db: AsyncSession = Depends(get_async_session),
):
    records = await PayrollService(db).apply_vacation_pay(request.year, request.month)
    return PayrollListResponse(
        payrolls=[PayrollRecordResponse.model_validate(record) for record in records],
        total=len(records),
    )


@router.delete(
    "/{payroll_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete payroll record",
)
async def delete_payroll(
    payroll_id: UUID,
    db: AsyncSession = Depends(get_async_session),
):
    await PayrollService(db).delete_payroll(payroll_id)
