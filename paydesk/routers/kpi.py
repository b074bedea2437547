"""
PayDesk HR - KPI Router

API endpoints for KPI metrics, results and bonuses.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.database import get_async_session
from paydesk.schemas.employee import EmployeeResponse
from paydesk.schemas.kpi import (
    KpiMetricCreateRequest,
    KpiMetricUpdateRequest,
    KpiMetricResponse,
    KpiMetricListResponse,
    EmployeeAssignmentRequest,
    KpiBonusCalculateRequest,
    KpiBonusResponse,
    EmployeeBonusResponse,
    KpiResultsSaveRequest,
    KpiResultResponse,
    KpiResultListResponse,
)
from paydesk.services.calculators.kpi_bonus import KpiBonusCalculator, KpiMetricRule, KpiTier
from paydesk.services.calculators.rounding import round_money
from paydesk.services.kpi_service import KpiService, normalize_period


router = APIRouter()


@router.post(
    "/calculate-bonus",
    response_model=KpiBonusResponse,
    summary="Calculate KPI bonus",
    description="Stateless bonus for a metric definition and a reported value.",
)
async def calculate_bonus(request: KpiBonusCalculateRequest):
    rule = KpiMetricRule(
        type=request.type,
        base_rate=request.base_rate,
        tiers=[KpiTier(tier.min_value, tier.max_value, tier.rate) for tier in request.tiers],
    )
    bonus = KpiBonusCalculator().calculate_bonus(rule, request.value)
    return KpiBonusResponse(bonus=round_money(bonus))


# ===========================================
# METRICS
# ===========================================

@router.get("/metrics", response_model=KpiMetricListResponse, summary="List metrics")
async def list_metrics(db: AsyncSession = Depends(get_async_session)):
    metrics = await KpiService(db).list_metrics()
    return KpiMetricListResponse(
        metrics=[KpiMetricResponse.model_validate(metric) for metric in metrics],
        total=len(metrics),
    )


@router.post(
    "/metrics",
    response_model=KpiMetricResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create metric",
)
async def create_metric(
    request: KpiMetricCreateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    metric = await KpiService(db).create_metric(
        name=request.name,
        type=request.type,
        base_rate=request.base_rate,
        description=request.description,
        tiers=[tier.model_dump() for tier in request.tiers],
        employee_ids=request.employee_ids,
    )
    return KpiMetricResponse.model_validate(metric)


@router.get("/metrics/{metric_id}", response_model=KpiMetricResponse, summary="Get metric")
async def get_metric(
    metric_id: UUID,
    db: AsyncSession = Depends(get_async_session),
):
    metric = await KpiService(db).get_metric_or_raise(metric_id)
    return KpiMetricResponse.model_validate(metric)


@router.patch("/metrics/{metric_id}", response_model=KpiMetricResponse, summary="Update metric")
async def update_metric(
    metric_id: UUID,
    request: KpiMetricUpdateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = KpiService(db)
    metric = await service.get_metric_or_raise(metric_id)

    data = request.model_dump(exclude_unset=True, exclude={"tiers"})
    tiers = None
    if request.tiers is not None:
        tiers = [tier.model_dump() for tier in request.tiers]

    metric = await service.update_metric(metric, tiers=tiers, **data)
    return KpiMetricResponse.model_validate(metric)


@router.delete("/metrics/{metric_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete metric")
async def delete_metric(
    metric_id: UUID,
    db: AsyncSession = Depends(get_async_session),
):
    service = KpiService(db)
    metric = await service.get_metric_or_raise(metric_id)
    await service.delete_metric(metric)


@router.get(
    "/metrics/{metric_id}/employees",
    response_model=List[EmployeeResponse],
    summary="Employees assigned to a metric",
)
async def get_metric_employees(
    metric_id: UUID,
    db: AsyncSession = Depends(get_async_session),
):
    employees = await KpiService(db).get_employees_for_metric(metric_id)
    return [EmployeeResponse.model_validate(employee) for employee in employees]


@router.put(
    "/metrics/{metric_id}/employees",
    response_model=List[EmployeeResponse],
    summary="Replace employees assigned to a metric",
)
async def assign_metric_employees(
    metric_id: UUID,
    request: EmployeeAssignmentRequest,
    db: AsyncSession = Depends(get_async_session),
):
    employees = await KpiService(db).associate_employees(metric_id, request.employee_ids)
    return [EmployeeResponse.model_validate(employee) for employee in employees]


# ===========================================
# RESULTS
# ===========================================

@router.get("/results", response_model=KpiResultListResponse, summary="List results of a month")
async def list_results(
    period: date = Query(..., description="Any day of the month"),
    employee_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_async_session),
):
    results = await KpiService(db).get_results(period, employee_id)
    return KpiResultListResponse(
        results=[KpiResultResponse.model_validate(result) for result in results],
        total=len(results),
    )


@router.put(
    "/results",
    response_model=KpiResultListResponse,
    summary="Save results",
    description="Upserts by (employee, metric, month); bonuses are recomputed.",
)
async def save_results(
    request: KpiResultsSaveRequest,
    db: AsyncSession = Depends(get_async_session),
):
    results = await KpiService(db).save_results(
        [result.model_dump() for result in request.results]
    )
    return KpiResultListResponse(
        results=[KpiResultResponse.model_validate(result) for result in results],
        total=len(results),
    )


@router.get(
    "/bonus/{employee_id}",
    response_model=EmployeeBonusResponse,
    summary="Total KPI bonus of an employee for a month",
)
async def get_employee_bonus(
    employee_id: UUID,
    period: date = Query(..., description="Any day of the month"),
    db: AsyncSession = Depends(get_async_session),
):
    total = await KpiService(db).get_total_bonus(employee_id, period)
    return EmployeeBonusResponse(
        employee_id=employee_id,
        period=normalize_period(period),
        total_bonus=total,
    )
