"""
PayDesk HR - Employees Router

API endpoints for employee management.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.database import get_async_session
from paydesk.schemas.employee import (
    EmployeeCreateRequest,
    EmployeeUpdateRequest,
    EmployeeResponse,
    EmployeeListResponse,
    WorkedDaysResponse,
)
from paydesk.services.employee_service import EmployeeService
from paydesk.services.timesheet_service import TimesheetService


router = APIRouter()


@router.get(
    "",
    response_model=EmployeeListResponse,
    summary="List employees",
)
async def list_employees(
    search: Optional[str] = Query(None, description="Search by name or position"),
    active_on: Optional[date] = Query(None, description="Exclude employees terminated before this date"),
    db: AsyncSession = Depends(get_async_session),
):
    """List employees ordered by name."""
    employees = await EmployeeService(db).list_employees(search=search, active_on=active_on)
    return EmployeeListResponse(
        employees=[EmployeeResponse.model_validate(employee) for employee in employees],
        total=len(employees),
    )


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create employee",
)
async def create_employee(
    request: EmployeeCreateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    employee = await EmployeeService(db).create_employee(**request.model_dump())
    return EmployeeResponse.model_validate(employee)


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Get employee",
)
async def get_employee(
    employee_id: UUID,
    db: AsyncSession = Depends(get_async_session),
):
    employee = await EmployeeService(db).get_employee_or_raise(employee_id)
    return EmployeeResponse.model_validate(employee)


@router.patch(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Update employee",
)
async def update_employee(
    employee_id: UUID,
    request: EmployeeUpdateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = EmployeeService(db)
    employee = await service.get_employee_or_raise(employee_id)
    employee = await service.update_employee(employee, **request.model_dump(exclude_unset=True))
    return EmployeeResponse.model_validate(employee)


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete employee",
    description="Delete an employee together with their timesheets, payroll and vacations.",
)
async def delete_employee(
    employee_id: UUID,
    db: AsyncSession = Depends(get_async_session),
):
    service = EmployeeService(db)
    employee = await service.get_employee_or_raise(employee_id)
    await service.delete_employee(employee)


@router.get(
    "/{employee_id}/worked-days",
    response_model=WorkedDaysResponse,
    summary="Worked days in a month",
    description="Count of distinct dates marked as work; a 'work' mark wins over other marks for the same date.",
)
async def get_worked_days(
    employee_id: UUID,
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    db: AsyncSession = Depends(get_async_session),
):
    worked_days = await TimesheetService(db).count_worked_days(employee_id, year, month)
    return WorkedDaysResponse(
        employee_id=employee_id,
        year=year,
        month=month,
        worked_days=worked_days,
    )
