"""
PayDesk HR - Vacations Router

API endpoints for vacation requests, balances, payments and vacation pay.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.database import get_async_session
from paydesk.models.vacation import VacationStatus
from paydesk.schemas.vacation import (
    VacationPayCalculateRequest,
    VacationPayResponse,
    AccruedDaysResponse,
    VacationRequestCreate,
    VacationRequestUpdate,
    VacationStatusUpdate,
    VacationRequestResponse,
    VacationRequestListResponse,
    VacationBalanceRequest,
    VacationBalanceResponse,
    VacationPaymentCreate,
    VacationPaymentUpdate,
    VacationPaymentResponse,
    VacationPayoutsResponse,
)
from paydesk.services.vacation_service import VacationService


router = APIRouter()


# ===========================================
# VACATION PAY
# ===========================================

@router.post(
    "/calculate",
    response_model=VacationPayResponse,
    summary="Calculate vacation pay",
    description=(
        "Average earnings over the 12 months before the vacation month divided by 29.6, "
        "times the vacation days. A zero amount means earnings could not be determined."
    ),
)
async def calculate_vacation_pay(
    request: VacationPayCalculateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    result = await VacationService(db).calculate_vacation_pay(
        request.employee_id,
        request.start_date,
        request.end_date,
        request.days_count,
    )
    return VacationPayResponse(**result.to_dict())


@router.get(
    "/accrued-days/{employee_id}",
    response_model=AccruedDaysResponse,
    summary="Vacation days accrued since hire",
)
async def get_accrued_days(
    employee_id: UUID,
    as_of: Optional[date] = Query(None),
    db: AsyncSession = Depends(get_async_session),
):
    as_of = as_of or date.today()
    accrued = await VacationService(db).get_accrued_days(employee_id, as_of)
    return AccruedDaysResponse(employee_id=employee_id, as_of=as_of, accrued_days=accrued)


@router.get("/payouts", response_model=VacationPayoutsResponse, summary="Vacation payout totals")
async def get_payouts(db: AsyncSession = Depends(get_async_session)):
    return VacationPayoutsResponse(**await VacationService(db).get_total_vacation_payouts())


# ===========================================
# REQUESTS
# ===========================================

@router.get("/requests", response_model=VacationRequestListResponse, summary="List vacation requests")
async def list_requests(
    employee_id: Optional[UUID] = Query(None),
    status_filter: Optional[VacationStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_async_session),
):
    requests = await VacationService(db).list_requests(employee_id, status_filter)
    return VacationRequestListResponse(
        requests=[VacationRequestResponse.model_validate(request) for request in requests],
        total=len(requests),
    )


@router.post(
    "/requests",
    response_model=VacationRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create vacation request",
)
async def create_request(
    request: VacationRequestCreate,
    db: AsyncSession = Depends(get_async_session),
):
    vacation = await VacationService(db).create_request(**request.model_dump())
    return VacationRequestResponse.model_validate(vacation)


@router.get("/requests/{request_id}", response_model=VacationRequestResponse, summary="Get vacation request")
async def get_request(
    request_id: UUID,
    db: AsyncSession = Depends(get_async_session),
):
    vacation = await VacationService(db).get_request_or_raise(request_id)
    return VacationRequestResponse.model_validate(vacation)


@router.patch("/requests/{request_id}", response_model=VacationRequestResponse, summary="Update vacation request")
async def update_request(
    request_id: UUID,
    request: VacationRequestUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    service = VacationService(db)
    vacation = await service.get_request_or_raise(request_id)
    vacation = await service.update_request(vacation, **request.model_dump(exclude_unset=True))
    return VacationRequestResponse.model_validate(vacation)


@router.put(
    "/requests/{request_id}/status",
    response_model=VacationRequestResponse,
    summary="Change vacation request status",
)
async def set_request_status(
    request_id: UUID,
    request: VacationStatusUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    service = VacationService(db)
    vacation = await service.get_request_or_raise(request_id)
    vacation = await service.set_status(vacation, request.status)
    return VacationRequestResponse.model_validate(vacation)


@router.delete("/requests/{request_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete vacation request")
async def delete_request(
    request_id: UUID,
    db: AsyncSession = Depends(get_async_session),
):
    service = VacationService(db)
    vacation = await service.get_request_or_raise(request_id)
    await service.delete_request(vacation)


# ===========================================
# BALANCES
# ===========================================

@router.get("/balances", response_model=List[VacationBalanceResponse], summary="List vacation balances")
async def list_balances(
    employee_id: Optional[UUID] = Query(None),
    year: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_async_session),
):
    balances = await VacationService(db).list_balances(employee_id, year)
    return [VacationBalanceResponse.model_validate(balance) for balance in balances]


@router.put("/balances", response_model=VacationBalanceResponse, summary="Create or update vacation balance")
async def upsert_balance(
    request: VacationBalanceRequest,
    db: AsyncSession = Depends(get_async_session),
):
    balance = await VacationService(db).upsert_balance(**request.model_dump())
    return VacationBalanceResponse.model_validate(balance)


# ===========================================
# PAYMENTS
# ===========================================

@router.get(
    "/requests/{request_id}/payments",
    response_model=List[VacationPaymentResponse],
    summary="Payments of a vacation request",
)
async def list_payments(
    request_id: UUID,
    db: AsyncSession = Depends(get_async_session),
):
    payments = await VacationService(db).list_payments(request_id)
    return [VacationPaymentResponse.model_validate(payment) for payment in payments]


@router.post(
    "/payments",
    response_model=VacationPaymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record vacation payment",
)
async def create_payment(
    request: VacationPaymentCreate,
    db: AsyncSession = Depends(get_async_session),
):
    payment = await VacationService(db).create_payment(
        request.vacation_request_id,
        request.payment_date,
        request.amount,
        request.is_paid,
    )
    return VacationPaymentResponse.model_validate(payment)


@router.patch("/payments/{payment_id}", response_model=VacationPaymentResponse, summary="Update vacation payment")
async def update_payment(
    payment_id: UUID,
    request: VacationPaymentUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    payment = await VacationService(db).update_payment(payment_id, **request.model_dump(exclude_unset=True))
    return VacationPaymentResponse.model_validate(payment)


@router.delete("/payments/{payment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete vacation payment")
async def delete_payment(
    payment_id: UUID,
    db: AsyncSession = Depends(get_async_session),
):
    await VacationService(db).delete_payment(payment_id)
