"""
PayDesk HR - Vacation Service

Vacation requests, yearly day balances, payments and the average-earnings
vacation pay calculation.

Vacation pay is advisory: when earnings cannot be looked up the calculation
returns zero amounts instead of failing, and the operator corrects the
request by hand.
"""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.config import settings as app_settings
from paydesk.models.employee import Employee
from paydesk.models.vacation import (
    VacationBalance,
    VacationPayment,
    VacationRequest,
    VacationStatus,
)
from paydesk.services.calculators.payroll import resolve_base_salary
from paydesk.services.calculators.rounding import round_money
from paydesk.services.calculators.vacation_pay import (
    FALLBACK_MIN_SALARY,
    VacationPayCalculator,
    VacationPayResult,
    calculate_accrued_vacation_days,
    calculation_window,
)
from paydesk.services.employee_service import EmployeeService
from paydesk.services.payroll_service import PayrollService
from paydesk.services.settings_service import SettingsService
from paydesk.utils.error_handling import (
    InvalidDateRangeException,
    NotFoundException,
    VacationRequestNotFoundException,
)

logger = logging.getLogger(__name__)


class VacationService:
    """Service for vacation requests, balances and payments."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.calculator = VacationPayCalculator()
        self.employee_service = EmployeeService(db)
        self.settings_service = SettingsService(db)

    # ===========================================
    # VACATION PAY
    # ===========================================

    async def calculate_vacation_pay(
        self,
        employee_id: uuid.UUID,
        start_date: date,
        end_date: date,
        days_count: int,
    ) -> VacationPayResult:
        """
        Vacation pay from the employee's trailing 12 months of payroll.

        Returns a zero result with the vacation's own dates when anything
        needed for the calculation is missing or fails to load.
        """
        if days_count <= 0 or end_date < start_date:
            logger.error(
                f"Invalid vacation pay input for employee {employee_id}: "
                f"{start_date} - {end_date}, {days_count} days"
            )
            return VacationPayResult.zero(start_date, end_date)

        try:
            employee = await self.employee_service.get_employee_or_raise(employee_id)
            period_start, period_end = calculation_window(start_date)
            history = await PayrollService(self.db).list_employee_history(
                employee_id, period_start, period_end
            )

            result = self.calculator.calculate(
                history,
                start_date,
                days_count,
                fallback_monthly_salary=resolve_base_salary(
                    employee.rate, employee.base_salary, FALLBACK_MIN_SALARY
                ),
            )
        except Exception as e:
            logger.error(
                f"Vacation pay calculation failed for employee {employee_id}: {e}",
                exc_info=True,
            )
            await self.db.rollback()
            return VacationPayResult.zero(start_date, end_date)

        logger.info(
            f"Vacation pay for employee {employee_id}: {result.payment_amount} "
            f"({days_count} days, average salary {result.average_salary}, "
            f"window {result.period_start} - {result.period_end})"
        )
        return result

    async def get_accrued_days(
        self,
        employee_id: uuid.UUID,
        as_of: Optional[date] = None,
    ) -> Decimal:
        """Vacation days earned since hire."""
        employee = await self.employee_service.get_employee_or_raise(employee_id)
        values = await self.settings_service.get_settings()
        return calculate_accrued_vacation_days(
            employee.hire_date,
            values.get("vacation_days_per_year", app_settings.default_vacation_days_per_year),
            as_of,
        )

    # ===========================================
    # REQUESTS
    # ===========================================

    async def list_requests(
        self,
        employee_id: Optional[uuid.UUID] = None,
        status: Optional[VacationStatus] = None,
    ) -> List[VacationRequest]:
        query = select(VacationRequest)
        if employee_id is not None:
            query = query.where(VacationRequest.employee_id == employee_id)
        if status is not None:
            query = query.where(VacationRequest.status == status)
        query = query.order_by(VacationRequest.start_date.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_request(self, request_id: uuid.UUID) -> Optional[VacationRequest]:
        return await self.db.get(VacationRequest, request_id)

    async def get_request_or_raise(self, request_id: uuid.UUID) -> VacationRequest:
        request = await self.get_request(request_id)
        if request is None:
            raise VacationRequestNotFoundException(request_id)
        return request

    async def create_request(
        self,
        employee_id: uuid.UUID,
        start_date: date,
        end_date: date,
        days_count: int,
        status: VacationStatus = VacationStatus.PENDING,
        payment_amount: Optional[Decimal] = None,
        average_salary: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> VacationRequest:
        """
        File a vacation request.

        Without an explicit payment amount the vacation pay is calculated.
        The request's days are added to the employee's scheduled days for the
        current year.
        """
        await self.employee_service.get_employee_or_raise(employee_id)

        request = VacationRequest(
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            days_count=days_count,
            status=VacationStatus(status),
            notes=notes,
        )

        if payment_amount is None:
            pay = await self.calculate_vacation_pay(employee_id, start_date, end_date, days_count)
            request.payment_amount = pay.payment_amount
            request.average_salary = pay.average_salary
            request.calculation_period_start = pay.period_start
            request.calculation_period_end = pay.period_end
        else:
            request.payment_amount = payment_amount
            request.average_salary = average_salary or Decimal("0.00")

        self.db.add(request)
        await self.db.commit()

        try:
            await self.schedule_days(employee_id, date.today().year, days_count)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error updating vacation balance for employee {employee_id}: {e}", exc_info=True)

        await self.db.refresh(request)
        return request

    async def update_request(self, request: VacationRequest, **kwargs) -> VacationRequest:
        """Update a request; None values are left unchanged."""
        start_date = kwargs.get("start_date") or request.start_date
        end_date = kwargs.get("end_date") or request.end_date
        if end_date < start_date:
            raise InvalidDateRangeException(str(start_date), str(end_date))

        for key, value in kwargs.items():
            if value is not None and hasattr(request, key):
                setattr(request, key, value)

        await self.db.commit()
        await self.db.refresh(request)
        return request

    async def set_status(self, request: VacationRequest, status: VacationStatus) -> VacationRequest:
        request.status = VacationStatus(status)
        await self.db.commit()
        await self.db.refresh(request)
        logger.info(f"Vacation request {request.id} is now {request.status.value}")
        return request

    async def delete_request(self, request: VacationRequest) -> bool:
        await self.db.delete(request)
        await self.db.commit()
        return True

    # ===========================================
    # BALANCES
    # ===========================================

    async def list_balances(
        self,
        employee_id: Optional[uuid.UUID] = None,
        year: Optional[int] = None,
    ) -> List[VacationBalance]:
        query = select(VacationBalance)
        if employee_id is not None:
            query = query.where(VacationBalance.employee_id == employee_id)
        if year is not None:
            query = query.where(VacationBalance.year == year)
        query = query.order_by(VacationBalance.year.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_balance(self, employee_id: uuid.UUID, year: int) -> Optional[VacationBalance]:
        result = await self.db.execute(
            select(VacationBalance)
            .where(VacationBalance.employee_id == employee_id)
            .where(VacationBalance.year == year)
        )
        return result.scalar_one_or_none()

    async def upsert_balance(
        self,
        employee_id: uuid.UUID,
        year: int,
        days_entitled: Optional[int] = None,
        days_used: Optional[int] = None,
        days_scheduled: Optional[int] = None,
    ) -> VacationBalance:
        """Create or update a yearly balance; days remaining is always recomputed."""
        balance = await self.get_balance(employee_id, year)
        if balance is None:
            balance = VacationBalance(
                employee_id=employee_id,
                year=year,
                days_entitled=app_settings.default_vacation_days_per_year,
                days_used=0,
                days_scheduled=0,
            )
            self.db.add(balance)

        if days_entitled is not None:
            balance.days_entitled = days_entitled
        if days_used is not None:
            balance.days_used = days_used
        if days_scheduled is not None:
            balance.days_scheduled = days_scheduled
        balance.recalculate_remaining()

        await self.db.commit()
        await self.db.refresh(balance)
        return balance

    async def schedule_days(self, employee_id: uuid.UUID, year: int, days: int) -> VacationBalance:
        """Add requested days to the year's scheduled days."""
        balance = await self.get_balance(employee_id, year)
        scheduled = (balance.days_scheduled or 0) if balance else 0
        return await self.upsert_balance(employee_id, year, days_scheduled=scheduled + days)

    # ===========================================
    # PAYMENTS
    # ===========================================

    async def list_payments(self, request_id: uuid.UUID) -> List[VacationPayment]:
        result = await self.db.execute(
            select(VacationPayment)
            .where(VacationPayment.vacation_request_id == request_id)
            .order_by(VacationPayment.payment_date)
        )
        return list(result.scalars().all())

    async def create_payment(
        self,
        request_id: uuid.UUID,
        payment_date: date,
        amount: Decimal,
        is_paid: bool = False,
    ) -> VacationPayment:
        await self.get_request_or_raise(request_id)

        payment = VacationPayment(
            vacation_request_id=request_id,
            payment_date=payment_date,
            amount=amount,
            is_paid=is_paid,
        )
        self.db.add(payment)
        await self.db.commit()
        await self.db.refresh(payment)
        return payment

    async def update_payment(self, payment_id: uuid.UUID, **kwargs) -> VacationPayment:
        payment = await self.db.get(VacationPayment, payment_id)
        if payment is None:
            raise NotFoundException("VacationPayment", payment_id)

        for key, value in kwargs.items():
            if value is not None and hasattr(payment, key):
                setattr(payment, key, value)

        await self.db.commit()
        await self.db.refresh(payment)
        return payment

    async def delete_payment(self, payment_id: uuid.UUID) -> bool:
        payment = await self.db.get(VacationPayment, payment_id)
        if payment is None:
            raise NotFoundException("VacationPayment", payment_id)
        await self.db.delete(payment)
        await self.db.commit()
        return True

    async def get_total_vacation_payouts(self) -> Dict[str, Any]:
        """
        Vacation payments in total and per employee.

        Returns:
            {"total_amount": Decimal, "employee_totals": [{"employee_id",
            "employee_name", "amount"}]} with the largest amounts first
        """
        amount = func.coalesce(func.sum(VacationPayment.amount), 0).label("amount")
        result = await self.db.execute(
            select(VacationRequest.employee_id, Employee.name, amount)
            .select_from(VacationPayment)
            .join(VacationRequest, VacationPayment.vacation_request_id == VacationRequest.id)
            .join(Employee, VacationRequest.employee_id == Employee.id)
            .group_by(VacationRequest.employee_id, Employee.name)
            .order_by(amount.desc())
        )

        employee_totals = [
            {
                "employee_id": row.employee_id,
                "employee_name": row.name,
                "amount": round_money(row.amount),
            }
            for row in result.all()
        ]
        total_amount = round_money(sum((item["amount"] for item in employee_totals), Decimal("0")))

        return {"total_amount": total_amount, "employee_totals": employee_totals}
