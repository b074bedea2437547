"""
PayDesk HR - Vacation Service Tests

The session is mocked; these tests cover the service's own decisions.
"""

import uuid
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from paydesk.config import settings as app_settings
from paydesk.models.vacation import VacationBalance, VacationRequest, VacationStatus
from paydesk.services.calculators.vacation_pay import VacationPayResult
from paydesk.services.vacation_service import VacationService
from paydesk.utils.error_handling import (
    EmployeeNotFoundException,
    InvalidDateRangeException,
    NotFoundException,
)


class TestCalculateVacationPay:

    @pytest.mark.asyncio
    async def test_employee_lookup_failure_gives_zero(self, mock_db):
        """A failed lookup degrades to zero amounts over the vacation dates."""
        employee_id = uuid.uuid4()
        service = VacationService(mock_db)
        service.employee_service.get_employee_or_raise = AsyncMock(
            side_effect=EmployeeNotFoundException(employee_id)
        )

        result = await service.calculate_vacation_pay(
            employee_id, date(2025, 3, 10), date(2025, 3, 23), 14
        )

        assert result.payment_amount == Decimal("0.00")
        assert result.average_salary == Decimal("0.00")
        assert result.period_start == date(2025, 3, 10)
        assert result.period_end == date(2025, 3, 23)
        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_invalid_days_gives_zero_without_lookups(self, mock_db):
        service = VacationService(mock_db)
        service.employee_service.get_employee_or_raise = AsyncMock()

        result = await service.calculate_vacation_pay(
            uuid.uuid4(), date(2025, 3, 10), date(2025, 3, 23), 0
        )

        assert result.payment_amount == Decimal("0.00")
        service.employee_service.get_employee_or_raise.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_calculates_from_payroll_history(self, mock_db, employee):
        history = [
            SimpleNamespace(year=2025, month=month, total_accrued=Decimal("1000"))
            for month in range(3, 13)
        ]
        service = VacationService(mock_db)
        service.employee_service.get_employee_or_raise = AsyncMock(return_value=employee)

        with patch("paydesk.services.vacation_service.PayrollService") as payroll_service:
            payroll_service.return_value.list_employee_history = AsyncMock(return_value=history)

            result = await service.calculate_vacation_pay(
                employee.id, date(2026, 3, 10), date(2026, 3, 23), 14
            )

        payroll_service.return_value.list_employee_history.assert_awaited_once_with(
            employee.id, date(2025, 3, 1), date(2026, 2, 28)
        )
        assert result.average_salary == Decimal("1000.00")
        assert result.payment_amount == Decimal("472.92")

    @pytest.mark.asyncio
    async def test_history_failure_gives_zero(self, mock_db, employee):
        service = VacationService(mock_db)
        service.employee_service.get_employee_or_raise = AsyncMock(return_value=employee)

        with patch("paydesk.services.vacation_service.PayrollService") as payroll_service:
            payroll_service.return_value.list_employee_history = AsyncMock(
                side_effect=RuntimeError("connection lost")
            )

            result = await service.calculate_vacation_pay(
                employee.id, date(2026, 3, 10), date(2026, 3, 23), 14
            )

        assert result.payment_amount == Decimal("0.00")
        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_history_falls_back_to_fixed_minimum_salary(self, mock_db):
        """rate 1 without base salary: 735 a month whatever the current minimum salary."""
        employee = SimpleNamespace(id=uuid.uuid4(), rate=Decimal("1"), base_salary=None)
        service = VacationService(mock_db)
        service.employee_service.get_employee_or_raise = AsyncMock(return_value=employee)
        service.settings_service.get_payroll_settings = AsyncMock()

        with patch("paydesk.services.vacation_service.PayrollService") as payroll_service, \
                patch.object(app_settings, "default_min_salary", Decimal("1000")):
            payroll_service.return_value.list_employee_history = AsyncMock(return_value=[])

            result = await service.calculate_vacation_pay(
                employee.id, date(2026, 3, 10), date(2026, 3, 23), 14
            )

        service.settings_service.get_payroll_settings.assert_not_awaited()
        assert result.average_salary == Decimal("735.00")
        assert result.payment_amount == Decimal("347.62")

    @pytest.mark.asyncio
    async def test_no_history_falls_back_to_base_salary(self, mock_db, employee):
        service = VacationService(mock_db)
        service.employee_service.get_employee_or_raise = AsyncMock(return_value=employee)

        with patch("paydesk.services.vacation_service.PayrollService") as payroll_service:
            payroll_service.return_value.list_employee_history = AsyncMock(return_value=[])

            result = await service.calculate_vacation_pay(
                employee.id, date(2026, 3, 10), date(2026, 3, 23), 14
            )

        assert result.average_salary == Decimal("2100.00")
        assert result.payment_amount == Decimal("993.30")


class TestAccruedDays:

    @pytest.mark.asyncio
    async def test_uses_stored_days_per_year(self, mock_db, employee):
        service = VacationService(mock_db)
        service.employee_service.get_employee_or_raise = AsyncMock(return_value=employee)
        service.settings_service.get_settings = AsyncMock(return_value={"vacation_days_per_year": 12})

        accrued = await service.get_accrued_days(employee.id, date(2024, 3, 1))

        assert accrued == Decimal("12.0")


class TestCreateRequest:

    @pytest.mark.asyncio
    async def test_explicit_amount_is_kept(self, mock_db, employee):
        service = VacationService(mock_db)
        service.employee_service.get_employee_or_raise = AsyncMock(return_value=employee)
        service.calculate_vacation_pay = AsyncMock()
        service.schedule_days = AsyncMock()

        request = await service.create_request(
            employee.id,
            date(2025, 7, 1),
            date(2025, 7, 14),
            14,
            payment_amount=Decimal("500"),
        )

        assert isinstance(request, VacationRequest)
        assert request.payment_amount == Decimal("500")
        assert request.status == VacationStatus.PENDING
        service.calculate_vacation_pay.assert_not_awaited()
        service.schedule_days.assert_awaited_once_with(employee.id, date.today().year, 14)
        mock_db.add.assert_called_once_with(request)
        mock_db.commit.assert_awaited()

    @pytest.mark.asyncio
    async def test_amount_calculated_when_missing(self, mock_db, employee):
        service = VacationService(mock_db)
        service.employee_service.get_employee_or_raise = AsyncMock(return_value=employee)
        service.calculate_vacation_pay = AsyncMock(return_value=VacationPayResult(
            payment_amount=Decimal("472.92"),
            average_salary=Decimal("1000.00"),
            period_start=date(2024, 7, 1),
            period_end=date(2025, 6, 30),
        ))
        service.schedule_days = AsyncMock()

        request = await service.create_request(employee.id, date(2025, 7, 1), date(2025, 7, 14), 14)

        assert request.payment_amount == Decimal("472.92")
        assert request.average_salary == Decimal("1000.00")
        assert request.calculation_period_start == date(2024, 7, 1)
        assert request.calculation_period_end == date(2025, 6, 30)

    @pytest.mark.asyncio
    async def test_failed_calculation_still_files_request(self, mock_db, employee):
        """The failed lookup is rolled back so the same session can commit the request."""
        service = VacationService(mock_db)
        service.employee_service.get_employee_or_raise = AsyncMock(return_value=employee)
        service.schedule_days = AsyncMock()

        with patch("paydesk.services.vacation_service.PayrollService") as payroll_service:
            payroll_service.return_value.list_employee_history = AsyncMock(
                side_effect=RuntimeError("relation lookup failed")
            )

            request = await service.create_request(
                employee.id, date(2026, 3, 10), date(2026, 3, 23), 14
            )

        assert request.payment_amount == Decimal("0.00")
        mock_db.rollback.assert_awaited_once()
        mock_db.add.assert_called_once_with(request)
        mock_db.commit.assert_awaited()

    @pytest.mark.asyncio
    async def test_balance_failure_does_not_fail_request(self, mock_db, employee):
        service = VacationService(mock_db)
        service.employee_service.get_employee_or_raise = AsyncMock(return_value=employee)
        service.schedule_days = AsyncMock(side_effect=RuntimeError("balance locked"))

        request = await service.create_request(
            employee.id, date(2025, 7, 1), date(2025, 7, 14), 14, payment_amount=Decimal("500")
        )

        assert request.payment_amount == Decimal("500")
        mock_db.rollback.assert_awaited_once()


class TestBalances:

    @pytest.mark.asyncio
    async def test_new_balance_gets_default_entitlement(self, mock_db):
        employee_id = uuid.uuid4()
        service = VacationService(mock_db)
        service.get_balance = AsyncMock(return_value=None)

        balance = await service.upsert_balance(employee_id, 2025, days_scheduled=5)

        assert isinstance(balance, VacationBalance)
        assert balance.days_entitled == 24
        assert balance.days_scheduled == 5
        assert balance.days_remaining == 19
        mock_db.add.assert_called_once_with(balance)

    @pytest.mark.asyncio
    async def test_schedule_days_adds_to_existing(self, mock_db):
        employee_id = uuid.uuid4()
        existing = VacationBalance(
            employee_id=employee_id, year=2025, days_entitled=24, days_used=3, days_scheduled=7,
        )
        service = VacationService(mock_db)
        service.get_balance = AsyncMock(return_value=existing)

        balance = await service.schedule_days(employee_id, 2025, 10)

        assert balance is existing
        assert balance.days_scheduled == 17
        assert balance.days_remaining == 4
        mock_db.add.assert_not_called()


class TestPayments:

    @pytest.mark.asyncio
    async def test_update_missing_payment_raises(self, mock_db):
        mock_db.get.return_value = None
        service = VacationService(mock_db)

        with pytest.raises(NotFoundException):
            await service.update_payment(uuid.uuid4(), amount=Decimal("10"))


class TestUpdateRequest:

    @pytest.mark.asyncio
    async def test_end_before_stored_start_rejected(self, mock_db):
        request = VacationRequest(
            employee_id=uuid.uuid4(),
            start_date=date(2025, 7, 10),
            end_date=date(2025, 7, 20),
            days_count=11,
        )
        service = VacationService(mock_db)

        with pytest.raises(InvalidDateRangeException):
            await service.update_request(request, end_date=date(2025, 7, 5))

        assert request.end_date == date(2025, 7, 20)
        mock_db.commit.assert_not_awaited()
