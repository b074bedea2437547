"""
PayDesk HR - Payroll Service Tests

The session and collaborating services are mocked.
"""

import uuid
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from paydesk.models.payroll import PayrollRecord
from paydesk.models.vacation import VacationStatus
from paydesk.services.payroll_service import PayrollService
from paydesk.utils.error_handling import InvalidPeriodException, PayrollNotFoundException


def scalars_result(items):
    """Mimic ``(await db.execute(...)).scalars().all()``."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(items)
    return result


@pytest.fixture
def service(mock_db, employee, work_norm, payroll_settings):
    service = PayrollService(mock_db)
    service.employee_service.get_employee_or_raise = AsyncMock(return_value=employee)
    service.work_norm_service.get_work_norm = AsyncMock(return_value=work_norm)
    service.settings_service.get_payroll_settings = AsyncMock(return_value=payroll_settings)
    service.get_payroll = AsyncMock(return_value=None)
    return service


class TestUpsertPayroll:

    @pytest.mark.asyncio
    async def test_new_record_is_computed(self, service, mock_db, employee):
        """Norm {20, 1}, base 2100, 21 worked days."""
        record = await service.upsert_payroll(employee.id, 2025, 3, {"worked_days": 21})

        assert isinstance(record, PayrollRecord)
        assert record.worked_days == 21
        assert record.bonus == Decimal("0.00")
        assert record.salary_accrued == Decimal("2100.00")
        assert record.total_accrued == Decimal("2100.00")
        assert record.pension_tax == Decimal("21.00")
        assert record.total_payable == record.total_accrued - record.total_deductions
        mock_db.add.assert_called_once_with(record)
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_inputs_keep_stored_values(self, service, employee):
        existing = PayrollRecord(
            employee_id=employee.id,
            year=2025,
            month=3,
            worked_days=21,
            bonus=Decimal("100.00"),
            advance_payment=Decimal("300.00"),
        )
        service.get_payroll = AsyncMock(return_value=existing)

        record = await service.upsert_payroll(employee.id, 2025, 3, {"extra_pay": Decimal("50")})

        assert record is existing
        assert record.worked_days == 21
        assert record.bonus == Decimal("100.00")
        assert record.extra_pay == Decimal("50")
        assert record.total_accrued == Decimal("2250.00")
        assert record.payable_without_advance == record.total_payable - Decimal("300.00")

    @pytest.mark.asyncio
    async def test_missing_work_norm_accrues_zero_salary(self, service, employee):
        service.work_norm_service.get_work_norm = AsyncMock(return_value=None)

        record = await service.upsert_payroll(
            employee.id, 2025, 3, {"worked_days": 21, "bonus": Decimal("100")}
        )

        assert record.salary_accrued == Decimal("0.00")
        assert record.total_accrued == Decimal("100.00")

    @pytest.mark.asyncio
    async def test_invalid_month_rejected(self, service, employee):
        with pytest.raises(InvalidPeriodException):
            await service.upsert_payroll(employee.id, 2025, 13, {})


class TestComputeFromSources:

    @pytest.mark.asyncio
    async def test_worked_days_and_kpi_bonus_from_sources(self, service, employee):
        service.upsert_payroll = AsyncMock()

        with patch("paydesk.services.payroll_service.TimesheetService") as timesheets, \
                patch("paydesk.services.payroll_service.KpiService") as kpi:
            timesheets.return_value.count_worked_days = AsyncMock(return_value=19)
            kpi.return_value.get_total_bonus = AsyncMock(return_value=Decimal("243.33"))

            await service.compute_from_sources(
                employee.id, 2025, 3, inputs={"worked_days": 5}, use_kpi_bonus=True
            )

        kpi.return_value.get_total_bonus.assert_awaited_once_with(employee.id, date(2025, 3, 1))
        args = service.upsert_payroll.await_args.args
        assert args[3] == {"worked_days": 19, "bonus": Decimal("243.33")}

    @pytest.mark.asyncio
    async def test_kpi_not_used_by_default(self, service, employee):
        service.upsert_payroll = AsyncMock()

        with patch("paydesk.services.payroll_service.TimesheetService") as timesheets, \
                patch("paydesk.services.payroll_service.KpiService") as kpi:
            timesheets.return_value.count_worked_days = AsyncMock(return_value=19)

            await service.compute_from_sources(employee.id, 2025, 3, inputs={"bonus": Decimal("10")})

        kpi.assert_not_called()
        assert service.upsert_payroll.await_args.args[3] == {"bonus": Decimal("10"), "worked_days": 19}


class TestApplyVacationPay:

    @pytest.mark.asyncio
    async def test_distributes_and_skips(self, service, mock_db):
        """One employee gets both amounts, one has none, one fails."""
        with_pay, without_pay, failing = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        service.employee_service.list_employees = AsyncMock(return_value=[
            SimpleNamespace(id=with_pay),
            SimpleNamespace(id=without_pay),
            SimpleNamespace(id=failing),
        ])
        vacations = [
            SimpleNamespace(
                start_date=date(2025, 3, 3), end_date=date(2025, 3, 9),
                payment_amount=Decimal("300"), status=VacationStatus.APPROVED,
            ),
            SimpleNamespace(
                start_date=date(2025, 3, 20), end_date=date(2025, 3, 25),
                payment_amount=Decimal("200"), status=VacationStatus.APPROVED,
            ),
        ]
        mock_db.execute.side_effect = [
            scalars_result(vacations),
            scalars_result([]),
            RuntimeError("deadlock"),
        ]
        saved = SimpleNamespace(employee_id=with_pay)
        service.upsert_payroll = AsyncMock()
        service.list_payrolls = AsyncMock(return_value=[saved, SimpleNamespace(employee_id=without_pay)])

        records = await service.apply_vacation_pay(2025, 3)

        assert records == [saved]
        service.upsert_payroll.assert_awaited_once()
        args = service.upsert_payroll.await_args.args
        assert args[0] == with_pay
        assert args[3] == {
            "vacation_pay_current": Decimal("200.00"),
            "vacation_pay_next": Decimal("300.00"),
        }
        mock_db.rollback.assert_awaited_once()


class TestDeletePayroll:

    @pytest.mark.asyncio
    async def test_missing_record_raises(self, service, mock_db):
        mock_db.get.return_value = None

        with pytest.raises(PayrollNotFoundException):
            await service.delete_payroll(uuid.uuid4())
