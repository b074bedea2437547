"""
PayDesk HR - Payroll Service

Monthly payroll records, one per employee and month.

Operators edit only the input amounts (worked days, bonus, extra pay,
vacation pay, sick leave, advance, other deductions). Every write runs the
payroll calculator with the employee's compensation basis, the month's work
norm and the current settings, and overwrites all derived amounts.
"""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.models.employee import Employee
from paydesk.models.payroll import PAYROLL_DERIVED_FIELDS, PAYROLL_INPUT_FIELDS, PayrollRecord
from paydesk.models.vacation import VacationRequest, VacationStatus
from paydesk.services.calculators.payroll import (
    PayrollBreakdown,
    PayrollCalculator,
    PayrollInput,
    PayrollSettings,
)
from paydesk.services.calculators.vacation_pay import split_vacation_pay
from paydesk.services.employee_service import EmployeeService
from paydesk.services.kpi_service import KpiService
from paydesk.services.settings_service import SettingsService
from paydesk.services.timesheet_service import TimesheetService, month_bounds
from paydesk.services.work_norm_service import WorkNormService
from paydesk.utils.error_handling import PayrollNotFoundException

logger = logging.getLogger(__name__)


class PayrollService:
    """
    Payroll service for storing and recomputing monthly payroll records.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.calculator = PayrollCalculator()
        self.employee_service = EmployeeService(db)
        self.settings_service = SettingsService(db)
        self.work_norm_service = WorkNormService(db)

    # ===========================================
    # QUERIES
    # ===========================================

    async def list_payrolls(
        self,
        year: int,
        month: int,
        employee_id: Optional[uuid.UUID] = None,
    ) -> List[PayrollRecord]:
        query = (
            select(PayrollRecord)
            .where(PayrollRecord.year == year)
            .where(PayrollRecord.month == month)
        )
        if employee_id is not None:
            query = query.where(PayrollRecord.employee_id == employee_id)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_payroll(
        self,
        employee_id: uuid.UUID,
        year: int,
        month: int,
    ) -> Optional[PayrollRecord]:
        result = await self.db.execute(
            select(PayrollRecord)
            .where(PayrollRecord.employee_id == employee_id)
            .where(PayrollRecord.year == year)
            .where(PayrollRecord.month == month)
        )
        return result.scalar_one_or_none()

    async def list_employee_history(
        self,
        employee_id: uuid.UUID,
        period_start: date,
        period_end: date,
    ) -> List[PayrollRecord]:
        """Payroll records of an employee between two month starts/ends, inclusive."""
        start_key = period_start.year * 12 + period_start.month
        end_key = period_end.year * 12 + period_end.month
        result = await self.db.execute(
            select(PayrollRecord)
            .where(PayrollRecord.employee_id == employee_id)
            .where(PayrollRecord.year * 12 + PayrollRecord.month >= start_key)
            .where(PayrollRecord.year * 12 + PayrollRecord.month <= end_key)
            .order_by(PayrollRecord.year, PayrollRecord.month)
        )
        return list(result.scalars().all())

    # ===========================================
    # CALCULATION
    # ===========================================

    async def build_input(
        self,
        employee: Employee,
        year: int,
        month: int,
        inputs: Dict[str, Any],
    ) -> PayrollInput:
        """Combine operator inputs with the employee basis and the month's norm."""
        work_norm = await self.work_norm_service.get_work_norm(year, month)
        if work_norm is None:
            logger.warning(
                f"No work norm for {year}-{month:02d}; salary for employee {employee.id} accrues as zero"
            )

        return PayrollInput(
            worked_days=int(inputs.get("worked_days") or 0),
            working_days=work_norm.working_days if work_norm else 0,
            holiday_days=work_norm.holiday_days if work_norm else 0,
            rate=employee.rate,
            base_salary=employee.base_salary,
            bonus=inputs.get("bonus") or Decimal("0"),
            extra_pay=inputs.get("extra_pay") or Decimal("0"),
            vacation_pay_current=inputs.get("vacation_pay_current") or Decimal("0"),
            vacation_pay_next=inputs.get("vacation_pay_next") or Decimal("0"),
            sick_leave_payment=inputs.get("sick_leave_payment") or Decimal("0"),
            advance_payment=inputs.get("advance_payment") or Decimal("0"),
            other_deductions=inputs.get("other_deductions") or Decimal("0"),
        )

    def apply_breakdown(self, record: PayrollRecord, breakdown: PayrollBreakdown) -> PayrollRecord:
        """Overwrite the derived amounts of a record."""
        for field in PAYROLL_DERIVED_FIELDS:
            setattr(record, field, getattr(breakdown, field))
        return record

    # ===========================================
    # WRITES
    # ===========================================

    async def upsert_payroll(
        self,
        employee_id: uuid.UUID,
        year: int,
        month: int,
        inputs: Dict[str, Any],
        payment_date: Optional[date] = None,
        payroll_settings: Optional[PayrollSettings] = None,
    ) -> PayrollRecord:
        """
        Create or update the record for (employee, year, month).

        Input fields missing from ``inputs`` keep their stored values; derived
        fields are recomputed regardless of what the caller sends.
        """
        month_bounds(year, month)
        employee = await self.employee_service.get_employee_or_raise(employee_id)
        if payroll_settings is None:
            payroll_settings = await self.settings_service.get_payroll_settings()

        record = await self.get_payroll(employee_id, year, month)
        if record is None:
            record = PayrollRecord(employee_id=employee_id, year=year, month=month)
            self.db.add(record)

        merged: Dict[str, Any] = {
            field: getattr(record, field, None) for field in PAYROLL_INPUT_FIELDS
        }
        merged.update({
            key: value for key, value in inputs.items()
            if key in PAYROLL_INPUT_FIELDS and value is not None
        })
        for field in PAYROLL_INPUT_FIELDS:
            default = 0 if field == "worked_days" else Decimal("0.00")
            setattr(record, field, merged.get(field) if merged.get(field) is not None else default)

        if payment_date is not None:
            record.payment_date = payment_date

        payroll_input = await self.build_input(employee, year, month, merged)
        self.apply_breakdown(record, self.calculator.compute(payroll_input, payroll_settings))

        await self.db.commit()
        await self.db.refresh(record)

        logger.info(
            f"Payroll {record.period_label} saved for employee {employee_id}: "
            f"accrued {record.total_accrued}, payable {record.total_payable}"
        )
        return record

    async def compute_from_sources(
        self,
        employee_id: uuid.UUID,
        year: int,
        month: int,
        inputs: Optional[Dict[str, Any]] = None,
        use_kpi_bonus: bool = False,
        payment_date: Optional[date] = None,
    ) -> PayrollRecord:
        """
        Recompute a record from stored sources.

        Worked days come from the timesheet; with ``use_kpi_bonus`` the KPI
        total for the month becomes the bonus input.
        """
        data = dict(inputs or {})

        data["worked_days"] = await TimesheetService(self.db).count_worked_days(employee_id, year, month)
        if use_kpi_bonus:
            data["bonus"] = await KpiService(self.db).get_total_bonus(employee_id, date(year, month, 1))

        return await self.upsert_payroll(
            employee_id, year, month, data, payment_date=payment_date,
        )

    async def apply_vacation_pay(self, year: int, month: int) -> List[PayrollRecord]:
        """
        Distribute approved vacation pay into the month's payroll records.

        Vacations starting on or before the salary payment day are booked as
        next-month pay. Employees with no vacation pay are skipped; a failure
        for one employee is logged and the rest are still processed.
        """
        payroll_settings = await self.settings_service.get_payroll_settings()
        employee_ids = [employee.id for employee in await self.employee_service.list_employees()]
        month_start, month_end = month_bounds(year, month)

        updated_employee_ids = set()
        for employee_id in employee_ids:
            try:
                result = await self.db.execute(
                    select(VacationRequest)
                    .where(VacationRequest.employee_id == employee_id)
                    .where(VacationRequest.status == VacationStatus.APPROVED)
                    .where(VacationRequest.start_date <= month_end)
                    .where(VacationRequest.end_date >= month_start)
                )
                vacations = list(result.scalars().all())

                current_month, next_month = split_vacation_pay(
                    vacations, year, month, payroll_settings.salary_payment_day
                )
                if current_month <= 0 and next_month <= 0:
                    continue

                await self.upsert_payroll(
                    employee_id,
                    year,
                    month,
                    {"vacation_pay_current": current_month, "vacation_pay_next": next_month},
                    payroll_settings=payroll_settings,
                )
                updated_employee_ids.add(employee_id)
            except Exception as e:
                await self.db.rollback()
                logger.error(f"Error updating vacation pay for employee {employee_id}: {e}", exc_info=True)

        logger.info(f"Vacation pay applied to {len(updated_employee_ids)} payroll records for {year}-{month:02d}")
        # A rollback expires records saved earlier in the loop
        records = await self.list_payrolls(year, month)
        return [record for record in records if record.employee_id in updated_employee_ids]

    async def delete_payroll(self, payroll_id: uuid.UUID) -> bool:
        record = await self.db.get(PayrollRecord, payroll_id)
        if record is None:
            raise PayrollNotFoundException(payroll_id)
        await self.db.delete(record)
        await self.db.commit()
        return True
