"""
PayDesk HR - Calculation Engine Package

Pure payroll calculations; nothing here touches the database.

Modules:
- attendance: worked days from timesheet entries ("work" wins per date)
- kpi_bonus: KPI bonus by metric type (tiered/multiply/percentage/sum_percentage)
- payroll: monthly accrual, taxes and employer contributions
- vacation_pay: average-earnings vacation pay and payout split
"""

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from paydesk.services.calculators.rounding import round_money, to_decimal
from paydesk.services.calculators.attendance import AttendanceAggregator, AttendanceDay
from paydesk.services.calculators.kpi_bonus import KpiBonusCalculator, KpiMetricRule, KpiTier
from paydesk.services.calculators.payroll import (
    PayrollBreakdown,
    PayrollCalculator,
    PayrollInput,
    PayrollSettings,
    compute_payroll,
    default_advance_payment,
    resolve_base_salary,
)
from paydesk.services.calculators.vacation_pay import (
    AVERAGE_DAYS_PER_MONTH,
    CORRECTION_COEFFICIENT,
    FALLBACK_MIN_SALARY,
    VacationPayCalculator,
    VacationPayResult,
    calculate_accrued_vacation_days,
    calculation_window,
    should_pay_vacation_in_previous_month,
    split_vacation_pay,
)


# ===========================================
# CONVENIENCE FUNCTIONS
# ===========================================

def count_worked_days(
    entries: Iterable,
    month: int,
    year: int,
    termination_date: Optional[date] = None,
) -> int:
    """
    Count worked days of one employee in a month.

    Args:
        entries: timesheet entries (``work_date`` and ``status``)
        month: 1-12
        year: calendar year
        termination_date: entries after this date are ignored

    Returns:
        Number of distinct dates resolved to "work"
    """
    return AttendanceAggregator().count_worked_days(entries, month, year, termination_date)


def calculate_bonus(metric: Any, value: Any) -> Decimal:
    """Bonus of a single KPI metric for a reported value."""
    return KpiBonusCalculator().calculate_bonus(metric, value)


def calculate_total_bonus(metrics: Iterable, results: Iterable) -> Decimal:
    """Total KPI bonus of an employee for a period, rounded to cents."""
    return KpiBonusCalculator().calculate_total_bonus(metrics, results)


def calculate_vacation_pay_from_history(
    history: Iterable,
    start_date: date,
    days_count: int,
    fallback_monthly_salary: Any = None,
) -> VacationPayResult:
    return VacationPayCalculator().calculate(history, start_date, days_count, fallback_monthly_salary)


__all__ = [
    # Rounding
    "round_money",
    "to_decimal",
    # Attendance
    "AttendanceAggregator",
    "AttendanceDay",
    # KPI
    "KpiBonusCalculator",
    "KpiMetricRule",
    "KpiTier",
    # Payroll
    "PayrollBreakdown",
    "PayrollCalculator",
    "PayrollInput",
    "PayrollSettings",
    "compute_payroll",
    "default_advance_payment",
    "resolve_base_salary",
    # Vacation pay
    "AVERAGE_DAYS_PER_MONTH",
    "CORRECTION_COEFFICIENT",
    "FALLBACK_MIN_SALARY",
    "VacationPayCalculator",
    "VacationPayResult",
    "calculate_accrued_vacation_days",
    "calculation_window",
    "should_pay_vacation_in_previous_month",
    "split_vacation_pay",
    # Convenience functions
    "count_worked_days",
    "calculate_bonus",
    "calculate_total_bonus",
    "calculate_vacation_pay_from_history",
]
