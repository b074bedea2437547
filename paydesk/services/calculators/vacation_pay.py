"""
PayDesk HR - Vacation Pay Calculator

Average-earnings vacation pay over a trailing 12-month payroll window.

- Window ends on the last day of the month before the vacation starts and
  covers 12 calendar months.
- Accruals for months before January 2025 are indexed by 735/630 (minimum
  salary raise) before averaging.
- Average daily earnings = average monthly earnings / 29.6, rounded to cents
  before being multiplied by the number of days.
"""

from calendar import monthrange
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional, Tuple

from dateutil.relativedelta import relativedelta

from paydesk.models.vacation import VacationStatus
from paydesk.services.calculators.rounding import ZERO, round_money, to_decimal


# Calendar months in the averaging window
CALCULATION_PERIOD_MONTHS = 12

# Average number of calendar days in a month
AVERAGE_DAYS_PER_MONTH = Decimal("29.6")

# Indexation of historic accruals after the minimum salary raise
CORRECTION_COEFFICIENT = Decimal("735") / Decimal("630")
CORRECTION_CUTOFF = (2025, 1)

# Minimum salary behind the no-history fallback; independent of current settings
FALLBACK_MIN_SALARY = Decimal("735")

DEFAULT_DAYS_PER_YEAR = 24


@dataclass(frozen=True)
class VacationPayResult:
    payment_amount: Decimal
    average_salary: Decimal
    period_start: date
    period_end: date

    @classmethod
    def zero(cls, start_date: date, end_date: date) -> "VacationPayResult":
        """Result used when earnings cannot be determined."""
        return cls(ZERO, ZERO, start_date, end_date)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "payment_amount": self.payment_amount,
            "average_salary": self.average_salary,
            "period_start": self.period_start,
            "period_end": self.period_end,
        }


def calculation_window(start_date: date) -> Tuple[date, date]:
    """
    Averaging window for a vacation starting on ``start_date``.

    Returns:
        (period_start, period_end): first day of the month 11 months before
        period_end, and the last day of the month before the start month
    """
    period_end = start_date.replace(day=1) - relativedelta(days=1)
    period_start = period_end.replace(day=1) - relativedelta(months=CALCULATION_PERIOD_MONTHS - 1)
    return period_start, period_end


def correction_coefficient(year: int, month: int) -> Decimal:
    """735/630 for months before January 2025, otherwise 1."""
    if (year, month) < CORRECTION_CUTOFF:
        return CORRECTION_COEFFICIENT
    return Decimal("1")


class VacationPayCalculator:
    """
    Vacation pay from payroll history.

    History rows need ``year``, ``month`` and ``total_accrued``; several rows
    for the same month are summed.
    """

    def monthly_earnings(
        self,
        history: Iterable,
        period_start: date,
        period_end: date,
    ) -> Dict[Tuple[int, int], Decimal]:
        """Accrual per (year, month) inside the window, coefficient applied."""
        first = (period_start.year, period_start.month)
        last = (period_end.year, period_end.month)

        totals: Dict[Tuple[int, int], Decimal] = {}
        for row in history:
            key = (int(row.year), int(row.month))
            if key < first or key > last:
                continue
            totals[key] = totals.get(key, Decimal("0")) + to_decimal(row.total_accrued)

        return {
            key: amount * correction_coefficient(*key)
            for key, amount in totals.items()
        }

    def calculate(
        self,
        history: Iterable,
        start_date: date,
        days_count: int,
        fallback_monthly_salary: Any = None,
    ) -> VacationPayResult:
        """
        Calculate vacation pay.

        Args:
            history: payroll rows of the employee
            start_date: first day of the vacation
            days_count: vacation days to pay
            fallback_monthly_salary: used for all 12 months when no month in
                the window has earnings

        Returns:
            VacationPayResult with the rounded average monthly salary
        """
        period_start, period_end = calculation_window(start_date)
        earnings = self.monthly_earnings(history, period_start, period_end)

        months_with_earnings = sum(1 for amount in earnings.values() if amount != 0)
        if months_with_earnings:
            total_earnings = sum(earnings.values(), Decimal("0"))
        else:
            total_earnings = to_decimal(fallback_monthly_salary) * CALCULATION_PERIOD_MONTHS
            months_with_earnings = CALCULATION_PERIOD_MONTHS

        average_monthly_salary = total_earnings / months_with_earnings
        # Rounded before multiplying by days
        average_daily_earnings = round_money(average_monthly_salary / AVERAGE_DAYS_PER_MONTH)
        payment_amount = round_money(average_daily_earnings * int(days_count or 0))

        return VacationPayResult(
            payment_amount=payment_amount,
            average_salary=round_money(average_monthly_salary),
            period_start=period_start,
            period_end=period_end,
        )


def should_pay_vacation_in_previous_month(start_date: date, salary_payment_day: int) -> bool:
    """
    True when the vacation starts on or before the salary payment day of its
    month, so its pay must go out with the previous cycle.
    """
    last_day = monthrange(start_date.year, start_date.month)[1]
    payment_day = min(max(int(salary_payment_day), 1), last_day)
    return start_date.day <= payment_day


def overlaps_month(start_date: date, end_date: date, year: int, month: int) -> bool:
    month_start = date(year, month, 1)
    month_end = date(year, month, monthrange(year, month)[1])
    return start_date <= month_end and end_date >= month_start


def split_vacation_pay(
    vacations: Iterable,
    year: int,
    month: int,
    salary_payment_day: int,
) -> Tuple[Decimal, Decimal]:
    """
    Split the pay of approved vacations touching a payroll month.

    Returns:
        (current_month, next_month) amounts
    """
    current_month = Decimal("0")
    next_month = Decimal("0")

    for vacation in vacations:
        if VacationStatus(vacation.status) != VacationStatus.APPROVED:
            continue
        if not overlaps_month(vacation.start_date, vacation.end_date, year, month):
            continue

        amount = to_decimal(vacation.payment_amount)
        if should_pay_vacation_in_previous_month(vacation.start_date, salary_payment_day):
            next_month += amount
        else:
            current_month += amount

    return round_money(current_month), round_money(next_month)


def calculate_accrued_vacation_days(
    hire_date: date,
    days_per_year: Any = DEFAULT_DAYS_PER_YEAR,
    as_of: Optional[date] = None,
) -> Decimal:
    """
    Vacation days earned since hire, rounded to 1 decimal.

    Whole months earn days_per_year / 12 each; the running month earns its
    elapsed share of that.
    """
    as_of = as_of or date.today()
    if as_of <= hire_date:
        return Decimal("0.0")

    days_per_month = to_decimal(days_per_year) / 12
    elapsed = relativedelta(as_of, hire_date)
    months_worked = elapsed.years * 12 + elapsed.months

    last_full_month = hire_date + relativedelta(months=months_worked)
    days_in_partial_month = (as_of - last_full_month).days
    days_in_month = monthrange(as_of.year, as_of.month)[1]

    accrued = months_worked * days_per_month
    accrued += Decimal(days_in_partial_month) / Decimal(days_in_month) * days_per_month
    return round_money(accrued, Decimal("0.1"))
