"""
PayDesk HR - Payroll Calculator

Monthly accrual and deduction breakdown for one employee.

Calculation order (each monetary step rounded to cents):
1. Salary accrued = base salary / (working days + holiday days) * worked days
2. Total accrued = salary + bonus + extra pay + vacation pay (current and
   next month) + sick leave payment
3. Tax benefit: below the benefit threshold the flat tax deduction is taken
   off the taxable base (never below zero)
4. Income tax = taxable base * income tax rate
5. Pension tax = 1% of total accrued
6. Deductions = income tax + pension tax + other deductions
   (the advance is not a deduction, it only nets out of the payable amount)
7. Payable = total accrued - deductions; payable without advance follows
8. Employer FSZN and insurance contributions on total accrued
"""

from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

from paydesk.services.calculators.rounding import ZERO, round_money, to_decimal


# Employee pension contribution, fixed by law
PENSION_RATE = Decimal("1")  # 1%

# Share of the full salary suggested as the mid-month advance
ADVANCE_SHARE = Decimal("0.4")


@dataclass(frozen=True)
class PayrollSettings:
    """
    Tax and salary parameters passed explicitly into every calculation.

    Built from stored settings or the configured defaults.
    """
    min_salary: Decimal
    income_tax_rate: Decimal
    fszn_rate: Decimal
    insurance_rate: Decimal
    benefit_amount: Decimal
    tax_deduction: Decimal
    salary_payment_day: int


@dataclass(frozen=True)
class PayrollInput:
    """Everything the calculator needs for one employee-month."""
    worked_days: int = 0
    working_days: int = 0
    holiday_days: int = 0
    rate: Decimal = Decimal("0")
    base_salary: Optional[Decimal] = None
    bonus: Decimal = Decimal("0")
    extra_pay: Decimal = Decimal("0")
    vacation_pay_current: Decimal = Decimal("0")
    vacation_pay_next: Decimal = Decimal("0")
    sick_leave_payment: Decimal = Decimal("0")
    advance_payment: Decimal = Decimal("0")
    other_deductions: Decimal = Decimal("0")


@dataclass(frozen=True)
class PayrollBreakdown:
    """Derived payroll amounts."""
    base_salary: Decimal
    daily_rate: Decimal
    salary_accrued: Decimal
    total_accrued: Decimal
    taxable_base: Decimal
    income_tax: Decimal
    pension_tax: Decimal
    total_deductions: Decimal
    total_payable: Decimal
    payable_without_advance: Decimal
    fszn_tax: Decimal
    insurance_tax: Decimal
    total_employee_cost: Decimal
    is_tax_benefit_applied: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def resolve_base_salary(
    rate: Any,
    base_salary: Optional[Any],
    min_salary: Any,
) -> Decimal:
    """Explicit base salary when positive, otherwise rate * minimum salary."""
    if base_salary is not None and to_decimal(base_salary) > 0:
        return to_decimal(base_salary)
    return to_decimal(rate) * to_decimal(min_salary)


def default_advance_payment(full_salary: Any) -> Decimal:
    """Suggested advance: 40% of the full salary, whole units."""
    return (to_decimal(full_salary) * ADVANCE_SHARE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


class PayrollCalculator:
    """
    Payroll calculator.

    Stateless: the same input and settings always give the same breakdown.
    """

    def calculate_salary_accrued(
        self,
        base_salary: Decimal,
        worked_days: int,
        working_days: int,
        holiday_days: int,
    ) -> Dict[str, Decimal]:
        """
        Prorate the monthly salary by worked days.

        A missing norm (zero denominator) or non-positive salary yields zero
        instead of an error so data entry is never blocked.
        """
        denominator = int(working_days or 0) + int(holiday_days or 0)
        if denominator <= 0 or base_salary <= 0:
            return {"daily_rate": ZERO, "salary_accrued": ZERO}

        daily_rate = base_salary / denominator
        return {
            "daily_rate": round_money(daily_rate),
            "salary_accrued": round_money(daily_rate * int(worked_days or 0)),
        }

    def calculate_income_tax(
        self,
        total_accrued: Decimal,
        settings: PayrollSettings,
    ) -> Dict[str, Any]:
        """Income tax with the low-income benefit; threshold is exclusive."""
        benefit_amount = to_decimal(settings.benefit_amount)

        if total_accrued < benefit_amount:
            taxable_base = max(ZERO, total_accrued - to_decimal(settings.tax_deduction))
            is_tax_benefit_applied = True
        else:
            taxable_base = total_accrued
            is_tax_benefit_applied = False

        income_tax = round_money(taxable_base * to_decimal(settings.income_tax_rate) / 100)
        return {
            "taxable_base": round_money(taxable_base),
            "income_tax": income_tax,
            "is_tax_benefit_applied": is_tax_benefit_applied,
        }

    def compute(self, data: PayrollInput, settings: PayrollSettings) -> PayrollBreakdown:
        base_salary = resolve_base_salary(data.rate, data.base_salary, settings.min_salary)

        salary = self.calculate_salary_accrued(
            base_salary, data.worked_days, data.working_days, data.holiday_days
        )
        salary_accrued = salary["salary_accrued"]

        total_accrued = round_money(
            salary_accrued
            + to_decimal(data.bonus)
            + to_decimal(data.extra_pay)
            + to_decimal(data.vacation_pay_current)
            + to_decimal(data.vacation_pay_next)
            + to_decimal(data.sick_leave_payment)
        )

        tax = self.calculate_income_tax(total_accrued, settings)
        income_tax = tax["income_tax"]
        pension_tax = round_money(total_accrued * PENSION_RATE / 100)

        total_deductions = round_money(income_tax + pension_tax + to_decimal(data.other_deductions))
        total_payable = round_money(total_accrued - total_deductions)
        payable_without_advance = round_money(total_payable - to_decimal(data.advance_payment))

        # Employer-side contributions
        fszn_tax = round_money(total_accrued * to_decimal(settings.fszn_rate) / 100)
        insurance_tax = round_money(total_accrued * to_decimal(settings.insurance_rate) / 100)
        total_employee_cost = round_money(total_payable + fszn_tax + insurance_tax)

        return PayrollBreakdown(
            base_salary=round_money(base_salary),
            daily_rate=salary["daily_rate"],
            salary_accrued=salary_accrued,
            total_accrued=total_accrued,
            taxable_base=tax["taxable_base"],
            income_tax=income_tax,
            pension_tax=pension_tax,
            total_deductions=total_deductions,
            total_payable=total_payable,
            payable_without_advance=payable_without_advance,
            fszn_tax=fszn_tax,
            insurance_tax=insurance_tax,
            total_employee_cost=total_employee_cost,
            is_tax_benefit_applied=tax["is_tax_benefit_applied"],
        )


def compute_payroll(data: PayrollInput, settings: PayrollSettings) -> PayrollBreakdown:
    """Compute the payroll breakdown for one employee-month."""
    return PayrollCalculator().compute(data, settings)
