"""
PayDesk HR - Payroll Calculator Tests

Tests for salary proration, income tax with the low-income benefit,
deductions and employer contributions.
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from paydesk.services.calculators import (
    PayrollCalculator,
    PayrollInput,
    compute_payroll,
    default_advance_payment,
    resolve_base_salary,
)
from paydesk.services.settings_service import default_payroll_settings


def make_settings(**overrides):
    return replace(default_payroll_settings(), **overrides)


@pytest.fixture
def calculator():
    return PayrollCalculator()


class TestSalaryAccrued:
    """Proration of the monthly salary by worked days."""

    def test_norm_includes_holidays(self, calculator):
        """Norm {20 working, 1 holiday}, base 2100, 21 worked days."""
        result = calculator.calculate_salary_accrued(Decimal("2100"), 21, 20, 1)

        assert result["daily_rate"] == Decimal("100.00")
        assert result["salary_accrued"] == Decimal("2100.00")

    def test_unrounded_daily_rate_is_multiplied(self, calculator):
        """1000 / 3 * 2 is 666.67, not 333.33 * 2."""
        result = calculator.calculate_salary_accrued(Decimal("1000"), 2, 3, 0)

        assert result["daily_rate"] == Decimal("333.33")
        assert result["salary_accrued"] == Decimal("666.67")

    def test_zero_norm_gives_zero(self, calculator):
        result = calculator.calculate_salary_accrued(Decimal("2100"), 10, 0, 0)

        assert result == {"daily_rate": Decimal("0.00"), "salary_accrued": Decimal("0.00")}

    def test_zero_salary_gives_zero(self, calculator):
        result = calculator.calculate_salary_accrued(Decimal("0"), 10, 20, 0)

        assert result["salary_accrued"] == Decimal("0.00")


class TestIncomeTax:
    """Income tax and the benefit threshold."""

    def test_benefit_applied_below_threshold(self, calculator):
        """Accrued 1000, threshold 1500, deduction 200, rate 13%."""
        settings = make_settings(
            income_tax_rate=Decimal("13"),
            benefit_amount=Decimal("1500"),
            tax_deduction=Decimal("200"),
        )

        result = calculator.calculate_income_tax(Decimal("1000"), settings)

        assert result["taxable_base"] == Decimal("800.00")
        assert result["income_tax"] == Decimal("104.00")
        assert result["is_tax_benefit_applied"] is True

    def test_threshold_is_exclusive(self, calculator):
        """Accrued exactly at the threshold gets no benefit."""
        settings = make_settings(
            income_tax_rate=Decimal("13"),
            benefit_amount=Decimal("1500"),
            tax_deduction=Decimal("200"),
        )

        result = calculator.calculate_income_tax(Decimal("1500"), settings)

        assert result["taxable_base"] == Decimal("1500.00")
        assert result["income_tax"] == Decimal("195.00")
        assert result["is_tax_benefit_applied"] is False

    def test_taxable_base_never_negative(self, calculator):
        settings = make_settings(benefit_amount=Decimal("1500"), tax_deduction=Decimal("200"))

        result = calculator.calculate_income_tax(Decimal("150"), settings)

        assert result["taxable_base"] == Decimal("0.00")
        assert result["income_tax"] == Decimal("0.00")


class TestComputePayroll:
    """Full breakdown."""

    @pytest.fixture
    def settings(self):
        return make_settings(
            min_salary=Decimal("735"),
            income_tax_rate=Decimal("13"),
            fszn_rate=Decimal("34"),
            insurance_rate=Decimal("0.6"),
            benefit_amount=Decimal("1000"),
            tax_deduction=Decimal("200"),
        )

    @pytest.fixture
    def data(self):
        return PayrollInput(
            worked_days=20,
            working_days=20,
            holiday_days=0,
            rate=Decimal("1"),
            base_salary=Decimal("1000"),
            bonus=Decimal("200"),
            advance_payment=Decimal("400"),
            other_deductions=Decimal("10"),
        )

    def test_full_breakdown(self, data, settings):
        breakdown = compute_payroll(data, settings)

        assert breakdown.base_salary == Decimal("1000.00")
        assert breakdown.salary_accrued == Decimal("1000.00")
        assert breakdown.total_accrued == Decimal("1200.00")
        assert breakdown.is_tax_benefit_applied is False
        assert breakdown.income_tax == Decimal("156.00")
        assert breakdown.pension_tax == Decimal("12.00")
        assert breakdown.total_deductions == Decimal("178.00")
        assert breakdown.total_payable == Decimal("1022.00")
        assert breakdown.payable_without_advance == Decimal("622.00")
        assert breakdown.fszn_tax == Decimal("408.00")
        assert breakdown.insurance_tax == Decimal("7.20")
        assert breakdown.total_employee_cost == Decimal("1437.20")

    def test_totals_are_exact(self, data, settings):
        breakdown = compute_payroll(data, settings)

        assert breakdown.total_payable == breakdown.total_accrued - breakdown.total_deductions
        assert breakdown.payable_without_advance == breakdown.total_payable - data.advance_payment
        assert breakdown.total_deductions == (
            breakdown.income_tax + breakdown.pension_tax + data.other_deductions
        )

    def test_advance_is_not_a_deduction(self, data, settings):
        without_advance = replace(data, advance_payment=Decimal("0"))

        assert compute_payroll(without_advance, settings).total_deductions == \
            compute_payroll(data, settings).total_deductions

    def test_all_accrual_components_summed(self, settings):
        data = PayrollInput(
            worked_days=0,
            working_days=20,
            bonus=Decimal("1"),
            extra_pay=Decimal("2"),
            vacation_pay_current=Decimal("3"),
            vacation_pay_next=Decimal("4"),
            sick_leave_payment=Decimal("5"),
        )

        assert compute_payroll(data, settings).total_accrued == Decimal("15.00")

    def test_idempotent(self, data, settings):
        assert compute_payroll(data, settings) == compute_payroll(data, settings)

    def test_missing_norm_still_computes(self, settings):
        data = PayrollInput(worked_days=10, working_days=0, base_salary=Decimal("1000"), bonus=Decimal("50"))

        breakdown = compute_payroll(data, settings)

        assert breakdown.salary_accrued == Decimal("0.00")
        assert breakdown.total_accrued == Decimal("50.00")

    def test_to_dict(self, data, settings):
        result = compute_payroll(data, settings).to_dict()

        assert result["total_payable"] == Decimal("1022.00")
        assert result["is_tax_benefit_applied"] is False


class TestBaseSalary:

    def test_rate_times_min_salary(self):
        assert resolve_base_salary(Decimal("0.5"), None, Decimal("735")) == Decimal("367.5")

    def test_explicit_base_salary_wins(self):
        assert resolve_base_salary(Decimal("0.5"), Decimal("2000"), Decimal("735")) == Decimal("2000")

    def test_zero_base_salary_falls_back_to_rate(self):
        assert resolve_base_salary(Decimal("1"), Decimal("0"), Decimal("735")) == Decimal("735")

    def test_compute_uses_rate_when_no_base_salary(self):
        data = PayrollInput(worked_days=21, working_days=21, rate=Decimal("1"))

        breakdown = compute_payroll(data, make_settings(min_salary=Decimal("735")))

        assert breakdown.salary_accrued == Decimal("735.00")


class TestDefaultAdvancePayment:

    @pytest.mark.parametrize(
        "full_salary,expected",
        [
            (Decimal("1000"), Decimal("400")),
            (Decimal("735"), Decimal("294")),
            (Decimal("1001"), Decimal("400")),
            (Decimal("1004"), Decimal("402")),
        ],
    )
    def test_forty_percent_whole_units(self, full_salary, expected):
        assert default_advance_payment(full_salary) == expected
