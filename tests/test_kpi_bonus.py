"""
PayDesk HR - KPI Bonus Calculator Tests
"""

import uuid
from decimal import Decimal
from types import SimpleNamespace

import pytest

from paydesk.models.kpi import MetricType
from paydesk.services.calculators import (
    KpiBonusCalculator,
    KpiMetricRule,
    KpiTier,
    calculate_bonus,
    calculate_total_bonus,
)


@pytest.fixture
def tiers():
    return [
        KpiTier(Decimal("0"), Decimal("99.99"), Decimal("1")),
        KpiTier(Decimal("100"), Decimal("199.99"), Decimal("2")),
        KpiTier(Decimal("200"), None, Decimal("3")),
    ]


class TestTieredBonus:

    def test_value_in_middle_tier(self, tiers):
        rule = KpiMetricRule(MetricType.TIERED, tiers=tiers)

        assert calculate_bonus(rule, 150) == Decimal("300")

    def test_unbounded_top_tier(self, tiers):
        rule = KpiMetricRule(MetricType.TIERED, tiers=tiers)

        assert calculate_bonus(rule, 500) == Decimal("1500")

    def test_no_matching_tier(self):
        rule = KpiMetricRule(
            MetricType.TIERED,
            tiers=[KpiTier(Decimal("10"), Decimal("20"), Decimal("5"))],
        )

        assert calculate_bonus(rule, 5) == Decimal("0")

    def test_tier_order_does_not_matter(self):
        """Overlapping tiers resolve to the lowest min_value however they are listed."""
        low = KpiTier(Decimal("0"), Decimal("100"), Decimal("1"))
        high = KpiTier(Decimal("50"), None, Decimal("2"))

        forward = KpiMetricRule(MetricType.TIERED, tiers=[low, high])
        backward = KpiMetricRule(MetricType.TIERED, tiers=[high, low])

        assert calculate_bonus(forward, 80) == calculate_bonus(backward, 80) == Decimal("80")

    def test_no_tiers(self):
        assert calculate_bonus(KpiMetricRule(MetricType.TIERED), 100) == Decimal("0")


class TestRateBonuses:

    def test_multiply(self):
        """Value 10 at base rate 5 gives 50."""
        rule = KpiMetricRule(MetricType.MULTIPLY, base_rate=Decimal("5"))

        assert calculate_bonus(rule, 10) == Decimal("50")

    def test_percentage_below_target(self):
        rule = KpiMetricRule(MetricType.PERCENTAGE, base_rate=Decimal("200"))

        assert calculate_bonus(rule, 75) == Decimal("150")

    def test_percentage_capped_at_target(self):
        rule = KpiMetricRule(MetricType.PERCENTAGE, base_rate=Decimal("200"))

        assert calculate_bonus(rule, 130) == Decimal("200")

    def test_sum_percentage(self):
        rule = KpiMetricRule(MetricType.SUM_PERCENTAGE, base_rate=Decimal("3"))

        assert calculate_bonus(rule, 10000) == Decimal("300")

    def test_missing_base_rate_is_zero(self):
        rule = KpiMetricRule(MetricType.MULTIPLY)

        assert calculate_bonus(rule, 10) == Decimal("0")

    def test_type_given_as_string(self):
        rule = KpiMetricRule("multiply", base_rate=Decimal("2.5"))

        assert KpiBonusCalculator().calculate_bonus(rule, "4") == Decimal("10.0")


class TestTotalBonus:

    def test_sums_only_metrics_with_results(self, tiers):
        sales_id, calls_id, unused_id = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        metrics = [
            KpiMetricRule(MetricType.TIERED, tiers=tiers, id=sales_id),
            KpiMetricRule(MetricType.MULTIPLY, base_rate=Decimal("0.333"), id=calls_id),
            KpiMetricRule(MetricType.MULTIPLY, base_rate=Decimal("100"), id=unused_id),
        ]
        results = [
            SimpleNamespace(metric_id=sales_id, value=Decimal("120")),
            SimpleNamespace(metric_id=calls_id, value=Decimal("10")),
        ]

        # 240 + 3.33
        assert calculate_total_bonus(metrics, results) == Decimal("243.33")

    def test_no_results(self, tiers):
        metrics = [KpiMetricRule(MetricType.TIERED, tiers=tiers, id=uuid.uuid4())]

        assert calculate_total_bonus(metrics, []) == Decimal("0.00")
