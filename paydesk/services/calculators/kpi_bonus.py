"""
PayDesk HR - KPI Bonus Calculator

Bonus modes:
- tiered:          value * rate of the first matching [min, max] tier
- multiply:        value * base_rate
- percentage:      base_rate * min(value / 100, 1)   (value is % of target)
- sum_percentage:  value * base_rate / 100           (value is a sum, rate a %)

Tiers are matched in ascending min_value order regardless of how they
were loaded.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from paydesk.models.kpi import MetricType
from paydesk.services.calculators.rounding import round_money, to_decimal


ONE = Decimal("1")
HUNDRED = Decimal("100")


@dataclass
class KpiTier:
    """Tier band definition."""
    min_value: Decimal
    max_value: Optional[Decimal]
    rate: Decimal


@dataclass
class KpiMetricRule:
    """Calculation-only view of a metric."""
    type: MetricType
    base_rate: Optional[Decimal] = None
    tiers: List[KpiTier] = field(default_factory=list)
    id: Any = None


class KpiBonusCalculator:
    """
    Computes bonuses for KPI metrics.

    Accepts ``KpiMetric`` rows or ``KpiMetricRule`` values; both expose
    ``type``, ``base_rate`` and ``tiers``.
    """

    def sorted_tiers(self, tiers: Iterable) -> List:
        return sorted(tiers or [], key=lambda tier: to_decimal(tier.min_value))

    def calculate_tiered_bonus(self, value: Decimal, tiers: Iterable) -> Decimal:
        for tier in self.sorted_tiers(tiers):
            max_value = tier.max_value
            if value >= to_decimal(tier.min_value) and (
                max_value is None or value <= to_decimal(max_value)
            ):
                return value * to_decimal(tier.rate)
        return Decimal("0")

    def calculate_multiply_bonus(self, value: Decimal, base_rate: Decimal) -> Decimal:
        return value * base_rate

    def calculate_percentage_bonus(self, value: Decimal, base_rate: Decimal) -> Decimal:
        # Capped at 100% of target
        achieved = min(value / HUNDRED, ONE)
        return base_rate * achieved

    def calculate_sum_percentage_bonus(self, value: Decimal, base_rate: Decimal) -> Decimal:
        return value * base_rate / HUNDRED

    def calculate_bonus(self, metric, value: Any) -> Decimal:
        """Bonus for one reported value, unrounded."""
        amount = to_decimal(value)
        base_rate = to_decimal(metric.base_rate)
        metric_type = MetricType(metric.type)

        if metric_type == MetricType.TIERED:
            return self.calculate_tiered_bonus(amount, metric.tiers)
        if metric_type == MetricType.MULTIPLY:
            return self.calculate_multiply_bonus(amount, base_rate)
        if metric_type == MetricType.PERCENTAGE:
            return self.calculate_percentage_bonus(amount, base_rate)
        return self.calculate_sum_percentage_bonus(amount, base_rate)

    def calculate_total_bonus(self, metrics: Iterable, results: Iterable) -> Decimal:
        """
        Sum bonuses of every metric that has a reported result.

        Args:
            metrics: metrics assigned to the employee
            results: results for one employee and period; each has
                ``metric_id`` and ``value``

        Returns:
            Total bonus rounded to cents
        """
        values_by_metric: Dict[Any, Any] = {result.metric_id: result.value for result in results}

        total = Decimal("0")
        for metric in metrics:
            if metric.id in values_by_metric:
                total += self.calculate_bonus(metric, values_by_metric[metric.id])

        return round_money(total)
