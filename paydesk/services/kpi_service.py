"""
PayDesk HR - KPI Service

KPI metrics with their tiers, employee assignments and reported results.
Every saved result carries its bonus, recomputed from the metric at save
time.
"""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from paydesk.models.employee import Employee
from paydesk.models.kpi import EmployeeMetric, KpiMetric, KpiMetricTier, KpiResult, MetricType
from paydesk.services.calculators.kpi_bonus import KpiBonusCalculator
from paydesk.services.calculators.rounding import round_money
from paydesk.utils.error_handling import KpiMetricNotFoundException

logger = logging.getLogger(__name__)


def normalize_period(period: date) -> date:
    """Results are keyed by the first day of their month."""
    return period.replace(day=1)


class KpiService:
    """Service for KPI metrics and results."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.calculator = KpiBonusCalculator()

    # ===========================================
    # METRICS
    # ===========================================

    def _metric_query(self):
        return select(KpiMetric).options(
            selectinload(KpiMetric.tiers),
            selectinload(KpiMetric.employee_links),
        )

    async def list_metrics(self) -> List[KpiMetric]:
        result = await self.db.execute(self._metric_query().order_by(KpiMetric.name))
        return list(result.scalars().all())

    async def get_metric(self, metric_id: uuid.UUID) -> Optional[KpiMetric]:
        result = await self.db.execute(
            self._metric_query()
            .where(KpiMetric.id == metric_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_metric_or_raise(self, metric_id: uuid.UUID) -> KpiMetric:
        metric = await self.get_metric(metric_id)
        if metric is None:
            raise KpiMetricNotFoundException(metric_id)
        return metric

    async def create_metric(
        self,
        name: str,
        type: MetricType,
        base_rate: Optional[Decimal] = None,
        description: Optional[str] = None,
        tiers: Optional[Iterable[Dict[str, Any]]] = None,
        employee_ids: Optional[Iterable[uuid.UUID]] = None,
    ) -> KpiMetric:
        """
        Create a metric.

        Tiers are stored only for tiered metrics.
        """
        metric = KpiMetric(
            name=name,
            type=MetricType(type),
            base_rate=base_rate,
            description=description,
        )
        if metric.type == MetricType.TIERED:
            metric.tiers = [KpiMetricTier(**tier) for tier in (tiers or [])]
        metric.employee_links = [
            EmployeeMetric(employee_id=employee_id) for employee_id in (employee_ids or [])
        ]

        self.db.add(metric)
        await self.db.commit()

        return await self.get_metric_or_raise(metric.id)

    async def update_metric(
        self,
        metric: KpiMetric,
        tiers: Optional[Iterable[Dict[str, Any]]] = None,
        **kwargs,
    ) -> KpiMetric:
        """
        Update a metric; None values are left unchanged.

        Passing ``tiers`` for a tiered metric replaces all of its tiers.
        """
        for key, value in kwargs.items():
            if value is not None and hasattr(metric, key):
                setattr(metric, key, value)

        if tiers is not None and MetricType(metric.type) == MetricType.TIERED:
            metric.tiers = [KpiMetricTier(**tier) for tier in tiers]

        await self.db.commit()
        return await self.get_metric_or_raise(metric.id)

    async def delete_metric(self, metric: KpiMetric) -> bool:
        await self.db.delete(metric)
        await self.db.commit()
        return True

    # ===========================================
    # EMPLOYEE ASSIGNMENTS
    # ===========================================

    async def get_employees_for_metric(self, metric_id: uuid.UUID) -> List[Employee]:
        result = await self.db.execute(
            select(Employee)
            .join(EmployeeMetric, EmployeeMetric.employee_id == Employee.id)
            .where(EmployeeMetric.metric_id == metric_id)
            .order_by(Employee.name)
        )
        return list(result.scalars().all())

    async def get_metrics_by_ids(self, metric_ids: Iterable[uuid.UUID]) -> List[KpiMetric]:
        metric_ids = list(dict.fromkeys(metric_ids))
        if not metric_ids:
            return []

        result = await self.db.execute(
            self._metric_query().where(KpiMetric.id.in_(metric_ids))
        )
        return list(result.scalars().all())

    async def associate_employees(
        self,
        metric_id: uuid.UUID,
        employee_ids: Iterable[uuid.UUID],
    ) -> List[Employee]:
        """Replace the set of employees assigned to a metric."""
        await self.get_metric_or_raise(metric_id)

        await self.db.execute(delete(EmployeeMetric).where(EmployeeMetric.metric_id == metric_id))
        for employee_id in dict.fromkeys(employee_ids):
            self.db.add(EmployeeMetric(metric_id=metric_id, employee_id=employee_id))

        await self.db.commit()
        return await self.get_employees_for_metric(metric_id)

    # ===========================================
    # RESULTS
    # ===========================================

    async def get_results(
        self,
        period: date,
        employee_id: Optional[uuid.UUID] = None,
    ) -> List[KpiResult]:
        query = select(KpiResult).where(KpiResult.period == normalize_period(period))
        if employee_id is not None:
            query = query.where(KpiResult.employee_id == employee_id)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def save_results(self, results: Iterable[Dict[str, Any]]) -> List[KpiResult]:
        """
        Upsert results keyed by (employee, metric, period).

        ``calculated_bonus`` is always recomputed from the metric.
        """
        metrics: Dict[uuid.UUID, KpiMetric] = {}
        saved: List[KpiResult] = []

        for data in results:
            metric_id = data["metric_id"]
            if metric_id not in metrics:
                metrics[metric_id] = await self.get_metric_or_raise(metric_id)
            metric = metrics[metric_id]

            period = normalize_period(data["period"])
            existing = await self.db.execute(
                select(KpiResult)
                .where(KpiResult.employee_id == data["employee_id"])
                .where(KpiResult.metric_id == metric_id)
                .where(KpiResult.period == period)
            )
            kpi_result = existing.scalar_one_or_none()
            if kpi_result is None:
                kpi_result = KpiResult(
                    employee_id=data["employee_id"],
                    metric_id=metric_id,
                    period=period,
                )
                self.db.add(kpi_result)

            kpi_result.value = data["value"]
            kpi_result.calculated_bonus = round_money(
                self.calculator.calculate_bonus(metric, data["value"])
            )
            saved.append(kpi_result)

        await self.db.commit()
        for kpi_result in saved:
            await self.db.refresh(kpi_result)

        return saved

    async def get_total_bonus(self, employee_id: uuid.UUID, period: date) -> Decimal:
        """
        KPI bonus of an employee for a month.

        Every metric with a stored result counts, whether or not it is still
        assigned to the employee; assigned metrics without a result add nothing.
        """
        results = await self.get_results(period, employee_id)
        metrics = await self.get_metrics_by_ids(result.metric_id for result in results)

        total = self.calculator.calculate_total_bonus(metrics, results)
        logger.debug(f"KPI bonus for employee {employee_id} in {normalize_period(period)}: {total}")
        return total
