"""
PayDesk HR - KPI Models

Bonus metrics, their tier tables, employee assignments and reported
results per period.
"""

import uuid
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from sqlalchemy import (
    Date, ForeignKey, Numeric, String, Text, Enum as SQLEnum, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paydesk.models.base import BaseModel


class MetricType(str, Enum):
    """How a metric turns a reported value into a bonus."""
    TIERED = "tiered"
    MULTIPLY = "multiply"
    PERCENTAGE = "percentage"
    SUM_PERCENTAGE = "sum_percentage"


class KpiMetric(BaseModel):
    """A bonus rule."""

    __tablename__ = "kpi_metrics"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[MetricType] = mapped_column(SQLEnum(MetricType), nullable=False)
    base_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=15, scale=4),
        nullable=True,
        comment="Rate per unit, amount at 100%, or percentage of sum depending on type",
    )

    tiers: Mapped[List["KpiMetricTier"]] = relationship(
        "KpiMetricTier",
        back_populates="metric",
        cascade="all, delete-orphan",
        order_by="KpiMetricTier.min_value",
    )
    employee_links: Mapped[List["EmployeeMetric"]] = relationship(
        "EmployeeMetric",
        back_populates="metric",
        cascade="all, delete-orphan",
    )

    @property
    def employee_ids(self) -> List[uuid.UUID]:
        return [link.employee_id for link in self.employee_links]


class KpiMetricTier(BaseModel):
    """One [min, max] band of a tiered metric."""

    __tablename__ = "kpi_metric_tiers"

    metric_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("kpi_metrics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    min_value: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=4), nullable=False)
    max_value: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=15, scale=4), nullable=True,
        comment="Null means no upper bound",
    )
    rate: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=4), nullable=False)

    metric: Mapped["KpiMetric"] = relationship("KpiMetric", back_populates="tiers")


class EmployeeMetric(BaseModel):
    """Assignment of a metric to an employee."""

    __tablename__ = "employee_metrics"
    __table_args__ = (
        UniqueConstraint("employee_id", "metric_id", name="uq_employee_metrics_pair"),
    )

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    metric_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("kpi_metrics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    metric: Mapped["KpiMetric"] = relationship("KpiMetric", back_populates="employee_links")


class KpiResult(BaseModel):
    """Reported value of a metric for an employee and month."""

    __tablename__ = "kpi_results"
    __table_args__ = (
        UniqueConstraint("employee_id", "metric_id", "period", name="uq_kpi_results_key"),
    )

    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    metric_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("kpi_metrics.id", ondelete="CASCADE"),
        nullable=False,
    )
    period: Mapped[date] = mapped_column(
        Date, nullable=False,
        comment="First day of the month",
    )
    value: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=4), nullable=False)
    calculated_bonus: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
        default=Decimal("0.00"),
    )
