"""
PayDesk HR - SQLAlchemy Models Package

This package contains all database models for the application.
"""

from paydesk.models.base import BaseModel, TimestampMixin
from paydesk.models.employee import Employee
from paydesk.models.timesheet import TimesheetEntry, WorkNorm, DayStatus
from paydesk.models.payroll import (
    PayrollRecord,
    PAYROLL_INPUT_FIELDS,
    PAYROLL_DERIVED_FIELDS,
)
from paydesk.models.kpi import (
    KpiMetric,
    KpiMetricTier,
    EmployeeMetric,
    KpiResult,
    MetricType,
)
from paydesk.models.vacation import (
    VacationRequest,
    VacationBalance,
    VacationPayment,
    VacationStatus,
)
from paydesk.models.settings import SettingEntry


__all__ = [
    # Base
    "BaseModel",
    "TimestampMixin",
    # Employees & time
    "Employee",
    "TimesheetEntry",
    "WorkNorm",
    "DayStatus",
    # Payroll
    "PayrollRecord",
    "PAYROLL_INPUT_FIELDS",
    "PAYROLL_DERIVED_FIELDS",
    # KPI
    "KpiMetric",
    "KpiMetricTier",
    "EmployeeMetric",
    "KpiResult",
    "MetricType",
    # Vacations
    "VacationRequest",
    "VacationBalance",
    "VacationPayment",
    "VacationStatus",
    # Settings
    "SettingEntry",
]
