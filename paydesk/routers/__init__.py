"""
PayDesk HR - Routers Package

FastAPI route handlers.

Routers:
- employees: Employee records and worked-day counts
- timesheets: Daily attendance marks
- work_norms: Monthly working-time norms
- settings: Payroll parameters
- payroll: Payroll calculation and records
- kpi: KPI metrics, results and bonuses
- vacations: Vacation requests, balances, payments and vacation pay
"""

from paydesk.routers import (
    employees,
    timesheets,
    work_norms,
    settings,
    payroll,
    kpi,
    vacations,
)

__all__ = [
    "employees",
    "timesheets",
    "work_norms",
    "settings",
    "payroll",
    "kpi",
    "vacations",
]
