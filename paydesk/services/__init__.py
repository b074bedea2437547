"""
PayDesk HR - Services Package

Business logic services.
"""

from paydesk.services.employee_service import EmployeeService
from paydesk.services.timesheet_service import TimesheetService
from paydesk.services.work_norm_service import WorkNormService
from paydesk.services.settings_service import SettingsService
from paydesk.services.kpi_service import KpiService
from paydesk.services.payroll_service import PayrollService
from paydesk.services.vacation_service import VacationService

__all__ = [
    "EmployeeService",
    "TimesheetService",
    "WorkNormService",
    "SettingsService",
    "KpiService",
    "PayrollService",
    "VacationService",
]
