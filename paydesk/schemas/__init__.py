"""
PayDesk HR - Schemas Package

Pydantic schemas for request/response validation.
"""

from paydesk.schemas.employee import (
    EmployeeCreateRequest,
    EmployeeUpdateRequest,
    EmployeeResponse,
    EmployeeListResponse,
    WorkedDaysResponse,
)
from paydesk.schemas.timesheet import (
    TimesheetEntryRequest,
    TimesheetBulkUpsertRequest,
    TimesheetEntryResponse,
    TimesheetListResponse,
    WorkNormRequest,
    WorkNormResponse,
)
from paydesk.schemas.settings import PayrollSettingsSchema
from paydesk.schemas.payroll import (
    PayrollCalculateRequest,
    PayrollUpsertRequest,
    PayrollComputeRequest,
    PayrollPeriodRequest,
    PayrollBreakdownResponse,
    PayrollRecordResponse,
    PayrollListResponse,
)
from paydesk.schemas.kpi import (
    KpiTierSchema,
    KpiMetricCreateRequest,
    KpiMetricUpdateRequest,
    KpiMetricResponse,
    KpiMetricListResponse,
    EmployeeAssignmentRequest,
    KpiBonusCalculateRequest,
    KpiBonusResponse,
    EmployeeBonusResponse,
    KpiResultRequest,
    KpiResultsSaveRequest,
    KpiResultResponse,
    KpiResultListResponse,
)
from paydesk.schemas.vacation import (
    VacationPayCalculateRequest,
    VacationPayResponse,
    AccruedDaysResponse,
    VacationRequestCreate,
    VacationRequestUpdate,
    VacationStatusUpdate,
    VacationRequestResponse,
    VacationRequestListResponse,
    VacationBalanceRequest,
    VacationBalanceResponse,
    VacationPaymentCreate,
    VacationPaymentUpdate,
    VacationPaymentResponse,
    VacationPayoutsResponse,
)

__all__ = [
    # Employees
    "EmployeeCreateRequest",
    "EmployeeUpdateRequest",
    "EmployeeResponse",
    "EmployeeListResponse",
    "WorkedDaysResponse",
    # Timesheets & work norms
    "TimesheetEntryRequest",
    "TimesheetBulkUpsertRequest",
    "TimesheetEntryResponse",
    "TimesheetListResponse",
    "WorkNormRequest",
    "WorkNormResponse",
    # Settings
    "PayrollSettingsSchema",
    # Payroll
    "PayrollCalculateRequest",
    "PayrollUpsertRequest",
    "PayrollComputeRequest",
    "PayrollPeriodRequest",
    "PayrollBreakdownResponse",
    "PayrollRecordResponse",
    "PayrollListResponse",
    # KPI
    "KpiTierSchema",
    "KpiMetricCreateRequest",
    "KpiMetricUpdateRequest",
    "KpiMetricResponse",
    "KpiMetricListResponse",
    "EmployeeAssignmentRequest",
    "KpiBonusCalculateRequest",
    "KpiBonusResponse",
    "EmployeeBonusResponse",
    "KpiResultRequest",
    "KpiResultsSaveRequest",
    "KpiResultResponse",
    "KpiResultListResponse",
    # Vacations
    "VacationPayCalculateRequest",
    "VacationPayResponse",
    "AccruedDaysResponse",
    "VacationRequestCreate",
    "VacationRequestUpdate",
    "VacationStatusUpdate",
    "VacationRequestResponse",
    "VacationRequestListResponse",
    "VacationBalanceRequest",
    "VacationBalanceResponse",
    "VacationPaymentCreate",
    "VacationPaymentUpdate",
    "VacationPaymentResponse",
    "VacationPayoutsResponse",
]
