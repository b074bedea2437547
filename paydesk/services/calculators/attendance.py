"""
PayDesk HR - Attendance Aggregator

Turns a month of timesheet entries into a worked-day count.

Rules:
- Entries after the employee's termination date are ignored; the
  termination date itself is a normal day.
- Several entries for one date collapse into one status; "work" always
  wins, otherwise the first status seen is kept.
- Only dates resolved to "work" are counted.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Optional, Union

from paydesk.models.timesheet import DayStatus


@dataclass(frozen=True)
class AttendanceDay:
    """A single attendance mark."""
    work_date: date
    status: Union[DayStatus, str, None]


def _normalize_status(status: Union[DayStatus, str, None]) -> DayStatus:
    if status is None:
        return DayStatus.NONE
    try:
        return DayStatus(status)
    except ValueError:
        return DayStatus.NONE


class AttendanceAggregator:
    """Merges duplicate timesheet marks and counts worked days."""

    def resolve_day_statuses(
        self,
        entries: Iterable,
        month: int,
        year: int,
        termination_date: Optional[date] = None,
    ) -> Dict[date, DayStatus]:
        """
        Build the merged calendar for a month.

        Entries may be ``TimesheetEntry`` rows or ``AttendanceDay`` values;
        anything with ``work_date`` and ``status`` attributes works.
        """
        calendar: Dict[date, DayStatus] = {}

        for entry in entries:
            work_date = entry.work_date
            if work_date.year != year or work_date.month != month:
                continue
            if termination_date is not None and work_date > termination_date:
                continue

            status = _normalize_status(entry.status)
            if work_date not in calendar or status == DayStatus.WORK:
                calendar[work_date] = status

        return calendar

    def count_worked_days(
        self,
        entries: Iterable,
        month: int,
        year: int,
        termination_date: Optional[date] = None,
    ) -> int:
        calendar = self.resolve_day_statuses(entries, month, year, termination_date)
        return sum(1 for status in calendar.values() if status == DayStatus.WORK)

    def status_distribution(
        self,
        entries: Iterable,
        month: int,
        year: int,
        termination_date: Optional[date] = None,
    ) -> Dict[str, int]:
        """Count of resolved days per status value."""
        calendar = self.resolve_day_statuses(entries, month, year, termination_date)
        return dict(Counter(status.value for status in calendar.values()))
