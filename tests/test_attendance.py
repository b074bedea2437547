"""
PayDesk HR - Attendance Aggregator Tests
"""

from datetime import date

from paydesk.models.timesheet import DayStatus
from paydesk.services.calculators import AttendanceAggregator, AttendanceDay, count_worked_days


class TestCountWorkedDays:
    """Worked-day counting from timesheet marks."""

    def test_counts_only_work_days(self):
        """Sick, vacation and unpaid days are not worked."""
        entries = [
            AttendanceDay(date(2025, 3, 3), DayStatus.WORK),
            AttendanceDay(date(2025, 3, 4), DayStatus.WORK),
            AttendanceDay(date(2025, 3, 5), DayStatus.SICK),
            AttendanceDay(date(2025, 3, 6), DayStatus.VACATION),
            AttendanceDay(date(2025, 3, 7), DayStatus.UNPAID),
        ]

        assert count_worked_days(entries, 3, 2025) == 2

    def test_duplicate_date_with_work_counts_once(self):
        """Two marks on one date with one 'work' are a single worked day."""
        entries = [
            AttendanceDay(date(2025, 3, 3), DayStatus.SICK),
            AttendanceDay(date(2025, 3, 3), DayStatus.WORK),
            AttendanceDay(date(2025, 3, 4), DayStatus.WORK),
            AttendanceDay(date(2025, 3, 4), DayStatus.WORK),
        ]

        assert count_worked_days(entries, 3, 2025) == 2

    def test_duplicate_without_work_keeps_first_status(self):
        entries = [
            AttendanceDay(date(2025, 3, 3), DayStatus.SICK),
            AttendanceDay(date(2025, 3, 3), DayStatus.VACATION),
        ]

        calendar = AttendanceAggregator().resolve_day_statuses(entries, 3, 2025)

        assert calendar == {date(2025, 3, 3): DayStatus.SICK}

    def test_entries_after_termination_ignored(self):
        """The termination date itself still counts."""
        entries = [
            AttendanceDay(date(2025, 3, 10), DayStatus.WORK),
            AttendanceDay(date(2025, 3, 11), DayStatus.WORK),
            AttendanceDay(date(2025, 3, 12), DayStatus.WORK),
        ]

        assert count_worked_days(entries, 3, 2025, termination_date=date(2025, 3, 11)) == 2

    def test_other_months_ignored(self):
        entries = [
            AttendanceDay(date(2025, 2, 28), DayStatus.WORK),
            AttendanceDay(date(2025, 3, 1), DayStatus.WORK),
            AttendanceDay(date(2024, 3, 1), DayStatus.WORK),
        ]

        assert count_worked_days(entries, 3, 2025) == 1

    def test_string_and_unknown_statuses(self):
        """Raw strings are accepted; unknown values are treated as no mark."""
        entries = [
            AttendanceDay(date(2025, 3, 3), "work"),
            AttendanceDay(date(2025, 3, 4), "holiday-ish"),
            AttendanceDay(date(2025, 3, 5), None),
        ]

        assert count_worked_days(entries, 3, 2025) == 1

    def test_empty_month(self):
        assert count_worked_days([], 3, 2025) == 0


class TestStatusDistribution:

    def test_distribution_after_merge(self):
        entries = [
            AttendanceDay(date(2025, 3, 3), DayStatus.SICK),
            AttendanceDay(date(2025, 3, 3), DayStatus.WORK),
            AttendanceDay(date(2025, 3, 4), DayStatus.SICK),
            AttendanceDay(date(2025, 3, 5), DayStatus.WORK),
        ]

        distribution = AttendanceAggregator().status_distribution(entries, 3, 2025)

        assert distribution == {"work": 2, "sick": 1}
