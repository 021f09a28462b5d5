from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds, hours_between
from ..core.enums import TimestampType
from ..core.exceptions import InvalidDateRange, NoLogsInRange
from ..ledger.model import TimestampEvent
from ..ledger.repository import LedgerRepository
from ..organization.repository import EmployeeDirectory
from ..organization.service import require_employee
from .calculator.base import OvertimeCalculator
from .calculator.standard_calculator import StandardOvertimeCalculator
from .model import DayBreakdown, TimesheetReport, WorkSegment

logger = logging.getLogger(__name__)

T = TimestampType

_OPENS_SEGMENT = (T.CLOCK_IN, T.WBS_CHANGE, T.BREAK_END)
_CLOSES_SEGMENT = (T.WBS_CHANGE, T.CLOCK_OUT, T.BREAK_START)


def build_daily_breakdown(events: Sequence[TimestampEvent]) -> dict[date, DayBreakdown]:
    """Replay ascending events into per-date allocations.

    A segment is charged to the date of the event that closes it. Every date that
    has at least one event gets an entry, even without closed segments.
    """
    days: dict[date, DayBreakdown] = {}
    open_code: Optional[str] = None
    open_start: Optional[datetime] = None
    break_start: Optional[datetime] = None

    for e in events:
        day = days.setdefault(e.log_date, DayBreakdown())

        if open_start is not None and e.timestamp_type in _CLOSES_SEGMENT:
            day.allocations.append(
                WorkSegment(
                    work_category_code=open_code,
                    start_time=open_start,
                    end_time=e.timestamp,
                    total_hours=round(hours_between(open_start, e.timestamp), 3),
                )
            )
            open_start = None

        if e.timestamp_type in _OPENS_SEGMENT:
            open_code, open_start = e.work_category_code, e.timestamp

        if e.timestamp_type == T.BREAK_START:
            break_start = e.timestamp
        elif e.timestamp_type == T.BREAK_END and break_start is not None:
            day.break_hours = round(day.break_hours + hours_between(break_start, e.timestamp), 3)
            break_start = None
        elif e.timestamp_type == T.CLOCK_OUT:
            break_start = None

    return days


class TimesheetService:
    def __init__(
        self,
        ledger: LedgerRepository,
        employees: EmployeeDirectory,
        *,
        calculator: Optional[OvertimeCalculator] = None,
    ):
        self._ledger = ledger
        self._employees = employees
        self._calculator = calculator or StandardOvertimeCalculator()

    def generate(self, employee_id: str, start_date: date, end_date: date) -> TimesheetReport:
        require_employee(self._employees, employee_id)
        if end_date < start_date:
            raise InvalidDateRange("endDate cannot be before startDate.")

        start, end = day_bounds(start_date, end_date)
        events = self._ledger.list_between(employee_id, start=start, end=end)
        if not events:
            raise NoLogsInRange("No timestamp logs found for the specified date range.")
        logger.info("Found %d log entries for employee '%s' from %s to %s", len(events), employee_id, start_date, end_date)

        days = build_daily_breakdown(events)
        for day in days.values():
            day.total_hours = round(sum(s.total_hours for s in day.allocations), 3)
            regular, overtime = self._calculator.split_day(day.total_hours)
            day.regular_hours = round(regular, 3)
            day.overtime_hours = round(overtime, 3)

        return TimesheetReport(
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            daily_breakdown=days,
            weekly_summary=self._calculator.summarize(days.values()),
        )
