from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.crypto import FieldCipher, decrypt_or_marker, encrypt_optional
from ..common.datetime_utils import hours_between, now_utc
from ..core.constants import (
    DAILY_REGULAR_HOURS,
    DEFAULT_ATTENDANCE_LIMIT,
    MAX_SINGLE_BREAK,
    MAX_WORK_SPAN,
    MIN_EVENTS_PER_DAY,
)
from ..core.enums import TimestampType
from ..core.exceptions import (
    AttendanceAlreadyExists,
    ExcessiveBreakDuration,
    ExcessiveWorkDuration,
    IncompleteDay,
    InvalidDateRange,
    LeaveConflict,
    MissingClockBoundary,
    MissingField,
)
from ..leave.repository import LeaveRepository
from ..ledger.model import TimestampEvent
from ..ledger.repository import LedgerRepository
from ..organization.repository import EmployeeDirectory
from ..organization.service import WorkCategoryService, require_employee
from .model import AttendanceRecord, DayHours
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def summarize_day(events: Sequence[TimestampEvent]) -> DayHours:
    """Hours for one date's ledger events (ascending).

    Rules:
    - exactly one CLOCK_IN and one CLOCK_OUT, clock-out after clock-in
    - span at most 12h, each break at most 30 min
    - regular hours capped at 8, the remainder is overtime
    """
    if len(events) < MIN_EVENTS_PER_DAY:
        raise IncompleteDay("Insufficient logs: A full workday must have at least a CLOCK_IN and CLOCK_OUT.")

    clock_ins = [e for e in events if e.timestamp_type == TimestampType.CLOCK_IN]
    clock_outs = [e for e in events if e.timestamp_type == TimestampType.CLOCK_OUT]
    if len(clock_ins) != 1 or len(clock_outs) != 1:
        raise MissingClockBoundary("Exactly one CLOCK_IN and one CLOCK_OUT event must exist for the specified date.")

    clock_in, clock_out = clock_ins[0], clock_outs[0]
    if clock_out.timestamp <= clock_in.timestamp:
        raise MissingClockBoundary("CLOCK_OUT must come after CLOCK_IN on the specified date.")

    span = clock_out.timestamp - clock_in.timestamp
    if span > MAX_WORK_SPAN:
        raise ExcessiveWorkDuration("Work duration cannot exceed 12 hours.")

    total_break = timedelta()
    break_start: Optional[datetime] = None
    for e in events:
        if e.timestamp_type == TimestampType.BREAK_START:
            break_start = e.timestamp
        elif e.timestamp_type == TimestampType.BREAK_END and break_start is not None:
            duration = e.timestamp - break_start
            if duration > MAX_SINGLE_BREAK:
                raise ExcessiveBreakDuration("A break duration cannot exceed the 30 minute maximum.")
            total_break += duration
            break_start = None

    worked = hours_between(clock_in.timestamp, clock_out.timestamp) - total_break.total_seconds() / 3600
    return DayHours(
        check_in_time=clock_in.timestamp,
        check_out_time=clock_out.timestamp,
        total_hours=round(worked, 2),
        regular_hours=round(min(worked, DAILY_REGULAR_HOURS), 2),
        overtime_hours=round(max(0.0, worked - DAILY_REGULAR_HOURS), 2),
        breaks=sum(1 for e in events if e.timestamp_type == TimestampType.BREAK_START),
        work_category_code=clock_in.work_category_code,
        location=clock_in.location,
    )


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        ledger: LedgerRepository,
        employees: EmployeeDirectory,
        leaves: LeaveRepository,
        categories: WorkCategoryService,
        cipher: FieldCipher,
    ):
        self._attendance = attendance
        self._ledger = ledger
        self._employees = employees
        self._leaves = leaves
        self._categories = categories
        self._cipher = cipher

    def _ensure_no_leave(self, employee_id: str, attendance_date: date) -> None:
        for leave in self._leaves.list_approved_for_employee(employee_id):
            if leave.covers(attendance_date):
                raise LeaveConflict(
                    f"Conflict: An approved leave request exists for this date ({attendance_date.isoformat()})."
                )

    def create_record(
        self,
        *,
        employee_id: str,
        attendance_date: date,
        work_mode: str,
        notes: Optional[str] = None,
        project_code: Optional[str] = None,
        task_category: Optional[str] = None,
        created_by: Optional[str] = None,
        now: datetime | None = None,
    ) -> str:
        """Derive and store the attendance record for one date; returns its id."""
        if not work_mode:
            raise MissingField("Missing required fields: workMode")
        require_employee(self._employees, employee_id)

        if self._attendance.exists_for_date(employee_id, attendance_date):
            raise AttendanceAlreadyExists(
                f"An attendance record for this date ({attendance_date.isoformat()}) already exists."
            )

        self._ensure_no_leave(employee_id, attendance_date)

        events = self._ledger.list_for_date(employee_id, attendance_date)
        day = summarize_day(events)
        logger.info(
            "Processed %d logs for employee '%s' on %s: %.2fh",
            len(events),
            employee_id,
            attendance_date,
            day.total_hours,
        )

        record = AttendanceRecord(
            attendance_id=str(uuid.uuid4()),
            employee_id=employee_id,
            attendance_date=attendance_date,
            check_in_time=day.check_in_time,
            check_out_time=day.check_out_time,
            total_hours=day.total_hours,
            regular_hours=day.regular_hours,
            overtime_hours=day.overtime_hours,
            breaks=day.breaks,
            work_mode=work_mode,
            work_category_code=day.work_category_code,
            location=day.location,
            cost_center=self._categories.cost_center_for(day.work_category_code),
            project_code=project_code,
            task_category=task_category,
            notes=encrypt_optional(self._cipher, notes),
            created_by=created_by or employee_id,
            created_at=now or now_utc(),
        )

        if not self._attendance.insert(record):
            raise AttendanceAlreadyExists(
                f"An attendance record for this date ({attendance_date.isoformat()}) already exists."
            )

        logger.info("Attendance record %s created for employee '%s'", record.attendance_id, employee_id)
        return record.attendance_id

    def list_records(
        self,
        employee_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = DEFAULT_ATTENDANCE_LIMIT,
        offset: int = 0,
    ) -> list[AttendanceRecord]:
        require_employee(self._employees, employee_id)
        if start_date and end_date and end_date < start_date:
            raise InvalidDateRange("endDate cannot be before startDate.")

        rows = self._attendance.list_for_employee(
            employee_id, start_date=start_date, end_date=end_date, limit=limit, offset=offset
        )
        return [
            r.with_plaintext(
                location=decrypt_or_marker(self._cipher, r.location, context=f"attendance {r.attendance_id}"),
                notes=decrypt_or_marker(self._cipher, r.notes, context=f"attendance {r.attendance_id}"),
            )
            for r in rows
        ]
