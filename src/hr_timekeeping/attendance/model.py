from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import to_iso


@dataclass(frozen=True)
class AttendanceRecord:
    """Daily attendance summary derived from one calendar date of the ledger.

    ``location`` and ``notes`` hold ciphertext while stored.
    """

    attendance_id: str
    employee_id: str
    attendance_date: date
    check_in_time: datetime
    check_out_time: datetime
    total_hours: float
    regular_hours: float
    overtime_hours: float
    breaks: int
    work_mode: str
    work_category_code: Optional[str] = None
    location: Optional[str] = None
    cost_center: Optional[str] = None
    project_code: Optional[str] = None
    task_category: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    def with_plaintext(self, *, location: Optional[str], notes: Optional[str]) -> "AttendanceRecord":
        return replace(self, location=location, notes=notes)

    def to_dict(self) -> dict:
        return {
            "attendanceId": self.attendance_id,
            "employeeId": self.employee_id,
            "attendanceDate": self.attendance_date.isoformat(),
            "checkInTime": to_iso(self.check_in_time),
            "checkOutTime": to_iso(self.check_out_time),
            "totalHours": self.total_hours,
            "regularHours": self.regular_hours,
            "overtimeHours": self.overtime_hours,
            "breaks": self.breaks,
            "wbsCode": self.work_category_code,
            "location": self.location,
            "costCenter": self.cost_center,
            "workMode": self.work_mode,
            "projectCode": self.project_code,
            "taskCategory": self.task_category,
            "notes": self.notes,
            "createdBy": self.created_by,
            "createdAt": to_iso(self.created_at),
        }


@dataclass(frozen=True)
class DayHours:
    """Hours worked on one date, before anything is persisted."""

    check_in_time: datetime
    check_out_time: datetime
    total_hours: float
    regular_hours: float
    overtime_hours: float
    breaks: int
    work_category_code: Optional[str]
    location: Optional[str]
