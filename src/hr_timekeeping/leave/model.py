from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: str
    employee_id: str
    leave_type: str
    start_date: date
    end_date: date
    status: LeaveStatus

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
