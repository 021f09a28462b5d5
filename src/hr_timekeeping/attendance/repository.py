from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def exists_for_date(self, employee_id: str, attendance_date: date) -> bool:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> bool:
        """Conditional insert; False when (employee, date) already has a record."""
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int,
        offset: int = 0,
    ) -> Sequence[AttendanceRecord]:
        """Most recent date first."""
        raise NotImplementedError
