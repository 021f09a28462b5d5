from __future__ import annotations

from typing import Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LeaveRequest
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved_for_employee(self, employee_id: str) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, employee_id, leave_type, start_date, end_date, status
                FROM leave_requests
                WHERE employee_id=%s AND status=%s
                ORDER BY start_date
                """,
                (employee_id, LeaveStatus.APPROVED.value),
            )
            return [
                LeaveRequest(
                    request_id=r["request_id"],
                    employee_id=r["employee_id"],
                    leave_type=r["leave_type"],
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    status=LeaveStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]
