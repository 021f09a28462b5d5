from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, is_duplicate_key, to_db_datetime
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    attendance_id, employee_id, attendance_date, check_in_time, check_out_time,
    total_hours, regular_hours, overtime_hours, breaks, wbs_code, location, cost_center,
    work_mode, project_code, task_category, notes, created_by, created_at
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=r["attendance_id"],
        employee_id=r["employee_id"],
        attendance_date=r["attendance_date"],
        check_in_time=from_db_datetime(r["check_in_time"]),
        check_out_time=from_db_datetime(r["check_out_time"]),
        total_hours=float(r["total_hours"]),
        regular_hours=float(r["regular_hours"]),
        overtime_hours=float(r["overtime_hours"]),
        breaks=int(r["breaks"] or 0),
        work_mode=r["work_mode"],
        work_category_code=r.get("wbs_code"),
        location=r.get("location"),
        cost_center=r.get("cost_center"),
        project_code=r.get("project_code"),
        task_category=r.get("task_category"),
        notes=r.get("notes"),
        created_by=r.get("created_by"),
        created_at=from_db_datetime(r.get("created_at")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists_for_date(self, employee_id: str, attendance_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id
                FROM attendance_records
                WHERE employee_id=%s AND attendance_date=%s
                """,
                (employee_id, attendance_date),
            )
            return fetchone(cur) is not None

    def insert(self, record: AttendanceRecord) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    INSERT INTO attendance_records({_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.attendance_id,
                        record.employee_id,
                        record.attendance_date,
                        to_db_datetime(record.check_in_time),
                        to_db_datetime(record.check_out_time),
                        record.total_hours,
                        record.regular_hours,
                        record.overtime_hours,
                        record.breaks,
                        record.work_category_code,
                        record.location,
                        record.cost_center,
                        record.work_mode,
                        record.project_code,
                        record.task_category,
                        record.notes,
                        record.created_by,
                        to_db_datetime(record.created_at),
                    ),
                )
            return True
        except IntegrityError as err:
            if is_duplicate_key(err):
                logger.warning(
                    "Attendance insert rejected for employee '%s' on %s",
                    record.employee_id,
                    record.attendance_date,
                )
                return False
            raise

    def list_for_employee(
        self,
        employee_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int,
        offset: int = 0,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["employee_id=%s"]
        params: list[object] = [employee_id]
        if start_date is not None:
            clauses.append("attendance_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("attendance_date <= %s")
            params.append(end_date)
        params.extend([int(limit), int(offset)])
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY attendance_date DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
