from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.constants import SCAN_BATCH_SIZE
from ..core.enums import TimestampType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, is_duplicate_key, to_db_datetime
from .model import TimestampEvent
from .repository import LedgerRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    employee_id, ts, timestamp_type, sequence_number, previous_ts, hash_chain,
    wbs_code, previous_wbs_code, wbs_change_reason, location, device_id, ip_address, created_at
"""


def _to_event(r: dict) -> TimestampEvent:
    return TimestampEvent(
        employee_id=r["employee_id"],
        timestamp=from_db_datetime(r["ts"]),
        timestamp_type=TimestampType(r["timestamp_type"]),
        sequence_number=int(r["sequence_number"]),
        previous_timestamp=from_db_datetime(r.get("previous_ts")),
        hash_chain=r["hash_chain"],
        work_category_code=r.get("wbs_code"),
        location=r.get("location"),
        device_id=r.get("device_id"),
        ip_address=r.get("ip_address"),
        previous_work_category_code=r.get("previous_wbs_code"),
        change_reason=r.get("wbs_change_reason"),
        created_at=from_db_datetime(r.get("created_at")),
    )


class MySQLLedgerRepository(LedgerRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, batch_size: int = SCAN_BATCH_SIZE):
        self._conn_factory = conn_factory
        self._batch_size = int(batch_size)

    def get_latest(self, employee_id: str) -> Optional[TimestampEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM timestamp_logs
                WHERE employee_id=%s
                ORDER BY ts DESC
                LIMIT 1
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            return _to_event(r) if r else None

    def append(self, event: TimestampEvent) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO timestamp_logs(
                        employee_id, ts, log_date, timestamp_type, sequence_number, previous_ts, hash_chain,
                        wbs_code, previous_wbs_code, wbs_change_reason, location, device_id, ip_address, created_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        event.employee_id,
                        to_db_datetime(event.timestamp),
                        event.log_date,
                        event.timestamp_type.value,
                        event.sequence_number,
                        to_db_datetime(event.previous_timestamp),
                        event.hash_chain,
                        event.work_category_code,
                        event.previous_work_category_code,
                        event.change_reason,
                        event.location,
                        event.device_id,
                        event.ip_address,
                        to_db_datetime(event.created_at or event.timestamp),
                    ),
                )
            return True
        except IntegrityError as err:
            if is_duplicate_key(err):
                logger.warning(
                    "Conditional append rejected for employee '%s' at sequence %s",
                    event.employee_id,
                    event.sequence_number,
                )
                return False
            raise

    def list_page(
        self,
        employee_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        after: Optional[datetime] = None,
        limit: int,
    ) -> Sequence[TimestampEvent]:
        clauses = ["employee_id=%s"]
        params: list[object] = [employee_id]

        if start is not None:
            clauses.append("ts >= %s")
            params.append(to_db_datetime(start))
        if end is not None:
            clauses.append("ts < %s")
            params.append(to_db_datetime(end))
        if after is not None:
            clauses.append("ts > %s")
            params.append(to_db_datetime(after))
        params.append(int(limit))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM timestamp_logs
                WHERE {where}
                ORDER BY ts ASC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def _scan(self, employee_id: str, *, start: Optional[datetime] = None, end: Optional[datetime] = None):
        # Keyset pagination; pages are separate reads, so the result may show read skew.
        out: list[TimestampEvent] = []
        after: Optional[datetime] = None
        while True:
            page = self.list_page(employee_id, start=start, end=end, after=after, limit=self._batch_size)
            out.extend(page)
            if len(page) < self._batch_size:
                return out
            after = page[-1].timestamp

    def list_between(self, employee_id: str, *, start: datetime, end: datetime) -> Sequence[TimestampEvent]:
        return self._scan(employee_id, start=start, end=end)

    def list_for_date(self, employee_id: str, log_date: date) -> Sequence[TimestampEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM timestamp_logs
                WHERE log_date=%s AND employee_id=%s
                ORDER BY ts ASC
                """,
                (log_date, employee_id),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def list_all(self, employee_id: str) -> Sequence[TimestampEvent]:
        return self._scan(employee_id)
