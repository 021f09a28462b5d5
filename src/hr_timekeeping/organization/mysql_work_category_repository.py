from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime
from .model import Department, WorkCategory
from .repository import WorkCategoryRepository

_COLUMNS = "code, department_id, cost_center, is_active, description, created_by, created_at"


def _to_category(r: dict) -> WorkCategory:
    return WorkCategory(
        code=r["code"],
        department_id=r["department_id"],
        cost_center=r.get("cost_center"),
        is_active=bool(r.get("is_active")),
        description=r.get("description"),
        created_by=r.get("created_by"),
        created_at=from_db_datetime(r.get("created_at")),
    )


class MySQLWorkCategoryRepository(WorkCategoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_code(self, code: str) -> Optional[WorkCategory]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_categories WHERE code=%s", (code,))
            row = fetchone(cur)
            return _to_category(row) if row else None

    def list_active_for_department(self, department_id: str) -> Sequence[WorkCategory]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_categories
                WHERE department_id=%s AND is_active=1
                ORDER BY created_at ASC, code ASC
                """,
                (department_id,),
            )
            return [_to_category(r) for r in fetchall(cur)]

    def list_all(self, *, department_id: Optional[str] = None) -> Sequence[WorkCategory]:
        clauses = []
        params: list[object] = []
        if department_id is not None:
            clauses.append("department_id=%s")
            params.append(department_id)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_categories {where} ORDER BY code", tuple(params))
            return [_to_category(r) for r in fetchall(cur)]

    def list_departments(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT department_id, department_name FROM departments ORDER BY department_id")
            return [
                Department(department_id=r["department_id"], department_name=r["department_name"])
                for r in fetchall(cur)
            ]
