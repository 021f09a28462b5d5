from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Read-only view of an employee, as far as time tracking needs it."""

    employee_id: str
    full_name: str
    status: str
    department_id: Optional[str]

    @property
    def is_active(self) -> bool:
        return self.status == "ACTIVE"


@dataclass(frozen=True)
class Department:
    department_id: str
    department_name: str


@dataclass(frozen=True)
class WorkCategory:
    """Cost-allocation (WBS) code tied to a department.

    ``description`` is stored encrypted.
    """

    code: str
    department_id: str
    cost_center: Optional[str]
    is_active: bool
    description: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
