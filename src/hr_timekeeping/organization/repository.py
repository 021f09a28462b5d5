from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department, Employee, WorkCategory


class EmployeeDirectory(Protocol):
    """Read-only port onto the personnel records.

    Note (DIP): the ledger depends on this interface, never on personnel tables directly.
    """

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError


class WorkCategoryRepository(Protocol):
    def get_by_code(self, code: str) -> Optional[WorkCategory]:
        raise NotImplementedError

    def list_active_for_department(self, department_id: str) -> Sequence[WorkCategory]:
        """Active codes of a department, default (oldest) first."""
        raise NotImplementedError

    def list_all(self, *, department_id: Optional[str] = None) -> Sequence[WorkCategory]:
        raise NotImplementedError

    def list_departments(self) -> Sequence[Department]:
        raise NotImplementedError
