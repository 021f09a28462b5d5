from __future__ import annotations

from typing import Protocol, Sequence

from .model import LeaveRequest


class LeaveRepository(Protocol):
    def list_approved_for_employee(self, employee_id: str) -> Sequence[LeaveRequest]:
        raise NotImplementedError
