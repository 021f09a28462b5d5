from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import TimestampEvent


class LedgerRepository(Protocol):
    """Storage port for the per-employee timestamp ledger.

    Every list method returns events in ascending timestamp order.
    """

    def get_latest(self, employee_id: str) -> Optional[TimestampEvent]:
        """Most recent event (descending read, limit 1)."""
        raise NotImplementedError

    def append(self, event: TimestampEvent) -> bool:
        """Conditional write; False when (employee, timestamp) or (employee, sequence) already exists."""
        raise NotImplementedError

    def list_between(self, employee_id: str, *, start: datetime, end: datetime) -> Sequence[TimestampEvent]:
        """Events with ``start <= timestamp < end``."""
        raise NotImplementedError

    def list_for_date(self, employee_id: str, log_date: date) -> Sequence[TimestampEvent]:
        raise NotImplementedError

    def list_all(self, employee_id: str) -> Sequence[TimestampEvent]:
        raise NotImplementedError

    def list_page(
        self,
        employee_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        after: Optional[datetime] = None,
        limit: int,
    ) -> Sequence[TimestampEvent]:
        """Up to ``limit`` events with ``timestamp > after`` inside the optional bounds."""
        raise NotImplementedError
