from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ..model import DayBreakdown, WeeklySummary


class OvertimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for overtime rules)."""

    @abstractmethod
    def split_day(self, total_hours: float) -> tuple[float, float]:
        """Return ``(regular, overtime)`` hours for one day."""
        raise NotImplementedError

    @abstractmethod
    def summarize(self, days: Iterable[DayBreakdown]) -> WeeklySummary:
        raise NotImplementedError
