from __future__ import annotations

from typing import Iterable

from ...core.constants import DAILY_REGULAR_HOURS, WEEKLY_REGULAR_HOURS
from ..model import DayBreakdown, WeeklySummary
from .base import OvertimeCalculator


class StandardOvertimeCalculator(OvertimeCalculator):
    """Standard rule: 8h per day, then 40 regular hours per period.

    Weekly overtime is taken from the summed daily regular hours and added to the
    summed daily overtime.
    """

    def __init__(self, *, daily_threshold: float = DAILY_REGULAR_HOURS, weekly_threshold: float = WEEKLY_REGULAR_HOURS):
        self._daily = float(daily_threshold)
        self._weekly = float(weekly_threshold)

    def split_day(self, total_hours: float) -> tuple[float, float]:
        return min(total_hours, self._daily), max(0.0, total_hours - self._daily)

    def summarize(self, days: Iterable[DayBreakdown]) -> WeeklySummary:
        days = list(days)
        total = sum(d.total_hours for d in days)
        regular = sum(d.regular_hours for d in days)
        daily_overtime = sum(d.overtime_hours for d in days)

        weekly_overtime = max(0.0, regular - self._weekly)
        regular -= weekly_overtime

        return WeeklySummary(
            total_hours=round(total, 2),
            regular_hours=round(regular, 2),
            overtime_hours=round(weekly_overtime + daily_overtime, 2),
        )
