from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import to_iso

CSV_HEADER = ("date", "wbsCode", "startTime", "endTime", "totalHours")


@dataclass(frozen=True)
class WorkSegment:
    """Continuous working time charged to one work category."""

    work_category_code: Optional[str]
    start_time: datetime
    end_time: datetime
    total_hours: float

    def to_dict(self) -> dict:
        return {
            "wbsCode": self.work_category_code,
            "startTime": to_iso(self.start_time),
            "endTime": to_iso(self.end_time),
            "totalHours": self.total_hours,
        }


@dataclass
class DayBreakdown:
    allocations: list[WorkSegment] = field(default_factory=list)
    total_hours: float = 0.0
    break_hours: float = 0.0
    regular_hours: float = 0.0
    overtime_hours: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalHours": self.total_hours,
            "breakHours": self.break_hours,
            "dailyRegularHours": self.regular_hours,
            "dailyOvertimeHours": self.overtime_hours,
            "allocations": [a.to_dict() for a in self.allocations],
        }


@dataclass(frozen=True)
class WeeklySummary:
    total_hours: float
    regular_hours: float
    overtime_hours: float

    def to_dict(self) -> dict:
        return {
            "totalHours": self.total_hours,
            "regularHours": self.regular_hours,
            "overtimeHours": self.overtime_hours,
        }


@dataclass(frozen=True)
class TimesheetReport:
    employee_id: str
    start_date: date
    end_date: date
    daily_breakdown: dict[date, DayBreakdown]
    weekly_summary: WeeklySummary

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "dateRange": {"startDate": self.start_date.isoformat(), "endDate": self.end_date.isoformat()},
            "weeklySummary": self.weekly_summary.to_dict(),
            "dailyBreakdown": {d.isoformat(): day.to_dict() for d, day in sorted(self.daily_breakdown.items())},
        }

    def to_csv(self) -> str:
        """One row per allocation segment."""
        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for d, day in sorted(self.daily_breakdown.items()):
            for seg in day.allocations:
                writer.writerow(
                    [
                        d.isoformat(),
                        seg.work_category_code or "",
                        to_iso(seg.start_time),
                        to_iso(seg.end_time),
                        f"{seg.total_hours:.2f}",
                    ]
                )
        return out.getvalue()

    @property
    def csv_filename(self) -> str:
        return (
            f"timesheet-allocations-{self.employee_id}-"
            f"{self.start_date.isoformat()}-to-{self.end_date.isoformat()}.csv"
        )
