from __future__ import annotations

from datetime import date, timedelta

import pytest

from conftest import at, workday
from hr_timekeeping.core.enums import TimestampType
from hr_timekeeping.core.exceptions import EmployeeNotFound, InvalidDateRange, NoLogsInRange

T = TimestampType
MONDAY = date(2025, 3, 3)


def test_five_nine_hour_days(container, record_day):
    for i in range(5):
        record_day("E1", workday(MONDAY + timedelta(days=i), start=8, hours=9))

    report = container.timesheet_service.generate("E1", MONDAY, MONDAY + timedelta(days=4))

    assert report.weekly_summary.total_hours == 45
    assert report.weekly_summary.regular_hours == 40
    assert report.weekly_summary.overtime_hours == 5
    assert len(report.daily_breakdown) == 5
    monday = report.daily_breakdown[MONDAY]
    assert (monday.total_hours, monday.regular_hours, monday.overtime_hours) == (9.0, 8.0, 1.0)


def test_segments_follow_work_category_changes(container, record_day):
    record_day(
        "E1",
        [
            (T.CLOCK_IN, at(MONDAY, 8)),
            (T.WBS_CHANGE, at(MONDAY, 10)),
            (T.BREAK_START, at(MONDAY, 12)),
            (T.BREAK_END, at(MONDAY, 12, 30)),
            (T.CLOCK_OUT, at(MONDAY, 16)),
        ],
        extra={T.WBS_CHANGE: {"work_category_code": "ENG-PROJ-42", "change_reason": "Sprint"}},
    )

    day = container.timesheet_service.generate("E1", MONDAY, MONDAY).daily_breakdown[MONDAY]

    assert [(s.work_category_code, s.total_hours) for s in day.allocations] == [
        ("ENG-OPS", 2.0),
        ("ENG-PROJ-42", 2.0),
        ("ENG-OPS", 3.5),
    ]
    assert day.total_hours == 7.5
    assert day.break_hours == 0.5


def _change_code(container, code, when):
    container.ledger_service.change_work_category(
        employee_id="E1", new_code=code, reason="Reassigned", device_id="dev-1", ip_address="10.0.0.1", now=when
    )


def test_change_during_break_resumes_work_until_clock_out(container, record_day):
    record_day("E1", [(T.CLOCK_IN, at(MONDAY, 8)), (T.BREAK_START, at(MONDAY, 12))])
    _change_code(container, "ENG-PROJ-42", at(MONDAY, 12, 10))
    record_day("E1", [(T.CLOCK_OUT, at(MONDAY, 16))])

    day = container.timesheet_service.generate("E1", MONDAY, MONDAY).daily_breakdown[MONDAY]

    assert [(s.work_category_code, s.start_time, s.end_time, s.total_hours) for s in day.allocations] == [
        ("ENG-OPS", at(MONDAY, 8), at(MONDAY, 12), 4.0),
        ("ENG-PROJ-42", at(MONDAY, 12, 10), at(MONDAY, 16), 3.833),
    ]
    assert day.total_hours == 7.833
    assert day.break_hours == 0


def test_change_during_break_then_another_change(container, record_day):
    record_day("E1", [(T.CLOCK_IN, at(MONDAY, 8)), (T.BREAK_START, at(MONDAY, 12))])
    _change_code(container, "ENG-PROJ-42", at(MONDAY, 12, 10))
    _change_code(container, "ENG-OPS", at(MONDAY, 14))
    record_day("E1", [(T.CLOCK_OUT, at(MONDAY, 16))])

    report = container.timesheet_service.generate("E1", MONDAY, MONDAY)
    day = report.daily_breakdown[MONDAY]

    assert [(s.work_category_code, s.start_time, s.end_time, s.total_hours) for s in day.allocations] == [
        ("ENG-OPS", at(MONDAY, 8), at(MONDAY, 12), 4.0),
        ("ENG-PROJ-42", at(MONDAY, 12, 10), at(MONDAY, 14), 1.833),
        ("ENG-OPS", at(MONDAY, 14), at(MONDAY, 16), 2.0),
    ]
    assert day.total_hours == 7.833
    assert (day.regular_hours, day.overtime_hours) == (7.833, 0)
    assert report.weekly_summary.total_hours == 7.83


def test_overnight_segment_belongs_to_closing_date(container, record_day):
    tuesday = MONDAY + timedelta(days=1)
    record_day("E1", [(T.CLOCK_IN, at(MONDAY, 22)), (T.CLOCK_OUT, at(tuesday, 2))])

    report = container.timesheet_service.generate("E1", MONDAY, tuesday)

    assert report.daily_breakdown[MONDAY].allocations == []
    assert report.daily_breakdown[MONDAY].total_hours == 0
    assert report.daily_breakdown[tuesday].total_hours == 4.0


def test_end_date_is_inclusive(container, record_day):
    record_day("E1", workday(MONDAY))
    report = container.timesheet_service.generate("E1", MONDAY, MONDAY)
    assert report.weekly_summary.total_hours == 8


def test_csv_has_one_row_per_segment(container, record_day):
    record_day("E1", workday(MONDAY, break_at=(12, 0), break_minutes=30))

    lines = container.timesheet_service.generate("E1", MONDAY, MONDAY).to_csv().splitlines()

    assert lines[0] == "date,wbsCode,startTime,endTime,totalHours"
    assert lines[1] == "2025-03-03,ENG-OPS,2025-03-03T08:00:00.000Z,2025-03-03T12:00:00.000Z,4.00"
    assert lines[2] == "2025-03-03,ENG-OPS,2025-03-03T12:30:00.000Z,2025-03-03T16:00:00.000Z,3.50"
    assert len(lines) == 3


def test_to_dict_shape(container, record_day):
    record_day("E1", workday(MONDAY))
    body = container.timesheet_service.generate("E1", MONDAY, MONDAY).to_dict()

    assert body["dateRange"] == {"startDate": "2025-03-03", "endDate": "2025-03-03"}
    assert body["weeklySummary"] == {"totalHours": 8.0, "regularHours": 8.0, "overtimeHours": 0.0}
    assert body["dailyBreakdown"]["2025-03-03"]["allocations"][0]["wbsCode"] == "ENG-OPS"


def test_no_logs_in_range(container):
    with pytest.raises(NoLogsInRange):
        container.timesheet_service.generate("E1", MONDAY, MONDAY)


def test_invalid_range_and_unknown_employee(container):
    with pytest.raises(InvalidDateRange):
        container.timesheet_service.generate("E1", MONDAY, MONDAY - timedelta(days=1))
    with pytest.raises(EmployeeNotFound):
        container.timesheet_service.generate("NOBODY", MONDAY, MONDAY)
