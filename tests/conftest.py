from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional

import pytest

from hr_timekeeping.attendance.model import AttendanceRecord
from hr_timekeeping.auth.claims import ClaimsDecoder
from hr_timekeeping.common.crypto import FernetFieldCipher
from hr_timekeeping.container import assemble
from hr_timekeeping.core.enums import LeaveStatus, TimestampType
from hr_timekeeping.leave.model import LeaveRequest
from hr_timekeeping.ledger.hashing import expected_link
from hr_timekeeping.ledger.model import NewTimestampEvent, TimestampEvent
from hr_timekeeping.organization.model import Department, Employee, WorkCategory

UTC = timezone.utc
TEST_JWT_SECRET = "test-jwt-secret-0123456789abcdef0123"


def at(day: date, hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=UTC)


class FakeLedger:
    def __init__(self):
        self.events: dict[str, list[TimestampEvent]] = {}

    def _all(self, employee_id):
        return sorted(self.events.get(employee_id, []), key=lambda e: e.timestamp)

    def get_latest(self, employee_id):
        rows = self._all(employee_id)
        return rows[-1] if rows else None

    def append(self, event):
        rows = self.events.setdefault(event.employee_id, [])
        if any(e.timestamp == event.timestamp or e.sequence_number == event.sequence_number for e in rows):
            return False
        rows.append(event)
        return True

    def put(self, event):
        """Write without any guard, to build corrupted chains."""
        self.events.setdefault(event.employee_id, []).append(event)

    def list_between(self, employee_id, *, start, end):
        return [e for e in self._all(employee_id) if start <= e.timestamp < end]

    def list_for_date(self, employee_id, log_date):
        return [e for e in self._all(employee_id) if e.log_date == log_date]

    def list_all(self, employee_id):
        return self._all(employee_id)

    def list_page(self, employee_id, *, start=None, end=None, after=None, limit):
        rows = [
            e
            for e in self._all(employee_id)
            if (start is None or e.timestamp >= start)
            and (end is None or e.timestamp < end)
            and (after is None or e.timestamp > after)
        ]
        return rows[:limit]


class FakeEmployees:
    def __init__(self, employees):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id):
        return self._by_id.get(employee_id)


class FakeCategories:
    def __init__(self, categories, departments):
        self._categories = list(categories)
        self._departments = list(departments)

    def get_by_code(self, code):
        return next((c for c in self._categories if c.code == code), None)

    def list_active_for_department(self, department_id):
        return [c for c in self._categories if c.department_id == department_id and c.is_active]

    def list_all(self, *, department_id=None):
        return [c for c in self._categories if department_id is None or c.department_id == department_id]

    def list_departments(self):
        return list(self._departments)


class FakeLeaves:
    def __init__(self, leaves=()):
        self.leaves = list(leaves)

    def list_approved_for_employee(self, employee_id):
        return [l for l in self.leaves if l.employee_id == employee_id and l.status == LeaveStatus.APPROVED]


class FakeAttendanceRepo:
    def __init__(self):
        self.records: dict[tuple[str, date], AttendanceRecord] = {}

    def exists_for_date(self, employee_id, attendance_date):
        return (employee_id, attendance_date) in self.records

    def insert(self, record):
        key = (record.employee_id, record.attendance_date)
        if key in self.records:
            return False
        self.records[key] = record
        return True

    def list_for_employee(self, employee_id, *, start_date=None, end_date=None, limit, offset=0):
        rows = [
            r
            for (emp, d), r in self.records.items()
            if emp == employee_id and (start_date is None or d >= start_date) and (end_date is None or d <= end_date)
        ]
        rows.sort(key=lambda r: r.attendance_date, reverse=True)
        return rows[offset : offset + limit]


EMPLOYEES = [
    Employee("E1", "Demo Engineer", "ACTIVE", "D-ENG"),
    Employee("E2", "Demo HR Admin", "ACTIVE", "D-HR"),
    Employee("E3", "Former Employee", "TERMINATED", "D-ENG"),
    Employee("E4", "Floating Contractor", "ACTIVE", None),
    Employee("E5", "New Department Hire", "ACTIVE", "D-NEW"),
]

DEPARTMENTS = [
    Department("D-ENG", "Engineering"),
    Department("D-HR", "Human Resources"),
    Department("D-NEW", "Incubator"),
]

CATEGORIES = [
    WorkCategory("ENG-OPS", "D-ENG", "CC-100", True, created_at=datetime(2024, 1, 1, tzinfo=UTC)),
    WorkCategory("ENG-PROJ-42", "D-ENG", "CC-142", True, created_at=datetime(2024, 6, 1, tzinfo=UTC)),
    WorkCategory("ENG-LEGACY", "D-ENG", "CC-199", False, created_at=datetime(2023, 1, 1, tzinfo=UTC)),
    WorkCategory("HR-GEN", "D-HR", "CC-200", True, created_at=datetime(2024, 1, 1, tzinfo=UTC)),
]


@pytest.fixture
def fixed_now() -> datetime:
    # A Monday
    return datetime(2025, 3, 3, 8, 0, 0, tzinfo=UTC)


@pytest.fixture
def cipher():
    return FernetFieldCipher(FernetFieldCipher.generate_key())


@pytest.fixture
def leaves():
    return FakeLeaves()


@pytest.fixture
def container(cipher, leaves):
    return assemble(
        decoder=ClaimsDecoder(TEST_JWT_SECRET),
        cipher=cipher,
        ledger_repo=FakeLedger(),
        attendance_repo=FakeAttendanceRepo(),
        employees_repo=FakeEmployees(EMPLOYEES),
        categories_repo=FakeCategories(CATEGORIES, DEPARTMENTS),
        leaves_repo=leaves,
    )


@pytest.fixture
def record_day(container):
    """Append a sequence of (type, at) pairs through the ledger service."""

    def _record(employee_id: str, steps, extra=None):
        events = []
        for timestamp_type, when in steps:
            events.append(
                container.ledger_service.append_event(
                    NewTimestampEvent(
                        employee_id=employee_id,
                        timestamp_type=timestamp_type.value,
                        device_id="dev-1",
                        ip_address="10.0.0.1",
                        **(extra or {}).get(timestamp_type, {}),
                    ),
                    now=when,
                )
            )
        return events

    return _record


def workday(day: date, *, start: int = 8, hours: float = 8, break_at: Optional[tuple[int, int]] = None, break_minutes: int = 0):
    """(type, at) steps for one day: clock in, optional break, clock out."""
    clock_in = at(day, start)
    steps = [(TimestampType.CLOCK_IN, clock_in)]
    if break_at:
        b = at(day, *break_at)
        steps += [(TimestampType.BREAK_START, b), (TimestampType.BREAK_END, b + timedelta(minutes=break_minutes))]
    steps.append((TimestampType.CLOCK_OUT, clock_in + timedelta(hours=hours)))
    return steps


def chain(employee_id: str, steps, *, code: str = "ENG-OPS") -> list[TimestampEvent]:
    """Well-formed events built directly, bypassing the service."""
    out: list[TimestampEvent] = []
    for i, (timestamp_type, when) in enumerate(steps):
        previous = out[-1] if out else None
        out.append(
            TimestampEvent(
                employee_id=employee_id,
                timestamp=when,
                timestamp_type=timestamp_type,
                sequence_number=i + 1,
                previous_timestamp=previous.timestamp if previous else None,
                hash_chain=expected_link(previous),
                work_category_code=code,
            )
        )
    return out


def approved_leave(employee_id: str, start: date, end: date) -> LeaveRequest:
    return LeaveRequest("L1", employee_id, "Annual", start, end, LeaveStatus.APPROVED)
