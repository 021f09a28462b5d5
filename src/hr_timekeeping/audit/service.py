from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import GENESIS_HASH, MAX_DAILY_BREAK_MINUTES
from ..core.enums import ClockState, IntegrityErrorClass, TimestampType
from ..ledger.hashing import digest_event
from ..ledger.model import TimestampEvent
from ..ledger.repository import LedgerRepository
from ..ledger.state_machine import is_legal_transition, next_state
from ..organization.repository import EmployeeDirectory
from ..organization.service import require_employee
from .model import BreakFinding, EventCheck, FinalStateFinding, IntegrityReport

logger = logging.getLogger(__name__)

E = IntegrityErrorClass


def _break_minutes_by_date(events: Sequence[TimestampEvent]) -> dict[date, float]:
    # Breaks are counted on the date their BREAK_END falls on.
    totals: dict[date, float] = defaultdict(float)
    started: Optional[datetime] = None
    for e in events:
        if e.timestamp_type == TimestampType.BREAK_START:
            started = e.timestamp
        elif e.timestamp_type == TimestampType.BREAK_END and started is not None:
            totals[e.log_date] += (e.timestamp - started).total_seconds() / 60
            started = None
    return totals


class ChainAuditor:
    """Replays a full ledger and reports every integrity finding.

    Findings are data, never exceptions: a broken chain still yields a report.
    """

    def __init__(self, ledger: LedgerRepository, employees: EmployeeDirectory):
        self._ledger = ledger
        self._employees = employees

    def audit_events(self, employee_id: str, events: Sequence[TimestampEvent]) -> IntegrityReport:
        report = IntegrityReport(employee_id=employee_id, total_logs=len(events))
        if not events:
            report.message = "No logs to validate."
            return report

        state = ClockState.CLOCKED_OUT
        previous: Optional[TimestampEvent] = None

        for i, current in enumerate(events):
            check = EventCheck(current.timestamp, current.sequence_number, current.timestamp_type)

            if current.sequence_number != i + 1:
                check.fail(E.SEQUENCE, f"Expected sequence {i + 1}.")

            if previous is not None and current.timestamp <= previous.timestamp:
                check.fail(E.CHRONOLOGICAL, "Not chronological.")

            if previous is not None:
                if current.hash_chain != digest_event(previous):
                    check.fail(E.HASH, "Hash mismatch.")
            elif current.hash_chain != GENESIS_HASH:
                check.fail(E.HASH, "First hash should be GENESIS.")

            last_type = previous.timestamp_type if previous else None
            if not is_legal_transition(last_type, current.timestamp_type):
                check.fail(
                    E.STATE,
                    f"Cannot {current.timestamp_type.value} after {last_type.value if last_type else 'no prior event'}.",
                )
            state = next_state(state, current.timestamp_type)

            for error_class in E:
                if error_class in check.classes:
                    report.details[error_class].append(check)
            report.results.append(check)
            previous = current

        if state != ClockState.CLOCKED_OUT:
            report.details[E.STATE].append(FinalStateFinding("Final State Error: Employee is still clocked in."))
        if state == ClockState.ON_BREAK:
            report.details[E.STATE].append(FinalStateFinding("Final State Error: Employee is still on break."))

        for day, minutes in sorted(_break_minutes_by_date(events).items()):
            if minutes > MAX_DAILY_BREAK_MINUTES:
                report.details[E.BREAKS].append(BreakFinding(day, minutes))

        return report

    def validate(
        self,
        employee_id: str,
        *,
        validated_by: Optional[str] = None,
        now: datetime | None = None,
    ) -> IntegrityReport:
        require_employee(self._employees, employee_id)

        events = self._ledger.list_all(employee_id)
        logger.info("Validating %d logs for employee '%s'", len(events), employee_id)

        report = self.audit_events(employee_id, events)
        report.validated_at = now or now_utc()
        report.validated_by = validated_by

        if report.total_logs:
            logger.info(
                "Ledger of employee '%s' is %s (%d findings)",
                employee_id,
                report.status.value,
                sum(report.count(c) for c in E),
            )
        return report
