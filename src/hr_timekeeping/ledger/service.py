from __future__ import annotations

import base64
import binascii
import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.crypto import FieldCipher, decrypt_or_marker, encrypt_optional
from ..common.datetime_utils import day_bounds, now_utc, parse_iso_instant, start_of_day, to_iso
from ..core.constants import DEFAULT_HISTORY_LIMIT, MAX_EVENT_GAP
from ..core.enums import TimestampType
from ..core.exceptions import (
    DuplicateTimestamp,
    EmployeeInactive,
    ExcessiveGap,
    FirstEventMustBeClockIn,
    InvalidDateRange,
    InvalidTransition,
    MissingField,
    ValidationError,
)
from ..organization.repository import EmployeeDirectory
from ..organization.service import WorkCategoryService, require_employee
from .hashing import expected_link
from .model import HistoryPage, LatestSequence, NewTimestampEvent, TimestampEvent
from .repository import LedgerRepository
from .state_machine import is_legal_transition
from .validator import EventValidator

logger = logging.getLogger(__name__)

# Types that start work without an explicit code fall back to the department default.
_AUTO_RESOLVED_TYPES = (TimestampType.CLOCK_IN, TimestampType.BREAK_END)


def encode_next_token(last: TimestampEvent) -> str:
    return base64.urlsafe_b64encode(to_iso(last.timestamp).encode("ascii")).decode("ascii")


def decode_next_token(token: str) -> datetime:
    try:
        raw = base64.urlsafe_b64decode(token.encode("ascii")).decode("ascii")
    except (binascii.Error, UnicodeError, ValueError):
        raise ValidationError("Invalid nextToken.")
    return parse_iso_instant(raw)


class LedgerService:
    """Append protocol and reads of the hash-chained timestamp ledger."""

    def __init__(
        self,
        ledger: LedgerRepository,
        employees: EmployeeDirectory,
        categories: WorkCategoryService,
        cipher: FieldCipher,
        *,
        validator: Optional[EventValidator] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._ledger = ledger
        self._employees = employees
        self._categories = categories
        self._cipher = cipher
        self._validator = validator or EventValidator(categories)
        self._clock = clock

    def append_event(self, request: NewTimestampEvent, *, now: Optional[datetime] = None) -> TimestampEvent:
        if not request.employee_id:
            raise MissingField("Missing required fields: employee_id")

        employee = require_employee(self._employees, request.employee_id)
        if not employee.is_active:
            raise EmployeeInactive(f"Employee '{employee.employee_id}' is not active.")

        validated = self._validator.validate(request, employee)
        timestamp_type = validated.timestamp_type
        now = now or self._clock()

        latest = self._ledger.get_latest(employee.employee_id)

        if latest is None:
            if timestamp_type != TimestampType.CLOCK_IN:
                raise FirstEventMustBeClockIn(
                    "Invalid first action: The first timestamp for an employee must be a CLOCK_IN."
                )
            logger.info("No previous log entry found for employee '%s'", employee.employee_id)
        else:
            if not is_legal_transition(latest.timestamp_type, timestamp_type):
                logger.warning(
                    "Transition from '%s' to '%s' rejected for employee '%s'",
                    latest.timestamp_type.value,
                    timestamp_type.value,
                    employee.employee_id,
                )
                raise InvalidTransition(
                    f"Invalid action: Cannot perform '{timestamp_type.value}' after '{latest.timestamp_type.value}'."
                )
            if now - latest.timestamp > MAX_EVENT_GAP:
                raise ExcessiveGap("Gap between timestamps cannot exceed 24 hours.")
            if now <= latest.timestamp:
                raise DuplicateTimestamp(
                    f"A timestamp at or after {to_iso(now)} already exists; refetch the latest sequence and retry."
                )

        code = validated.work_category_code
        if not code:
            if timestamp_type in _AUTO_RESOLVED_TYPES:
                code = self._categories.resolve_default_code(employee)
            elif latest is not None:
                code = latest.work_category_code

        event = TimestampEvent(
            employee_id=employee.employee_id,
            timestamp=now,
            timestamp_type=timestamp_type,
            sequence_number=latest.sequence_number + 1 if latest else 1,
            previous_timestamp=latest.timestamp if latest else None,
            hash_chain=expected_link(latest),
            work_category_code=code,
            location=encrypt_optional(self._cipher, request.location),
            device_id=request.device_id,
            ip_address=request.ip_address,
            previous_work_category_code=(
                latest.work_category_code if latest and timestamp_type == TimestampType.WBS_CHANGE else None
            ),
            change_reason=validated.change_reason,
            created_at=now,
        )

        if not self._ledger.append(event):
            raise DuplicateTimestamp(
                f"Sequence {event.sequence_number} was taken by a concurrent write; refetch the latest sequence and retry."
            )

        logger.info(
            "Recorded %s #%d for employee '%s'",
            event.timestamp_type.value,
            event.sequence_number,
            event.employee_id,
        )
        return event

    def change_work_category(
        self,
        *,
        employee_id: str,
        new_code: str,
        reason: str,
        device_id: str,
        ip_address: Optional[str],
        now: Optional[datetime] = None,
    ) -> TimestampEvent:
        """Record a WBS_CHANGE event switching the active work category."""
        if not new_code:
            raise MissingField("Missing required fields: newWbsCode")
        return self.append_event(
            NewTimestampEvent(
                employee_id=employee_id,
                timestamp_type=TimestampType.WBS_CHANGE.value,
                work_category_code=new_code,
                change_reason=reason,
                device_id=device_id,
                ip_address=ip_address,
            ),
            now=now,
        )

    def get_latest_sequence(self, employee_id: str) -> LatestSequence:
        require_employee(self._employees, employee_id)
        latest = self._ledger.get_latest(employee_id)
        if latest is None:
            return LatestSequence(employee_id, 0, None, None, None)
        return LatestSequence(
            employee_id=employee_id,
            sequence_number=latest.sequence_number,
            timestamp=latest.timestamp,
            timestamp_type=latest.timestamp_type,
            hash_chain=latest.hash_chain,
        )

    def get_history(
        self,
        employee_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
        next_token: Optional[str] = None,
    ) -> HistoryPage:
        """One page of the ledger, oldest first, with locations decrypted."""
        require_employee(self._employees, employee_id)
        if start_date and end_date and end_date < start_date:
            raise InvalidDateRange("endDate cannot be before startDate.")

        start = start_of_day(start_date) if start_date else None
        end = day_bounds(end_date)[1] if end_date else None
        after = decode_next_token(next_token) if next_token else None

        # One extra row tells whether another page exists.
        rows = list(self._ledger.list_page(employee_id, start=start, end=end, after=after, limit=limit + 1))
        page, more = rows[:limit], len(rows) > limit

        events = [
            e.to_dict(location=decrypt_or_marker(self._cipher, e.location, context=f"log {to_iso(e.timestamp)}"))
            for e in page
        ]
        logger.info("Retrieved %d timestamp records for employee '%s'", len(events), employee_id)
        return HistoryPage(
            employee_id=employee_id,
            events=events,
            next_token=encode_next_token(page[-1]) if more and page else None,
        )
