from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import IntegrityErrorClass, TimestampType, ValidationStatus


@dataclass
class EventCheck:
    """Findings for one ledger event."""

    timestamp: datetime
    sequence_number: int
    timestamp_type: TimestampType
    errors: list[str] = field(default_factory=list)
    classes: set[IntegrityErrorClass] = field(default_factory=set)

    def fail(self, error_class: IntegrityErrorClass, message: str) -> None:
        self.errors.append(message)
        self.classes.add(error_class)

    def to_dict(self) -> dict:
        return {
            "timestamp": to_iso(self.timestamp),
            "sequenceNumber": self.sequence_number,
            "timestampType": self.timestamp_type.value,
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class FinalStateFinding:
    message: str

    def to_dict(self) -> dict:
        return {"timestamp": "final", "errors": [self.message]}


@dataclass(frozen=True)
class BreakFinding:
    day: date
    total_minutes: float

    @property
    def message(self) -> str:
        return f"Total break duration of {self.total_minutes:.0f} minutes exceeds 4-hour limit."

    def to_dict(self) -> dict:
        return {"date": self.day.isoformat(), "error": self.message}


@dataclass
class IntegrityReport:
    employee_id: str
    total_logs: int
    results: list[EventCheck] = field(default_factory=list)
    details: dict[IntegrityErrorClass, list] = field(
        default_factory=lambda: {c: [] for c in IntegrityErrorClass}
    )
    validated_at: Optional[datetime] = None
    validated_by: Optional[str] = None
    message: Optional[str] = None

    @property
    def status(self) -> ValidationStatus:
        if any(self.details[c] for c in IntegrityErrorClass):
            return ValidationStatus.INVALID
        return ValidationStatus.VALID

    def count(self, error_class: IntegrityErrorClass) -> int:
        return len(self.details[error_class])

    def to_dict(self) -> dict:
        if self.total_logs == 0:
            return {"employeeId": self.employee_id, "validationStatus": self.status.value, "message": self.message}

        return {
            "employeeId": self.employee_id,
            "validationStatus": self.status.value,
            "summary": {
                "totalLogs": self.total_logs,
                "sequenceErrors": self.count(IntegrityErrorClass.SEQUENCE),
                "chronologicalErrors": self.count(IntegrityErrorClass.CHRONOLOGICAL),
                "hashChainErrors": self.count(IntegrityErrorClass.HASH),
                "stateErrors": self.count(IntegrityErrorClass.STATE),
                "breakValidationErrors": self.count(IntegrityErrorClass.BREAKS),
            },
            "errorDetails": {c.value: [f.to_dict() for f in self.details[c]] for c in IntegrityErrorClass},
            "validationResults": [r.to_dict() for r in self.results],
            "validatedAt": to_iso(self.validated_at),
            "validatedBy": self.validated_by,
        }
