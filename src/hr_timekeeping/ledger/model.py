from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import TimestampType


@dataclass(frozen=True)
class TimestampEvent:
    """One link of an employee's append-only attendance ledger.

    ``location`` holds ciphertext; it is only decrypted for authorized reads.
    """

    employee_id: str
    timestamp: datetime
    timestamp_type: TimestampType
    sequence_number: int
    previous_timestamp: Optional[datetime]
    hash_chain: str
    work_category_code: Optional[str] = None
    location: Optional[str] = None
    device_id: Optional[str] = None
    ip_address: Optional[str] = None
    previous_work_category_code: Optional[str] = None
    change_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def log_date(self) -> date:
        return self.timestamp.date()

    def to_dict(self, *, location: Optional[str] = None) -> dict:
        out = {
            "employeeId": self.employee_id,
            "timestamp": to_iso(self.timestamp),
            "timestampType": self.timestamp_type.value,
            "sequenceNumber": self.sequence_number,
            "previousTimestamp": to_iso(self.previous_timestamp),
            "hashChain": self.hash_chain,
            "wbsCode": self.work_category_code,
            "location": location,
            "deviceId": self.device_id,
            "ipAddress": self.ip_address,
        }
        if self.timestamp_type == TimestampType.WBS_CHANGE:
            out["previousWbsCode"] = self.previous_work_category_code
            out["wbsChangeReason"] = self.change_reason
        return out


@dataclass(frozen=True)
class NewTimestampEvent:
    """Append request as received from the caller (before validation)."""

    employee_id: str
    timestamp_type: str
    device_id: Optional[str] = None
    ip_address: Optional[str] = None
    work_category_code: Optional[str] = None
    location: Optional[str] = None
    change_reason: Optional[str] = None


@dataclass(frozen=True)
class LatestSequence:
    employee_id: str
    sequence_number: int
    timestamp: Optional[datetime]
    timestamp_type: Optional[TimestampType]
    hash_chain: Optional[str]

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "latestSequenceNumber": self.sequence_number,
            "latestTimestamp": to_iso(self.timestamp),
            "latestTimestampType": self.timestamp_type.value if self.timestamp_type else None,
            "hashChain": self.hash_chain,
        }


@dataclass(frozen=True)
class HistoryPage:
    employee_id: str
    events: list[dict]
    next_token: Optional[str]

    def to_dict(self) -> dict:
        return {"employeeId": self.employee_id, "timestamps": self.events, "nextToken": self.next_token}
