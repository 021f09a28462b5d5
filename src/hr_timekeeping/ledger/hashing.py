"""Hash-chain digest shared by the ledger (on append) and the auditor (on replay).

The digest covers a stable, ordered concatenation of the event's timestamp
(``YYYY-MM-DDTHH:MM:SS.mmmZ``), type, sequence number and work-category code.
Any change to this function invalidates every stored chain.
"""

from __future__ import annotations

import hashlib
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.constants import GENESIS_HASH
from .model import TimestampEvent


def canonical_payload(event: TimestampEvent) -> str:
    return (
        f"{to_iso(event.timestamp)}"
        f"{event.timestamp_type.value}"
        f"{event.sequence_number}"
        f"{event.work_category_code or ''}"
    )


def digest_event(event: TimestampEvent) -> str:
    """Hex-encoded SHA-256 of the event's stable fields."""
    return hashlib.sha256(canonical_payload(event).encode("utf-8")).hexdigest()


def expected_link(previous: Optional[TimestampEvent]) -> str:
    """The ``hash_chain`` value the next event must carry."""
    return digest_event(previous) if previous is not None else GENESIS_HASH
