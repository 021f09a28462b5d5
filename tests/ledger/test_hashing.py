from __future__ import annotations

import hashlib
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from hr_timekeeping.core.constants import GENESIS_HASH
from hr_timekeeping.core.enums import ClockState, TimestampType
from hr_timekeeping.ledger.hashing import canonical_payload, digest_event, expected_link
from hr_timekeeping.ledger.model import TimestampEvent
from hr_timekeeping.ledger.state_machine import is_legal_transition, next_state

T = TimestampType


def _event(**overrides):
    base = TimestampEvent(
        employee_id="E1",
        timestamp=datetime(2025, 3, 3, 8, 0, 0, 123000, tzinfo=timezone.utc),
        timestamp_type=T.CLOCK_IN,
        sequence_number=1,
        previous_timestamp=None,
        hash_chain=GENESIS_HASH,
        work_category_code="ENG-OPS",
    )
    return replace(base, **overrides)


def test_payload_is_iso_type_sequence_code():
    assert canonical_payload(_event()) == "2025-03-03T08:00:00.123ZCLOCK_IN1ENG-OPS"


def test_digest_is_sha256_hex_of_payload():
    expected = hashlib.sha256(b"2025-03-03T08:00:00.123ZCLOCK_IN1ENG-OPS").hexdigest()
    assert digest_event(_event()) == expected


def test_missing_code_hashes_as_empty_string():
    assert canonical_payload(_event(work_category_code=None)) == "2025-03-03T08:00:00.123ZCLOCK_IN1"


@pytest.mark.parametrize(
    "field,value",
    [
        ("timestamp", datetime(2025, 3, 3, 8, 0, 0, 124000, tzinfo=timezone.utc)),
        ("timestamp_type", T.CLOCK_OUT),
        ("sequence_number", 2),
        ("work_category_code", "ENG-PROJ-42"),
    ],
)
def test_digest_changes_with_each_hashed_field(field, value):
    assert digest_event(_event(**{field: value})) != digest_event(_event())


def test_digest_ignores_unhashed_fields():
    assert digest_event(_event(location="cipher", device_id="other", hash_chain="x")) == digest_event(_event())


def test_expected_link():
    assert expected_link(None) == GENESIS_HASH
    assert expected_link(_event()) == digest_event(_event())


def test_transition_table():
    assert is_legal_transition(None, T.CLOCK_IN)
    assert not is_legal_transition(None, T.CLOCK_OUT)
    assert is_legal_transition(T.BREAK_START, T.WBS_CHANGE)
    assert not is_legal_transition(T.BREAK_START, T.CLOCK_OUT)
    assert not is_legal_transition(T.WBS_CHANGE, T.BREAK_END)
    assert is_legal_transition(T.CLOCK_OUT, T.CLOCK_IN)


def test_next_state_keeps_state_on_wbs_change():
    assert next_state(ClockState.CLOCKED_OUT, T.CLOCK_IN) == ClockState.CLOCKED_IN
    assert next_state(ClockState.CLOCKED_IN, T.BREAK_START) == ClockState.ON_BREAK
    assert next_state(ClockState.ON_BREAK, T.WBS_CHANGE) == ClockState.ON_BREAK
    assert next_state(ClockState.ON_BREAK, T.BREAK_END) == ClockState.CLOCKED_IN
    assert next_state(ClockState.CLOCKED_IN, T.CLOCK_OUT) == ClockState.CLOCKED_OUT
