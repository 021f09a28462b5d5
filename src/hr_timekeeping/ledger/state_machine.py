from __future__ import annotations

from typing import Mapping, Optional

from ..core.enums import ClockState, TimestampType

T = TimestampType

# Legal next events given the last event type. "No previous event" behaves like CLOCK_OUT.
VALID_TRANSITIONS: Mapping[Optional[TimestampType], frozenset[TimestampType]] = {
    None: frozenset({T.CLOCK_IN}),
    T.CLOCK_OUT: frozenset({T.CLOCK_IN}),
    T.CLOCK_IN: frozenset({T.BREAK_START, T.WBS_CHANGE, T.CLOCK_OUT}),
    T.BREAK_START: frozenset({T.BREAK_END, T.WBS_CHANGE}),
    T.BREAK_END: frozenset({T.BREAK_START, T.WBS_CHANGE, T.CLOCK_OUT}),
    T.WBS_CHANGE: frozenset({T.BREAK_START, T.WBS_CHANGE, T.CLOCK_OUT}),
}


def is_legal_transition(last: Optional[TimestampType], attempted: TimestampType) -> bool:
    return attempted in VALID_TRANSITIONS.get(last, frozenset())


def next_state(state: ClockState, event_type: TimestampType) -> ClockState:
    """Clock state after ``event_type``; WBS_CHANGE keeps the current state."""
    if event_type == T.CLOCK_IN:
        return ClockState.CLOCKED_IN
    if event_type == T.CLOCK_OUT:
        return ClockState.CLOCKED_OUT
    if event_type == T.BREAK_START:
        return ClockState.ON_BREAK
    if event_type == T.BREAK_END:
        return ClockState.CLOCKED_IN
    return state
