from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from hr_timekeeping.common.datetime_utils import (
    day_bounds,
    ensure_utc,
    now_utc,
    parse_iso_date,
    parse_iso_instant,
    to_iso,
)
from hr_timekeeping.core.exceptions import ValidationError


def test_to_iso_uses_milliseconds_and_z():
    value = datetime(2025, 3, 3, 8, 5, 9, 123456, tzinfo=timezone.utc)
    assert to_iso(value) == "2025-03-03T08:05:09.123Z"
    assert to_iso(None) is None


def test_to_iso_converts_offsets_to_utc():
    value = datetime(2025, 3, 3, 10, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_iso(value) == "2025-03-03T08:00:00.000Z"


def test_naive_values_are_read_as_utc():
    assert ensure_utc(datetime(2025, 3, 3, 8)).tzinfo == timezone.utc


def test_clock_is_truncated_to_milliseconds():
    assert now_utc().microsecond % 1000 == 0


def test_day_bounds_cover_end_date():
    start, end = day_bounds(date(2025, 3, 3), date(2025, 3, 7))
    assert start == datetime(2025, 3, 3, tzinfo=timezone.utc)
    assert end == datetime(2025, 3, 8, tzinfo=timezone.utc)


def test_parse_instant_round_trip():
    assert to_iso(parse_iso_instant("2025-03-03T08:00:00.250Z")) == "2025-03-03T08:00:00.250Z"


@pytest.mark.parametrize("bad", ["", "2025-13-01", "03/03/2025"])
def test_bad_dates(bad):
    with pytest.raises(ValidationError):
        parse_iso_date(bad)
