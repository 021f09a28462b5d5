from __future__ import annotations

import pytest

from hr_timekeeping.common.validators import parse_limit, require_fields, require_non_empty
from hr_timekeeping.core.exceptions import MissingField, ValidationError


def test_parse_limit_defaults_and_caps():
    assert parse_limit(None, default=50, maximum=100) == 50
    assert parse_limit("", default=50, maximum=100) == 50
    assert parse_limit("20", default=50, maximum=100) == 20
    assert parse_limit("500", default=50, maximum=100) == 100


@pytest.mark.parametrize("bad", ["abc", "0", "-3"])
def test_parse_limit_rejects(bad):
    with pytest.raises(ValidationError):
        parse_limit(bad, default=50, maximum=100)


def test_require_fields_names_all_missing():
    with pytest.raises(MissingField) as exc:
        require_fields({"employeeId": "E1", "deviceId": ""}, ["employeeId", "timestampType", "deviceId"])
    assert exc.value.message == "Missing required fields: timestampType, deviceId"


def test_require_non_empty_strips():
    assert require_non_empty("  Sprint ", "reason") == "Sprint"
    with pytest.raises(MissingField):
        require_non_empty("   ", "reason")
