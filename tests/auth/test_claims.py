from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from hr_timekeeping.auth.claims import ClaimsDecoder, identity_from_claims
from hr_timekeeping.core.enums import Role
from hr_timekeeping.core.exceptions import AuthenticationError

SECRET = "claims-secret-0123456789abcdef01234567"


@pytest.fixture
def decoder():
    return ClaimsDecoder(SECRET)


def test_issued_token_decodes(decoder):
    token = decoder.issue(employee_id="E1", role=Role.EMPLOYEE, can_change_work_category=True)
    identity = decoder.from_header(f"Bearer {token}")

    assert identity.employee_id == "E1"
    assert identity.role == Role.EMPLOYEE
    assert identity.can_change_work_category is True
    assert identity.is_admin is False


@pytest.mark.parametrize(
    "claims,expected",
    [
        ({"custom:empId": "E9", "sub": "abc", "custom:role": "employee"}, "E9"),
        ({"sub": "abc", "custom:role": "employee"}, "abc"),
        ({"cognito:username": "jdoe", "custom:role": "employee"}, "jdoe"),
        ({"email": "jdoe@example.com", "custom:role": "employee"}, "jdoe@example.com"),
    ],
)
def test_employee_id_fallbacks(claims, expected):
    assert identity_from_claims(claims).employee_id == expected


def test_role_is_case_insensitive():
    identity = identity_from_claims({"sub": "E2", "custom:role": "HR_Admin"})
    assert identity.role == Role.HR_ADMIN
    assert identity.is_admin


@pytest.mark.parametrize("claims", [{"sub": "E1", "custom:role": "owner"}, {"sub": "E1"}, {"custom:role": "employee"}])
def test_unusable_claims(claims):
    with pytest.raises(AuthenticationError):
        identity_from_claims(claims)


def test_expired_token(decoder):
    token = decoder.issue(employee_id="E1", role=Role.EMPLOYEE, ttl=timedelta(seconds=-10))
    with pytest.raises(AuthenticationError) as exc:
        decoder.decode(token)
    assert exc.value.message == "Token expired."


def test_wrong_secret(decoder):
    token = jwt.encode({"sub": "E1", "custom:role": "employee"}, "another-secret-key-0123456789abcdef0123", algorithm="HS256")
    with pytest.raises(AuthenticationError):
        decoder.decode(token)


@pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer "])
def test_malformed_header(decoder, header):
    with pytest.raises(AuthenticationError):
        decoder.from_header(header)
