"""Caller identity from bearer tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

import jwt

from ..core.enums import Role
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

EMPLOYEE_ID_CLAIMS = ("custom:empId", "sub", "cognito:username", "email")
ROLE_CLAIM = "custom:role"
WORK_CATEGORY_CHANGE_CLAIM = "custom:wbsChange"


@dataclass(frozen=True)
class Identity:
    employee_id: str
    role: Role
    can_change_work_category: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role != Role.EMPLOYEE


def identity_from_claims(claims: Mapping[str, Any]) -> Identity:
    employee_id = next((str(claims[k]) for k in EMPLOYEE_ID_CLAIMS if claims.get(k)), None)
    if not employee_id:
        raise AuthenticationError("Token carries no employee identifier.")

    try:
        role = Role(str(claims.get(ROLE_CLAIM, "")).strip().lower())
    except ValueError:
        raise AuthenticationError(f"Unknown role '{claims.get(ROLE_CLAIM)}'.")

    return Identity(
        employee_id=employee_id,
        role=role,
        can_change_work_category=str(claims.get(WORK_CATEGORY_CHANGE_CLAIM, "")).lower() == "true",
    )


class ClaimsDecoder:
    """Verifies HS* bearer tokens and turns their claims into an ``Identity``."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def decode(self, token: str) -> Identity:
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired.")
        except jwt.InvalidTokenError as e:
            logger.warning("Rejected bearer token: %s", e)
            raise AuthenticationError("Invalid token.")
        return identity_from_claims(claims)

    def from_header(self, header: Optional[str]) -> Identity:
        scheme, _, token = (header or "").partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise AuthenticationError("Missing bearer token.")
        return self.decode(token.strip())

    def issue(
        self,
        *,
        employee_id: str,
        role: Role,
        can_change_work_category: bool = False,
        ttl: timedelta = timedelta(hours=8),
    ) -> str:
        """Mint a token for local development and tests."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": employee_id,
            "custom:empId": employee_id,
            ROLE_CLAIM: role.value,
            WORK_CATEGORY_CHANGE_CLAIM: "true" if can_change_work_category else "false",
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)
