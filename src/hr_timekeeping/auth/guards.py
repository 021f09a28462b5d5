from __future__ import annotations

import logging
from functools import wraps
from typing import Iterable

from flask import g, request

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..logging_config import LogContext
from .claims import ClaimsDecoder, Identity

logger = logging.getLogger(__name__)


def current_identity() -> Identity:
    return g.identity


def require_roles(decoder: ClaimsDecoder, roles: Iterable[Role]):
    """Decorator: authenticate the bearer token and check the caller's role."""
    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = decoder.from_header(request.headers.get("Authorization"))
            LogContext.set(employee_id=identity.employee_id)
            if identity.role not in allowed:
                logger.warning("Role '%s' may not call %s", identity.role.value, request.endpoint)
                raise AuthorizationError("Forbidden: You do not have permission to access this resource.")
            g.identity = identity
            return view(*args, **kwargs)

        return wrapper

    return decorator


def ensure_subject_access(identity: Identity, employee_id: str, *, admins_allowed: bool = True) -> None:
    """Employees may only act on their own records; admins on anyone's."""
    if identity.employee_id == employee_id:
        return
    if admins_allowed and identity.is_admin:
        return
    logger.warning("Employee '%s' attempted to access records of '%s'", identity.employee_id, employee_id)
    raise AuthorizationError("Forbidden: You can only access your own records.")
