from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..core.exceptions import MissingField, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise MissingField(f"{field_name} is required")
    return str(value).strip()


def require_fields(body: Mapping[str, Any], fields: Iterable[str]) -> None:
    missing = [f for f in fields if body.get(f) in (None, "")]
    if missing:
        raise MissingField(f"Missing required fields: {', '.join(missing)}")


def parse_limit(value: Any, *, default: int, maximum: int) -> int:
    if value in (None, ""):
        return default
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid limit '{value}'")
    if limit < 1:
        raise ValidationError("limit must be positive")
    return min(limit, maximum)
