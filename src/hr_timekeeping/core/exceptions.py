"""Domain error taxonomy.

Every error carries a stable ``kind`` (how the caller should react) and a stable
``code`` (what went wrong). Callers dispatch on the class or on ``code``, never on
the message text.
"""

from __future__ import annotations

from typing import Optional

from .enums import ErrorCode, ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: ErrorKind = ErrorKind.VALIDATION
    code: ErrorCode = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str, *, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        return {"error": self.code.value, "kind": self.kind.value, "message": self.message}


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = ErrorKind.VALIDATION
    code = ErrorCode.VALIDATION_FAILED


class AuthenticationError(DomainError):
    """Raised when the caller's identity cannot be established."""

    kind = ErrorKind.AUTHENTICATION
    code = ErrorCode.UNAUTHENTICATED


class AuthorizationError(DomainError):
    """Raised when a caller lacks the role or ownership for an action."""

    kind = ErrorKind.AUTHORIZATION
    code = ErrorCode.FORBIDDEN


class ConflictError(DomainError):
    """Raised when a conditional write loses against an existing item."""

    kind = ErrorKind.CONFLICT
    code = ErrorCode.DUPLICATE_TIMESTAMP


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND
    code = ErrorCode.EMPLOYEE_NOT_FOUND


# --- validation ---------------------------------------------------------------


class MissingField(ValidationError):
    code = ErrorCode.MISSING_FIELD


class InvalidDateRange(ValidationError):
    code = ErrorCode.INVALID_DATE_RANGE


class UnknownTimestampType(ValidationError):
    code = ErrorCode.UNKNOWN_TIMESTAMP_TYPE


class InvalidTransition(ValidationError):
    code = ErrorCode.INVALID_TRANSITION


class FirstEventMustBeClockIn(ValidationError):
    code = ErrorCode.FIRST_EVENT_MUST_BE_CLOCK_IN


class ExcessiveGap(ValidationError):
    code = ErrorCode.EXCESSIVE_GAP


class NoActiveCategoryForDepartment(ValidationError):
    code = ErrorCode.NO_ACTIVE_CATEGORY_FOR_DEPARTMENT


class UnassignedCategory(ValidationError):
    code = ErrorCode.UNASSIGNED_CATEGORY


class MissingChangeReason(ValidationError):
    code = ErrorCode.MISSING_CHANGE_REASON


class MissingDepartment(ValidationError):
    code = ErrorCode.MISSING_DEPARTMENT


class EmployeeInactive(ValidationError):
    code = ErrorCode.EMPLOYEE_INACTIVE


class IncompleteDay(ValidationError):
    code = ErrorCode.INCOMPLETE_DAY


class MissingClockBoundary(ValidationError):
    code = ErrorCode.MISSING_CLOCK_BOUNDARY


class ExcessiveWorkDuration(ValidationError):
    code = ErrorCode.EXCESSIVE_WORK_DURATION


class ExcessiveBreakDuration(ValidationError):
    code = ErrorCode.EXCESSIVE_BREAK_DURATION


class LeaveConflict(ValidationError):
    code = ErrorCode.LEAVE_CONFLICT


# --- conflict -----------------------------------------------------------------


class DuplicateTimestamp(ConflictError):
    code = ErrorCode.DUPLICATE_TIMESTAMP


class AttendanceAlreadyExists(ConflictError):
    code = ErrorCode.ATTENDANCE_ALREADY_EXISTS


# --- not found ----------------------------------------------------------------


class EmployeeNotFound(NotFoundError):
    code = ErrorCode.EMPLOYEE_NOT_FOUND


class NoLogsInRange(NotFoundError):
    code = ErrorCode.NO_LOGS_IN_RANGE
