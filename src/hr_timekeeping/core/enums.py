from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried in the caller's identity claims."""

    EMPLOYEE = "employee"
    HR_ADMIN = "hr_admin"
    MANAGER_ADMIN = "manager_admin"


ADMIN_ROLES = (Role.HR_ADMIN, Role.MANAGER_ADMIN)
ALL_ROLES = (Role.EMPLOYEE, Role.HR_ADMIN, Role.MANAGER_ADMIN)


class TimestampType(str, Enum):
    CLOCK_IN = "CLOCK_IN"
    CLOCK_OUT = "CLOCK_OUT"
    BREAK_START = "BREAK_START"
    BREAK_END = "BREAK_END"
    WBS_CHANGE = "WBS_CHANGE"


class ClockState(str, Enum):
    CLOCKED_OUT = "CLOCKED_OUT"
    CLOCKED_IN = "CLOCKED_IN"
    ON_BREAK = "ON_BREAK"


class LeaveStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ValidationStatus(str, Enum):
    VALID = "VALID"
    INVALID = "INVALID"


class IntegrityErrorClass(str, Enum):
    """Error classes reported by the chain auditor."""

    SEQUENCE = "sequence"
    CHRONOLOGICAL = "chronological"
    HASH = "hash"
    STATE = "state"
    BREAKS = "breaks"


class ErrorKind(str, Enum):
    AUTHENTICATION = "AUTHENTICATION"
    AUTHORIZATION = "AUTHORIZATION"
    VALIDATION = "VALIDATION"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"


class ErrorCode(str, Enum):
    # authentication / authorization
    UNAUTHENTICATED = "Unauthenticated"
    FORBIDDEN = "Forbidden"

    # generic input
    VALIDATION_FAILED = "ValidationFailed"
    MISSING_FIELD = "MissingField"
    INVALID_DATE_RANGE = "InvalidDateRange"

    # ledger
    UNKNOWN_TIMESTAMP_TYPE = "UnknownTimestampType"
    INVALID_TRANSITION = "InvalidTransition"
    FIRST_EVENT_MUST_BE_CLOCK_IN = "FirstEventMustBeClockIn"
    EXCESSIVE_GAP = "ExcessiveGap"
    NO_ACTIVE_CATEGORY_FOR_DEPARTMENT = "NoActiveCategoryForDepartment"
    UNASSIGNED_CATEGORY = "UnassignedCategory"
    MISSING_CHANGE_REASON = "MissingChangeReason"
    MISSING_DEPARTMENT = "MissingDepartment"
    DUPLICATE_TIMESTAMP = "DuplicateTimestamp"

    # attendance
    INCOMPLETE_DAY = "IncompleteDay"
    MISSING_CLOCK_BOUNDARY = "MissingClockBoundary"
    EXCESSIVE_WORK_DURATION = "ExcessiveWorkDuration"
    EXCESSIVE_BREAK_DURATION = "ExcessiveBreakDuration"
    LEAVE_CONFLICT = "LeaveConflict"
    ATTENDANCE_ALREADY_EXISTS = "AttendanceAlreadyExists"

    # timesheet
    NO_LOGS_IN_RANGE = "NoLogsInRange"

    # lookups
    EMPLOYEE_NOT_FOUND = "EmployeeNotFound"
    EMPLOYEE_INACTIVE = "EmployeeInactive"
