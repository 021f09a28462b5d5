from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_fields
from ..core.enums import TimestampType
from ..core.exceptions import MissingChangeReason, UnknownTimestampType
from ..organization.model import Employee
from ..organization.service import WorkCategoryService
from .model import NewTimestampEvent

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("employee_id", "timestamp_type", "device_id", "ip_address")


@dataclass(frozen=True)
class ValidatedEvent:
    timestamp_type: TimestampType
    work_category_code: Optional[str]
    change_reason: Optional[str]


class EventValidator:
    """Business rules checked before the ledger is touched.

    Any failure raises, so nothing is read or written for a rejected request.
    """

    def __init__(self, categories: WorkCategoryService):
        self._categories = categories

    @staticmethod
    def parse_type(value: str) -> TimestampType:
        try:
            return TimestampType(str(value).strip().upper())
        except ValueError:
            raise UnknownTimestampType(f"Unknown timestampType '{value}'.")

    def validate(self, request: NewTimestampEvent, employee: Employee) -> ValidatedEvent:
        require_fields(
            {
                "employee_id": request.employee_id,
                "timestamp_type": request.timestamp_type,
                "device_id": request.device_id,
                "ip_address": request.ip_address,
            },
            REQUIRED_FIELDS,
        )
        timestamp_type = self.parse_type(request.timestamp_type)

        reason = (request.change_reason or "").strip() or None
        if timestamp_type == TimestampType.WBS_CHANGE and not reason:
            raise MissingChangeReason("wbsChangeReason is required for WBS_CHANGE timestamp type.")

        code = (request.work_category_code or "").strip() or None
        if code:
            self._categories.validate_for_employee(code, employee)
            logger.info("WBS code '%s' validated for employee '%s'", code, employee.employee_id)

        return ValidatedEvent(
            timestamp_type=timestamp_type,
            work_category_code=code,
            change_reason=reason if timestamp_type == TimestampType.WBS_CHANGE else None,
        )
