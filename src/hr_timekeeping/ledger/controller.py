from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_identity, ensure_subject_access, require_roles
from ..common.http import client_ip, json_body
from ..common.datetime_utils import parse_optional_date, to_iso
from ..common.validators import parse_limit, require_fields
from ..core.constants import DEFAULT_HISTORY_LIMIT, MAX_HISTORY_LIMIT
from ..core.enums import ALL_ROLES, Role
from ..core.exceptions import AuthorizationError
from ..container import Container
from .model import NewTimestampEvent


def register(app: Flask, container: Container) -> None:
    employee_only = require_roles(container.decoder, [Role.EMPLOYEE])
    any_role = require_roles(container.decoder, ALL_ROLES)

    @app.route("/time-management/timestamps", methods=["POST"], endpoint="create_timestamp")
    @employee_only
    def create_timestamp():
        body = json_body()
        require_fields(body, ["employeeId", "timestampType", "deviceId", "ipAddress"])

        employee_id = str(body["employeeId"])
        ensure_subject_access(current_identity(), employee_id, admins_allowed=False)

        event = container.ledger_service.append_event(
            NewTimestampEvent(
                employee_id=employee_id,
                timestamp_type=str(body["timestampType"]),
                device_id=body.get("deviceId"),
                ip_address=str(body["ipAddress"]),
                work_category_code=body.get("wbsCode"),
                location=body.get("location"),
                change_reason=body.get("wbsChangeReason"),
            )
        )
        return (
            jsonify(
                {
                    "message": "Timestamp recorded successfully.",
                    "timestamp": to_iso(event.timestamp),
                    "event": event.to_dict(location=body.get("location")),
                }
            ),
            201,
        )

    @app.route("/time-management/timestamps/<employee_id>/sequence", methods=["GET"], endpoint="timestamp_sequence")
    @any_role
    def timestamp_sequence(employee_id: str):
        ensure_subject_access(current_identity(), employee_id)
        return jsonify(container.ledger_service.get_latest_sequence(employee_id).to_dict())

    @app.route("/time-management/timestamps/<employee_id>", methods=["GET"], endpoint="timestamp_history")
    @any_role
    def timestamp_history(employee_id: str):
        ensure_subject_access(current_identity(), employee_id)
        page = container.ledger_service.get_history(
            employee_id,
            start_date=parse_optional_date(request.args.get("startDate")),
            end_date=parse_optional_date(request.args.get("endDate")),
            limit=parse_limit(request.args.get("limit"), default=DEFAULT_HISTORY_LIMIT, maximum=MAX_HISTORY_LIMIT),
            next_token=request.args.get("nextToken") or None,
        )
        return jsonify(page.to_dict())

    @app.route("/time-management/wbs-change", methods=["POST"], endpoint="change_wbs_code")
    @employee_only
    def change_wbs_code():
        identity = current_identity()
        if not identity.can_change_work_category:
            raise AuthorizationError("Forbidden: You do not have permission to change WBS codes.")

        body = json_body()
        require_fields(body, ["employeeId", "newWbsCode", "reason", "deviceId"])
        employee_id = str(body["employeeId"])
        ensure_subject_access(identity, employee_id, admins_allowed=False)

        event = container.ledger_service.change_work_category(
            employee_id=employee_id,
            new_code=str(body["newWbsCode"]),
            reason=str(body["reason"]),
            device_id=str(body["deviceId"]),
            ip_address=client_ip(),
        )
        return (
            jsonify(
                {
                    "message": "WBS code changed successfully.",
                    "newWbsCode": event.work_category_code,
                    "previousWbsCode": event.previous_work_category_code,
                    "timestamp": event.to_dict(),
                }
            ),
            201,
        )
