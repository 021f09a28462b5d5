from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_identity, ensure_subject_access, require_roles
from ..common.datetime_utils import parse_iso_date, parse_optional_date
from ..common.http import json_body
from ..common.validators import parse_limit, require_fields
from ..core.constants import DEFAULT_ATTENDANCE_LIMIT, MAX_HISTORY_LIMIT
from ..core.enums import ALL_ROLES, Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    employee_only = require_roles(container.decoder, [Role.EMPLOYEE])
    any_role = require_roles(container.decoder, ALL_ROLES)

    @app.route("/time-management/attendance", methods=["POST"], endpoint="create_attendance")
    @employee_only
    def create_attendance():
        body = json_body()
        require_fields(body, ["employeeId", "attendanceDate", "workMode"])

        identity = current_identity()
        employee_id = str(body["employeeId"])
        ensure_subject_access(identity, employee_id, admins_allowed=False)

        attendance_id = container.attendance_service.create_record(
            employee_id=employee_id,
            attendance_date=parse_iso_date(str(body["attendanceDate"])),
            work_mode=str(body["workMode"]),
            notes=body.get("notes"),
            project_code=body.get("projectCode"),
            task_category=body.get("taskCategory"),
            created_by=identity.employee_id,
        )
        return jsonify({"message": "Attendance record created successfully.", "attendanceId": attendance_id}), 201

    @app.route("/time-management/attendance/<employee_id>", methods=["GET"], endpoint="list_attendance")
    @any_role
    def list_attendance(employee_id: str):
        ensure_subject_access(current_identity(), employee_id)

        offset_s = request.args.get("offset") or "0"
        if not offset_s.isdigit():
            raise ValidationError(f"Invalid offset '{offset_s}'")

        records = container.attendance_service.list_records(
            employee_id,
            start_date=parse_optional_date(request.args.get("startDate")),
            end_date=parse_optional_date(request.args.get("endDate")),
            limit=parse_limit(request.args.get("limit"), default=DEFAULT_ATTENDANCE_LIMIT, maximum=MAX_HISTORY_LIMIT),
            offset=int(offset_s),
        )
        return jsonify({"employeeId": employee_id, "attendanceRecords": [r.to_dict() for r in records]})
