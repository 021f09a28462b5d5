from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_identity, ensure_subject_access, require_roles
from ..common.datetime_utils import parse_iso_date
from ..core.enums import ALL_ROLES
from ..core.exceptions import MissingField, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    any_role = require_roles(container.decoder, ALL_ROLES)

    @app.route("/time-management/reports/timesheet/<employee_id>", methods=["GET"], endpoint="timesheet_report")
    @any_role
    def timesheet_report(employee_id: str):
        ensure_subject_access(current_identity(), employee_id)

        start_s = request.args.get("startDate")
        end_s = request.args.get("endDate")
        if not start_s or not end_s:
            raise MissingField("startDate and endDate are required query parameters.")

        fmt = (request.args.get("format") or "json").lower()
        if fmt not in {"json", "csv"}:
            raise ValidationError(f"Unsupported format '{fmt}'")

        report = container.timesheet_service.generate(employee_id, parse_iso_date(start_s), parse_iso_date(end_s))

        if fmt == "csv":
            return app.response_class(
                report.to_csv(),
                mimetype="text/csv",
                headers={"Content-Disposition": f'attachment; filename="{report.csv_filename}"'},
            )
        return jsonify(report.to_dict())
