from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_identity, require_roles
from ..core.enums import ALL_ROLES
from ..container import Container


def register(app: Flask, container: Container) -> None:
    any_role = require_roles(container.decoder, ALL_ROLES)

    @app.route("/time-management/wbs-codes", methods=["GET"], endpoint="list_wbs_codes")
    @any_role
    def list_wbs_codes():
        """Employees get their own department's active codes; admins may filter by departmentId."""
        identity = current_identity()
        codes = container.work_category_service.list_for_caller(
            role=identity.role,
            employee_id=identity.employee_id,
            department_id=request.args.get("departmentId") or None,
        )
        return jsonify({"wbsCodes": codes})
