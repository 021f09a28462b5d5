from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_identity, require_roles
from ..core.enums import ADMIN_ROLES
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_only = require_roles(container.decoder, ADMIN_ROLES)

    @app.route("/time-management/timestamps/<employee_id>/validate", methods=["GET"], endpoint="validate_timestamps")
    @admin_only
    def validate_timestamps(employee_id: str):
        """Integrity findings are reported with 200, whatever the verdict."""
        report = container.chain_auditor.validate(employee_id, validated_by=current_identity().employee_id)
        return jsonify(report.to_dict())
