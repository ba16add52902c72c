from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import build_guards, current_session
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = build_guards(container.auth_service)
    timetable = container.timetable_service

    @app.route("/api/timetable/<batch>", methods=["GET"], endpoint="api_timetable")
    @login_required
    def get_timetable(batch: str):
        return jsonify({"timetable": {"batch": batch, "schedule": timetable.week_for_batch(batch)}})

    @app.route("/api/admin/timetable", methods=["PUT"], endpoint="api_admin_timetable")
    @admin_required
    def replace_timetable():
        payload = request.get_json(silent=True)
        if payload is None:
            raise ValidationError("Request body must be a JSON timetable")
        count = timetable.replace_timetable(payload, current_role=current_session().role)
        return jsonify({"message": "Timetable updated", "slots": count})
