from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..auth.guards import build_guards, current_session
from ..common.datetime_utils import parse_iso_date, parse_optional_date
from ..container import Container
from ..core.enums import MarkStatus
from ..core.exceptions import ValidationError


def _requested_status(data: dict) -> str:
    """``status`` wins when given, otherwise ``isPresent`` (JSON boolean, default true)."""
    status = data.get("status")
    if status:
        return str(status).lower()
    is_present = data.get("isPresent", True)
    if not isinstance(is_present, bool):
        raise ValidationError("isPresent must be true or false")
    return MarkStatus.PRESENT.value if is_present else MarkStatus.ABSENT.value


def register(app: Flask, container: Container) -> None:
    login_required, _ = build_guards(container.auth_service)
    attendance = container.attendance_service

    @app.route("/api/attendance", methods=["POST"], endpoint="api_mark_attendance")
    @login_required
    def mark_attendance():
        data = request.get_json(silent=True) or {}
        result = attendance.mark(
            current_session().user_id,
            subject=data.get("subject", ""),
            class_date=data.get("date", ""),
            status=_requested_status(data),
        )
        if result["status"] == MarkStatus.OFF.value:
            return jsonify({"message": "Day off marked successfully", "data": result})
        return jsonify({"message": "Attendance marked successfully", "data": result})

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_history")
    @login_required
    def attendance_history():
        rows = attendance.history(
            current_session().user_id,
            start_date=parse_optional_date(request.args.get("startDate"), "startDate"),
            end_date=parse_optional_date(request.args.get("endDate"), "endDate"),
            subject=request.args.get("subject") or None,
        )
        return jsonify({"attendance": rows})

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="api_attendance_stats")
    @login_required
    def attendance_stats():
        summary = attendance.summary(current_session().user_id)
        return jsonify({"stats": summary.to_dict()})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_attendance_today")
    @login_required
    def attendance_today():
        client = current_session()
        day_s = request.args.get("date")
        on_date = parse_iso_date(day_s) if day_s else date.today()
        board = attendance.today_board(client.user_id, batch=client.user.batch, on_date=on_date)
        return jsonify({"date": on_date.isoformat(), "classes": board})
