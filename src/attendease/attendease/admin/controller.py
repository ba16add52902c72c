from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import build_guards, current_session
from ..container import Container


def register(app: Flask, container: Container) -> None:
    _, admin_required = build_guards(container.auth_service)

    @app.route("/api/admin/users", methods=["GET"], endpoint="api_admin_users")
    @admin_required
    def admin_users():
        users = container.admin_service.list_students(current_role=current_session().role)
        return jsonify({"users": users})
