from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/register", methods=["POST"], endpoint="api_register")
    def register_student():
        data = request.get_json(silent=True) or {}
        user = container.user_service.register(
            student_id=data.get("student_id", ""),
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            branch=data.get("branch", ""),
            semester=data.get("semester"),
            batch=data.get("batch", ""),
        )
        return jsonify({"message": "Registration successful", "user": user.public_dict()}), 201
