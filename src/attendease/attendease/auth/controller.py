from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..container import Container
from .guards import build_guards, current_session


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service
    login_required, _ = build_guards(auth)

    def _body() -> dict:
        return request.get_json(silent=True) or {}

    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def login():
        data = _body()
        result = auth.login_with_password(data.get("email", ""), data.get("password", ""))
        return jsonify(result.to_dict())

    @app.route("/api/send-otp", methods=["POST"], endpoint="api_send_otp")
    def send_otp():
        email = _body().get("email", "")
        auth.request_login_otp(email)
        return jsonify({"message": "OTP sent successfully", "email": email})

    @app.route("/api/verify-otp", methods=["POST"], endpoint="api_verify_otp")
    def verify_otp():
        data = _body()
        result = auth.verify_login_otp(data.get("email", ""), data.get("otp", ""))
        return jsonify(result.to_dict())

    @app.route("/api/forgot-password", methods=["POST"], endpoint="api_forgot_password")
    def forgot_password():
        email = _body().get("email", "")
        auth.request_password_reset(email)
        return jsonify({"message": "Password reset OTP sent successfully", "email": email})

    @app.route("/api/reset-password", methods=["POST"], endpoint="api_reset_password")
    def reset_password():
        data = _body()
        auth.reset_password(data.get("email", ""), data.get("otp", ""), data.get("newPassword", ""))
        return jsonify({"message": "Password reset successful. Please login with your new password."})

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    @login_required
    def logout():
        current_session().clear(auth)
        g.pop("client_session", None)
        return jsonify({"message": "Logout successful"})

    @app.route("/api/profile", methods=["GET"], endpoint="api_profile")
    @login_required
    def profile():
        client = current_session()
        if client.is_admin:
            return jsonify({"user": client.public_user()})
        user = container.user_service.get_profile(client.user_id)
        return jsonify({"user": user.public_dict()})

    @app.route("/api/admin/login", methods=["POST"], endpoint="api_admin_login")
    def admin_login():
        data = _body()
        result = auth.admin_login(data.get("email", ""), data.get("password", ""))
        return jsonify(result.to_dict("Admin login successful"))
