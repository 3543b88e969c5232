from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..container import Container
from ..employees.dto import RegisterEmployeeRequest, employee_to_json
from .dto import ForgotPasswordRequest, LoginRequest, ResetPasswordRequest
from .guard import jwt_required

FORGOT_PASSWORD_MESSAGE = "If the email exists, a reset token has been sent"


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        req = RegisterEmployeeRequest.from_json(request.get_json(silent=True))
        employee, token = container.auth_service.register(req)
        return jsonify({"employee": employee_to_json(employee), "accessToken": token}), 201

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        req = LoginRequest.from_json(request.get_json(silent=True))
        employee, token = container.auth_service.login(req.email, req.password)
        return jsonify({"employee": employee_to_json(employee), "accessToken": token}), 200

    @app.route("/auth/forgot-password", methods=["POST"], endpoint="auth_forgot_password")
    def auth_forgot_password():
        req = ForgotPasswordRequest.from_json(request.get_json(silent=True))
        container.auth_service.forgot_password(req.email)
        return jsonify({"message": FORGOT_PASSWORD_MESSAGE}), 200

    @app.route("/auth/reset-password", methods=["POST"], endpoint="auth_reset_password")
    def auth_reset_password():
        req = ResetPasswordRequest.from_json(request.get_json(silent=True))
        container.auth_service.reset_password(req.token, req.new_password)
        return jsonify({"message": "Password reset successfully"}), 200

    @app.route("/auth/profile", methods=["GET"], endpoint="auth_profile")
    @jwt_required
    def auth_profile():
        return jsonify(employee_to_json(g.employee)), 200

    @app.route("/auth/logout", methods=["POST"], endpoint="auth_logout")
    @jwt_required
    def auth_logout():
        return jsonify({"message": "Logout successful. Please delete your access token."}), 200
