from __future__ import annotations

import uuid

from flask import Flask, jsonify, request

from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.exceptions import ValidationError
from ..auth.guard import jwt_required
from .dto import UpdateEmployeeRequest, employee_page_to_json, employee_to_json


def _require_uuid(value: str) -> str:
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise ValidationError("Validation failed (uuid is expected)") from None


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer") from None


def register(app: Flask, container: Container) -> None:
    @app.route("/employees", methods=["GET"], endpoint="employees_list")
    @jwt_required
    def employees_list():
        page = container.employee_service.list_page(
            page=_int_arg("page", 1),
            limit=_int_arg("limit", DEFAULT_PAGE_SIZE),
            search=request.args.get("search"),
        )
        return jsonify(employee_page_to_json(page)), 200

    @app.route("/employees/<employee_id>", methods=["GET"], endpoint="employees_get")
    @jwt_required
    def employees_get(employee_id: str):
        employee = container.employee_service.get_by_id(_require_uuid(employee_id))
        return jsonify(employee_to_json(employee)), 200

    @app.route("/employees/email/<email>", methods=["GET"], endpoint="employees_get_by_email")
    @jwt_required
    def employees_get_by_email(email: str):
        return jsonify(employee_to_json(container.employee_service.get_by_email(email))), 200

    @app.route("/employees/employeeId/<employee_code>", methods=["GET"], endpoint="employees_get_by_code")
    @jwt_required
    def employees_get_by_code(employee_code: str):
        return jsonify(employee_to_json(container.employee_service.get_by_employee_code(employee_code))), 200

    @app.route("/employees/<employee_id>", methods=["PATCH"], endpoint="employees_update")
    @jwt_required
    def employees_update(employee_id: str):
        employee_id = _require_uuid(employee_id)
        req = UpdateEmployeeRequest.from_json(request.get_json(silent=True))
        employee = container.employee_service.update(employee_id, req)
        return jsonify(employee_to_json(employee)), 200
