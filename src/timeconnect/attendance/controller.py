from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import jwt_required
from ..container import Container
from .dto import RecordAttendanceRequest, attendance_to_json


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance/record", methods=["POST"], endpoint="attendance_record")
    @jwt_required
    def attendance_record():
        req = RecordAttendanceRequest.from_json(request.get_json(silent=True))
        record = container.attendance_service.record_event(req.employee_identifier, comment=req.comment)
        return jsonify(attendance_to_json(record)), 201

    @app.route("/attendance/employee/<identifier>", methods=["GET"], endpoint="attendance_history")
    @jwt_required
    def attendance_history(identifier: str):
        records = container.attendance_service.get_history(identifier)
        return jsonify([attendance_to_json(r) for r in records]), 200

    @app.route("/attendance/employee/<identifier>/today", methods=["GET"], endpoint="attendance_today")
    @jwt_required
    def attendance_today(identifier: str):
        record = container.attendance_service.get_today(identifier)
        if record is None:
            return jsonify({"message": "No attendance record for today"}), 200
        return jsonify(attendance_to_json(record)), 200
