from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_iso_date
from ..common.validators import require_date, require_mark_status, require_non_empty
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    def attendance_mark():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Expected a JSON object")

        record = attendance.mark(
            require_date(data.get("date")),
            require_non_empty(data.get("classId"), "classId"),
            require_non_empty(data.get("subject"), "subject"),
            require_mark_status(data.get("status")),
        )
        return jsonify({"success": True, "record": record.to_dict()})

    @app.route("/api/attendance/today", methods=["POST"], endpoint="attendance_mark_all_today")
    def attendance_mark_all_today():
        records = attendance.mark_all_today()
        return jsonify({"success": True, "records": [r.to_dict() for r in records]})

    @app.route("/api/attendance/<day>/<class_id>", methods=["GET"], endpoint="attendance_status")
    def attendance_status(day: str, class_id: str):
        status = attendance.status_of(require_date(day), class_id)
        return jsonify({"success": True, "status": status.value})

    @app.route("/api/stats", methods=["GET"], endpoint="attendance_stats")
    def attendance_stats():
        return jsonify(
            {
                "success": True,
                "overall": attendance.stats_overall().to_dict(),
                "subjects": [s.to_dict() for s in attendance.stats_by_subject()],
                "today": attendance.day_progress().to_dict(),
            }
        )

    @app.route("/api/history", methods=["GET"], endpoint="attendance_history")
    def attendance_history():
        days = [
            {"date": format_iso_date(d), "records": [r.to_dict() for r in records]}
            for d, records in attendance.history().items()
        ]
        return jsonify({"success": True, "history": days})
