from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import (
    CLASS_FIELD_NAMES,
    EXAM_FIELD_NAMES,
    EXTRA_CLASS_FIELD_NAMES,
    class_patch,
    exam_type,
    optional_text,
    optional_time,
    require_date,
    require_non_empty,
    require_time,
    require_weekday,
)
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object")
    return data


def _optional_json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object")
    return data


def register(app: Flask, container: Container) -> None:
    timetables = container.timetable_service

    def _require_timetable():
        timetable = timetables.current()
        if timetable is None:
            raise NotFoundError("No timetable has been imported yet")
        return timetable

    @app.route("/api/timetable", methods=["GET"], endpoint="timetable_get")
    def timetable_get():
        return jsonify({"success": True, "timetable": _require_timetable().to_dict()})

    @app.route("/api/timetable", methods=["POST"], endpoint="timetable_import")
    def timetable_import():
        upload = request.files.get("file")
        source = upload.read() if upload else request.get_data()
        timetable = timetables.import_timetable(source)
        return jsonify({"success": True, "timetable": timetable.to_dict()}), 201

    @app.route("/api/timetable", methods=["DELETE"], endpoint="timetable_reset")
    def timetable_reset():
        timetables.reset_timetable()
        return jsonify({"success": True})

    # Views

    @app.route("/api/days/<day>", methods=["GET"], endpoint="day_view")
    def day_view(day: str):
        d = require_date(day)
        view = timetables.day_view(d)
        attendance = container.attendance_service
        data = view.to_dict()
        for item in data["sessions"] + data["exams"]:
            item["status"] = attendance.status_of(d, item["id"]).value
        data["progress"] = attendance.day_progress(d).to_dict()
        return jsonify({"success": True, "day": data})

    @app.route("/api/weeks/<day>", methods=["GET"], endpoint="week_view")
    def week_view(day: str):
        days = timetables.week_of(require_date(day))
        return jsonify({"success": True, "days": [v.to_dict() for v in days]})

    @app.route("/api/months/<int:year>/<int:month>", methods=["GET"], endpoint="month_view")
    def month_view(year: int, month: int):
        if not 1 <= month <= 12:
            raise ValidationError("month must be between 1 and 12")
        weeks = timetables.calendar_grid(year, month)
        return jsonify({"success": True, "weeks": [[v.to_dict() for v in week] for week in weeks]})

    # Holidays

    @app.route("/api/holidays/<day>", methods=["PUT"], endpoint="holiday_add")
    def holiday_add(day: str):
        _require_timetable()
        data = _optional_json_body()
        timetables.add_holiday(require_date(day), optional_text(data.get("reason"), "reason"))
        return jsonify({"success": True})

    @app.route("/api/holidays/<day>", methods=["DELETE"], endpoint="holiday_remove")
    def holiday_remove(day: str):
        _require_timetable()
        timetables.remove_holiday(require_date(day))
        return jsonify({"success": True})

    # Recurring classes

    @app.route("/api/schedule/<weekday>/classes/<class_id>", methods=["PATCH"], endpoint="class_update")
    def class_update(weekday: str, class_id: str):
        _require_timetable()
        patch = class_patch(_json_body(), CLASS_FIELD_NAMES)
        timetables.update_class(require_weekday(weekday), class_id, patch, strict=True)
        return jsonify({"success": True})

    @app.route("/api/schedule/<weekday>/classes/<class_id>", methods=["DELETE"], endpoint="class_delete")
    def class_delete(weekday: str, class_id: str):
        _require_timetable()
        timetables.delete_class(require_weekday(weekday), class_id, strict=True)
        return jsonify({"success": True})

    # Extra classes

    @app.route("/api/extra-classes", methods=["POST"], endpoint="extra_class_add")
    def extra_class_add():
        _require_timetable()
        data = _json_body()
        extra = timetables.add_extra_class(
            date=require_date(data.get("date")),
            subject=require_non_empty(data.get("subject"), "subject"),
            start_time=require_time(data.get("startTime"), "startTime"),
            end_time=require_time(data.get("endTime"), "endTime"),
            room=optional_text(data.get("room"), "room"),
        )
        return jsonify({"success": True, "extraClass": extra.to_dict()}), 201

    @app.route("/api/extra-classes/<class_id>", methods=["PATCH"], endpoint="extra_class_update")
    def extra_class_update(class_id: str):
        _require_timetable()
        patch = class_patch(_json_body(), EXTRA_CLASS_FIELD_NAMES)
        timetables.update_extra_class(class_id, patch, strict=True)
        return jsonify({"success": True})

    @app.route("/api/extra-classes/<class_id>", methods=["DELETE"], endpoint="extra_class_delete")
    def extra_class_delete(class_id: str):
        _require_timetable()
        timetables.delete_extra_class(class_id, strict=True)
        return jsonify({"success": True})

    # Exams

    @app.route("/api/exams", methods=["POST"], endpoint="exam_add")
    def exam_add():
        _require_timetable()
        data = _json_body()
        exam = timetables.add_exam(
            date=require_date(data.get("date")),
            subject=require_non_empty(data.get("subject"), "subject"),
            type=exam_type(data.get("type")),
            time=optional_time(data.get("time"), "time"),
            room=optional_text(data.get("room"), "room"),
        )
        return jsonify({"success": True, "exam": exam.to_dict()}), 201

    @app.route("/api/exams/<exam_id>", methods=["PATCH"], endpoint="exam_update")
    def exam_update(exam_id: str):
        _require_timetable()
        patch = class_patch(_json_body(), EXAM_FIELD_NAMES)
        timetables.update_exam(exam_id, patch, strict=True)
        return jsonify({"success": True})

    @app.route("/api/exams/<exam_id>", methods=["DELETE"], endpoint="exam_delete")
    def exam_delete(exam_id: str):
        _require_timetable()
        timetables.delete_exam(exam_id, strict=True)
        return jsonify({"success": True})
