from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    actions = container.reminder_actions
    scheduler = container.reminder_scheduler

    @app.route("/api/notification", methods=["GET"], endpoint="notification_get")
    def notification_get():
        active = actions.active()
        return jsonify({"success": True, "notification": active.to_dict() if active else None})

    @app.route("/api/notification/present", methods=["POST"], endpoint="notification_present")
    def notification_present():
        record = actions.mark_present()
        return jsonify({"success": True, "record": record.to_dict()})

    @app.route("/api/notification/holiday", methods=["POST"], endpoint="notification_holiday")
    def notification_holiday():
        actions.mark_holiday()
        return jsonify({"success": True})

    @app.route("/api/notification", methods=["DELETE"], endpoint="notification_close")
    def notification_close():
        actions.close()
        return jsonify({"success": True})

    @app.route("/api/reminders", methods=["GET"], endpoint="reminders_get")
    def reminders_get():
        last = scheduler.last_pass
        next_due = container.timers.next_due()
        return jsonify(
            {
                "success": True,
                "state": scheduler.state.value,
                "nextTimerAt": next_due.isoformat(timespec="seconds") if next_due else None,
                "lastPass": last.to_dict() if last else None,
            }
        )
