from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    store = container.store

    @app.route("/api/settings", methods=["GET"], endpoint="settings_get")
    def settings_get():
        return jsonify({"success": True, "settings": store.settings.to_dict()})

    @app.route("/api/settings", methods=["PATCH"], endpoint="settings_update")
    def settings_update():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Expected a JSON object")
        store.set_settings(store.settings.updated(data))
        return jsonify({"success": True, "settings": store.settings.to_dict()})

    @app.route("/api/data", methods=["DELETE"], endpoint="data_clear")
    def data_clear():
        store.clear_all()
        return jsonify({"success": True})
