from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_EXTRACTION_TIMEOUT_SECONDS
from .core.exceptions import ExtractionFailure, NotFoundError, StorageError, ValidationError
from .attendance.controller import register as register_attendance
from .reminders.controller import register as register_reminders
from .settings.controller import register as register_settings
from .timetable.controller import register as register_timetable

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
    root.setLevel(level.upper())


def _error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    app.register_error_handler(ValidationError, lambda e: _error(str(e), 400))
    app.register_error_handler(NotFoundError, lambda e: _error(str(e), 404))
    app.register_error_handler(ExtractionFailure, lambda e: _error(str(e), 502))
    app.register_error_handler(StorageError, lambda e: _error(str(e), 500))


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        container = build_container(
            data_dir=getattr(settings, "DATA_DIR", None),
            dismiss_seconds=int(getattr(settings, "NOTIFICATION_DISMISS_SECONDS", 5)),
            extraction_delay_seconds=float(getattr(settings, "EXTRACTION_DELAY_SECONDS", 0)),
            extraction_timeout_seconds=float(
                getattr(settings, "EXTRACTION_TIMEOUT_SECONDS", DEFAULT_EXTRACTION_TIMEOUT_SECONDS)
            ),
        )
        atexit.register(container.shutdown)

    logger.info("timetable-tracker settings=%s data_dir=%s", settings_module, getattr(settings, "DATA_DIR", None))
    app.extensions["timetable_tracker"] = container

    @app.before_request
    def run_due_reminders():
        container.reminder_scheduler.tick()

    register_error_handlers(app)
    register_timetable(app, container)
    register_attendance(app, container)
    register_settings(app, container)
    register_reminders(app, container)

    return app
