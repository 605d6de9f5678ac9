from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.commands import register as register_attendance_commands
from .attendance.controller import register as register_attendance
from .container import Container, EngineSettings, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .justifications.controller import register as register_justifications
from .logging_config import configure_logging
from .meals.controller import register as register_meals
from .scans.controller import register as register_scans
from .settings import get_settings_module

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    engine_settings = EngineSettings.from_module(settings)
    # Leave headroom for multipart framing around the document itself.
    app.config["MAX_CONTENT_LENGTH"] = engine_settings.max_document_bytes + 1024 * 1024

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            config = DBConfig.from_mapping(db_config)
            apply_schema(config)
            logger.info("Schema ready (tables=%d)", len(list_tables(config)))
        container = build_container(db_config=db_config, settings=engine_settings)

    logger.info(
        "settings=%s cutoff=%s zone=%s",
        settings_module,
        container.settings.late_cutoff.strftime("%H:%M"),
        container.settings.default_timezone,
    )

    register_scans(app, container)
    register_attendance(app, container)
    register_meals(app, container)
    register_justifications(app, container)
    register_attendance_commands(app, container)

    @app.errorhandler(413)
    def too_large(_e):
        return jsonify({"success": False, "kind": "ValidationError", "message": "Upload too large"}), 413

    return app
