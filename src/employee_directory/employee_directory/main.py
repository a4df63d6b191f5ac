from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_MAX_PHOTO_BYTES, DEFAULT_PORT, DEFAULT_TOKEN_TTL_SECONDS
from .core.logging_config import setup_logging
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees

logger = logging.getLogger(__name__)

# Room for the other multipart fields on top of the photo itself.
_FORM_OVERHEAD_BYTES = 1024 * 1024


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["PORT"] = int(getattr(settings, "PORT", DEFAULT_PORT))
    app.config["UPLOAD_FOLDER"] = str(Path(getattr(settings, "UPLOAD_FOLDER", "uploads")).resolve())
    max_photo_bytes = int(getattr(settings, "MAX_PHOTO_BYTES", DEFAULT_MAX_PHOTO_BYTES))
    app.config["MAX_CONTENT_LENGTH"] = max_photo_bytes + _FORM_OVERHEAD_BYTES

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        jwt_secret = getattr(settings, "JWT_SECRET", None)
        if not jwt_secret:
            raise RuntimeError("JWT_SECRET is not configured")

        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            jwt_secret=jwt_secret,
            upload_folder=app.config["UPLOAD_FOLDER"],
            db_config=db_config,
            token_ttl_seconds=int(getattr(settings, "TOKEN_TTL_SECONDS", DEFAULT_TOKEN_TTL_SECONDS)),
            max_photo_bytes=max_photo_bytes,
        )

    CORS(app)
    register_employees(app, container)

    return app
