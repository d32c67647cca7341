from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .edit_requests.controller import register as register_edit_requests
from .locations.controller import register as register_locations
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)

_SETTING_KEYS = (
    "NORMAL_HOURS_THRESHOLD",
    "CURRENCY",
    "RETRY_MAX_ATTEMPTS",
    "RETRY_BASE_DELAY",
    "GEOCODER_URL",
    "GEOCODER_USER_AGENT",
    "GEOCODE_CACHE_SIZE",
    "GEOCODE_CACHE_TTL",
)


def create_app() -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    log_level = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    database_dir = Path(__file__).resolve().parents[3] / "database"
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=database_dir / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=database_dir / "seed.sql")
        logger.info("Demo seed ready")

    container = build_container(
        db_config=db_config,
        settings={key: getattr(settings, key) for key in _SETTING_KEYS if hasattr(settings, key)},
    )

    register_payroll(app, container)
    register_edit_requests(app, container)
    register_locations(app, container)

    return app
