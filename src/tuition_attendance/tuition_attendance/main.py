from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .core.constants import DEFAULT_HEATMAP_LIMIT, LOCK_AFTER_HOURS
from .database.connection import DBConfig
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_accounts, list_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .batches.controller import register as register_batches
from .reports.controller import register as register_reports
from .sessions.controller import register as register_sessions
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    `container` replaces the MySQL-backed wiring (tests pass one built on
    in-memory repositories); in that case no database bootstrap runs.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    lock_after_hours = float(getattr(settings, "LOCK_AFTER_HOURS", LOCK_AFTER_HOURS))
    heatmap_limit = int(getattr(settings, "HEATMAP_LIMIT", DEFAULT_HEATMAP_LIMIT))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_accounts(db_config)
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            lock_after_hours=lock_after_hours,
            heatmap_limit=heatmap_limit,
        )

    # Sessions that expired while the server was down are locked before the first request.
    try:
        container.session_service.sweep_expired_sessions()
    except Exception:
        logger.warning("Startup lock sweep failed", exc_info=True)

    register_users(app, container)
    register_batches(app, container)
    register_students(app, container)
    register_sessions(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    app.extensions["container"] = container
    return app
