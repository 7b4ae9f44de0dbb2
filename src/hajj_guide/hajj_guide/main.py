from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_admin, list_tables

from .container import Container, build_container
from .common.web import register_error_handlers
from .accommodations.controller import register as register_accommodations
from .auth.controller import register as register_auth
from .medical.controller import register as register_medical
from .permits.controller import register as register_permits
from .pilgrims.controller import register as register_pilgrims
from .transport.controller import register as register_transport

logger = logging.getLogger(__name__)


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
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
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            # Seeded resources reference the demo admin, so it goes first.
            ensure_demo_admin(db_config)
            apply_seed_sql(db_config)
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            cascade_delete=bool(getattr(settings, "CASCADE_PILGRIM_DELETE", False)),
        )

    register_error_handlers(app)
    register_auth(app, container)
    register_pilgrims(app, container)
    register_medical(app, container)
    register_accommodations(app, container)
    register_transport(app, container)
    register_permits(app, container)

    app.extensions["hajj_guide"] = container
    return app


def shutdown(app: Flask) -> None:
    """Release the store handle; the process-wide connection is not closed per request."""
    container: Container = app.extensions["hajj_guide"]
    container.conn.release()


def run() -> None:
    app = create_app()
    try:
        app.run(debug=app.config["DEBUG"])
    finally:
        shutdown(app)
