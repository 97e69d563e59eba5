from __future__ import annotations

import importlib
import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import MAX_CONTENT_LENGTH
from .core.exceptions import ConfigurationError, DomainError
from .database.bootstrap import apply_schema, list_tables
from .logging_config import configure_logging
from .punches.controller import register as register_punches

logger = logging.getLogger(__name__)


def load_settings(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    values = {name: getattr(settings, name) for name in dir(settings) if name.isupper()}
    values["SETTINGS_MODULE"] = settings_module
    values.update(overrides or {})
    return values


def _validate(settings: Dict[str, Any]) -> None:
    if not settings.get("API_TOKEN"):
        raise ConfigurationError("API_TOKEN is required.")
    if settings.get("MQTT_ENABLED") and not settings.get("MQTT_URL"):
        raise ConfigurationError("MQTT_URL is required.")


def create_app(overrides: Optional[Dict[str, Any]] = None) -> Flask:
    settings = load_settings(overrides)
    _validate(settings)

    app = Flask(__name__)
    app.secret_key = settings.get("SECRET_KEY")
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["API_TOKEN"] = str(settings["API_TOKEN"])
    app.config["MAX_CONTENT_LENGTH"] = MAX_CONTENT_LENGTH

    container = build_container(
        db_engine=settings.get("DB_ENGINE", "sqlite"),
        sqlite_path=settings.get("SQLITE_PATH", ""),
        db_config=settings.get("DB_CONFIG"),
        mqtt_url=settings.get("MQTT_URL") if settings.get("MQTT_ENABLED") else None,
        mqtt_topic=settings.get("MQTT_SUB_TOPIC"),
        mqtt_client_id=settings.get("MQTT_CLIENT_ID", ""),
    )
    logger.info("settings=%s db=%s", settings["SETTINGS_MODULE"], container.conn.describe())

    # Schema failures are fatal at startup.
    if settings.get("AUTO_INIT_DB", True):
        apply_schema(container.conn)
        logger.debug("tables=%s", list_tables(container.conn))

    app.extensions["punch_bridge"] = container
    register_punches(app, container)

    return app


def get_container(app: Flask) -> Container:
    return app.extensions["punch_bridge"]


def run() -> None:
    """Console entry point: start the MQTT subscriber and serve the read API."""

    try:
        settings = load_settings()
        configure_logging(settings.get("LOG_LEVEL", "INFO"))
        app = create_app()
    except DomainError as e:
        logger.error("ERROR: %s", e)
        raise SystemExit(1) from e

    container = get_container(app)
    if container.subscriber is not None:
        container.subscriber.start()

    try:
        app.run(
            host=settings.get("HOST", "0.0.0.0"),
            port=int(settings.get("PORT", 3000)),
            threaded=True,
            use_reloader=False,
        )
    finally:
        container.close()


if __name__ == "__main__":
    run()
