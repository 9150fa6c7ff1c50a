from __future__ import annotations

import importlib
import json
import logging
from pathlib import Path

import click
from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_users, ensure_system_config, list_tables
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(settings_module: str | None = None, *, container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        logger.debug(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        root = Path(__file__).resolve().parents[2]
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=root / "database" / "schema.sql")
            ensure_system_config(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_users(db_config)
            logger.info("Demo users ready")

        container = build_container(db_config=db_config, settings=settings)

    app.extensions["attendpro"] = container

    register_users(app, container)
    register_attendance(app, container)

    @app.cli.command("reconcile")
    @click.option("--quiet", is_flag=True, help="Only print failures.")
    def reconcile_command(quiet: bool) -> None:
        """Force-close attendance sessions left open past the official clock-out."""

        report = container.reconciler.sweep()
        if not quiet or report.failed or report.aborted:
            click.echo(json.dumps(report.to_dict()))
        if report.aborted:
            raise SystemExit(1)

    return app
