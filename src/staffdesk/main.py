from __future__ import annotations

import importlib
import logging
from typing import Optional

import click
from dotenv import load_dotenv
from flask import Flask, current_app, jsonify

from .auth.controller import register as register_auth
from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .departments.controller import register as register_departments
from .employees.controller import register as register_employees
from .files.controller import register as register_files
from .settings import get_settings_module
from .users.controller import register as register_users

logger = logging.getLogger("staffdesk")

# multipart framing on top of the raw file limit
_UPLOAD_OVERHEAD_BYTES = 16 * 1024


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    if not getattr(settings, "SECRET_KEY", ""):
        raise RuntimeError("SECRET_KEY must be set")

    if container is None:
        container = build_container(settings)
        logger.info("settings=%s db=%s", settings_module, container.conn.config.describe())
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)

    app.config["MAX_CONTENT_LENGTH"] = container.file_service.max_bytes + _UPLOAD_OVERHEAD_BYTES
    app.extensions["staffdesk"] = container

    register_error_handlers(app)
    register_auth(app, container)
    register_users(app, container)
    register_files(app, container)
    register_departments(app, container)
    register_employees(app, container)

    @app.route("/healthz", methods=["GET"], endpoint="healthz")
    def healthz():
        return jsonify({"status": "ok"})

    @app.cli.command("init-db")
    def init_db_command():
        """Apply the packaged schema to the configured database."""
        conn = current_app.extensions["staffdesk"].conn
        if conn is None:
            raise click.ClickException("No database configured")
        apply_schema(conn)
        click.echo(f"OK: schema applied -> {conn.config.describe()} (tables={len(list_tables(conn))})")

    return app
