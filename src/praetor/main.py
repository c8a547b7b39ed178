from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .api.errors import register_error_handlers
from .api.health import register as register_health
from .auth.controller import register as register_auth
from .clients.controller import register as register_clients
from .commerce.controller import register as register_commerce
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_user, list_tables
from .database.connection import DBConfig
from .ldap.controller import register as register_ldap
from .projects.controller import register as register_projects
from .settings.controller import register as register_settings
from .tasks.controller import register as register_tasks
from .users.controller import register as register_users
from .work_units.controller import register as register_work_units

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def _bootstrap_database(app: Flask, settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        app.logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_admin_user(
            db_config,
            name=getattr(settings, "ADMIN_NAME", "Admin User"),
            username=getattr(settings, "ADMIN_USERNAME", "admin"),
            password=getattr(settings, "ADMIN_PASSWORD", "password"),
        )
        app.logger.info("Seed data ready")


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))
    app.logger.setLevel(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info("Settings %s, database %s", settings_module, _describe(db_config))
        _bootstrap_database(app, settings, db_config)
        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_algorithm=getattr(settings, "JWT_ALGORITHM", "HS256"),
        )

    register_error_handlers(app)
    register_health(app)
    register_auth(app, container)
    register_users(app, container)
    register_clients(app, container)
    register_projects(app, container)
    register_tasks(app, container)
    register_work_units(app, container)
    register_commerce(app, container)
    register_settings(app, container)
    register_ldap(app, container)

    return app


def _describe(db_config: dict) -> str:
    c = DBConfig.from_dict(db_config)
    return f"{c.user}@{c.host}:{c.port}/{c.database}"
