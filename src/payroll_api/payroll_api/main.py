from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .accounts.controller import register as register_accounts
from .auth.controller import register as register_auth
from .banking.controller import register as register_banking
from .container import Container, build_container
from .core.logging import configure_logging, get_logger
from .database.bootstrap import apply_schema, missing_tables
from .database.connection import DBConfig
from .employees.controller import register as register_employees
from .http.pipeline import install as install_pipeline
from .payslips.controller import register as register_payslips
from .settings import AppSettings, load_settings
from .users.controller import register as register_users

log = get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(settings: Optional[AppSettings] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    if settings is None:
        settings = container.settings if container is not None else load_settings()
    configure_logging(level=settings.log_level, development_mode=settings.is_development)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["DEBUG"] = settings.debug
    app.config["JSON_SORT_KEYS"] = False
    app.config["PAYROLL_SETTINGS"] = settings

    if container is None:
        container = build_container(settings)
        if settings.auto_init_db:
            apply_schema(container.conn, schema_path=SCHEMA_PATH)
            missing = missing_tables(container.conn)
            if missing:
                log.warning("schema_incomplete", missing=missing)

    log.debug(
        "app_configured",
        app_env=settings.app_env,
        api_prefix=settings.api_prefix,
        db=DBConfig.from_dict(settings.db_config).describe(),
    )

    install_pipeline(app, container)
    register_auth(app, container)
    register_users(app, container)
    register_employees(app, container)
    register_accounts(app, container)
    register_banking(app, container)
    register_payslips(app, container)

    return app
