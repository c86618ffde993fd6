from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .certificates.controller import register as register_certificates
from .common.http import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_HALF_DAY_MINUTES, DEFAULT_LATE_GRACE_MINUTES, DEFAULT_WEEKLY_OFF_DAYS
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .employees.controller import register as register_employees
from .expenses.controller import register as register_expenses
from .holidays.controller import register as register_holidays
from .leave.controller import register as register_leave
from .organization.controller import register as register_organization
from .payroll.controller import register as register_payroll
from .recruitment.controller import register as register_recruitment
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)

_REGISTRARS = (
    register_organization,
    register_employees,
    register_shifts,
    register_holidays,
    register_attendance,
    register_leave,
    register_payroll,
    register_expenses,
    register_recruitment,
    register_certificates,
    register_dashboard,
)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
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
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            weekly_off_days=getattr(settings, "WEEKLY_OFF_DAYS", DEFAULT_WEEKLY_OFF_DAYS),
            late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES)),
            half_day_minutes=int(getattr(settings, "HALF_DAY_MINUTES", DEFAULT_HALF_DAY_MINUTES)),
        )

    register_error_handlers(app)
    for register in _REGISTRARS:
        register(app, container)

    return app
