from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.web import current_user
from .container import build_container
from .core.constants import DEFAULT_REPORT_YEAR, MONTH_NAMES
from .database.bootstrap import build_store
from .attendance.controller import register as register_attendance
from .participants.controller import register as register_participants
from .reports.controller import register as register_reports
from .users.controller import register as register_users

ROOT_DIR = Path(__file__).resolve().parents[3]


def create_app(settings_module: str | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(ROOT_DIR / "templates"), static_folder=str(ROOT_DIR / "static"))

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.info("[absensi-pdm] settings=%s backend=%s", settings_module, getattr(settings, "STORAGE_BACKEND", "json"))

    store = build_store(settings)
    container = build_container(
        store=store,
        report_year=int(getattr(settings, "REPORT_YEAR", DEFAULT_REPORT_YEAR)),
    )
    app.extensions["absensi_container"] = container

    @app.context_processor
    def inject_user():
        return {"current_user": current_user(), "month_names": MONTH_NAMES}

    register_users(app, container)
    register_reports(app, container)
    register_participants(app, container)
    register_attendance(app, container)

    return app
