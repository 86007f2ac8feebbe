from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .auth.bootstrap import ensure_demo_users
from .auth.controller import register as register_auth
from .auth.mailer import Mailer
from .container import build_container
from .dashboard.controller import register as register_dashboard
from .storage.repository import KeyValueStorage


def load_settings(settings_module: str) -> dict[str, Any]:
    module = importlib.import_module(settings_module)
    return {k: getattr(module, k) for k in dir(module) if k.isupper()}


def create_app(
    overrides: Optional[dict[str, Any]] = None,
    *,
    storage: Optional[KeyValueStorage] = None,
    mailer: Optional[Mailer] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = get_settings_module()
    settings = load_settings(settings_module)
    settings.update(overrides or {})

    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.config["SIGNUP_ROLES"] = tuple(settings.get("SIGNUP_ROLES", ("student", "faculty")))

    logging.basicConfig(level=logging.DEBUG if app.config["DEBUG"] else logging.INFO)

    if app.config["DEBUG"]:
        print(
            "[student-portal] settings=", settings_module,
            " storage=", f"{settings.get('STORAGE_BACKEND')}:{settings.get('STORAGE_DIR')}",
        )

    container = build_container(settings=settings, storage=storage, mailer=mailer)

    if bool(settings.get("SEED_DEMO_USERS", False)):
        created = ensure_demo_users(container.session_service)
        if app.config["DEBUG"]:
            print(f"[student-portal] demo users ready (created={created})")

    app.extensions["student_portal"] = container

    register_auth(app, container)
    register_dashboard(app, container)

    return app
