from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .payroll.controller import register as register_payroll
from .schedules.controller import register as register_schedules

logger = logging.getLogger(__name__)


def _load_settings(settings_module: str) -> dict:
    module = importlib.import_module(settings_module)
    return {name: getattr(module, name) for name in dir(module) if name.isupper()}


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = _load_settings(settings_module)
    app.config.from_mapping(settings)

    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("settings=%s api=%s", settings_module, settings.get("API_BASE_URL"))

    if container is None:
        container = build_container(settings=settings)
        # the app owns the REST session it built
        atexit.register(container.close)
    app.extensions["homecare_container"] = container

    register_schedules(app, container)
    register_payroll(app, container)

    return app
