from __future__ import annotations

import atexit
import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .access.controller import register as register_access
from .container import build_container
from .core.logging_config import setup_logging
from .devices.camera import CameraCapture
from .devices.geolocation import Geolocation
from .employees.controller import register as register_employees
from .leave.controller import register as register_leave
from .punches.controller import register as register_punches
from .session.controller import register as register_session
from .workflow.controller import register as register_kiosk
from .workflow.ports import PunchRegistration

logger = logging.getLogger(__name__)


def create_app(
    *,
    settings: Optional[Any] = None,
    camera: Optional[CameraCapture] = None,
    geolocation: Optional[Geolocation] = None,
    registration: Optional[PunchRegistration] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = "custom"
    if settings is None:
        settings_module = get_settings_module()
        settings = importlib.import_module(settings_module)

    setup_logging(str(getattr(settings, "LOG_LEVEL", "INFO")), log_file=getattr(settings, "LOG_FILE", None))
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PORT"] = int(getattr(settings, "PORT", 5000))

    container = build_container(settings=settings, camera=camera, geolocation=geolocation, registration=registration)
    app.extensions["timeclock"] = container
    atexit.register(container.shutdown)

    logger.info(
        "Time-clock kiosk ready (settings=%s, camera=%s, location=%s)",
        settings_module,
        getattr(settings, "CAMERA_INDEX", 0),
        "fixed" if getattr(settings, "KIOSK_LATITUDE", None) is not None else "none",
    )

    register_access(app, container)
    register_session(app, container)
    register_kiosk(app, container)
    register_employees(app, container)
    register_punches(app, container)
    register_leave(app, container)

    return app


def run() -> None:
    """Console entry point: serve the kiosk with Flask's built-in server."""
    app = create_app()
    # One process only: the workflow and the session lock are process-wide.
    app.run(host="0.0.0.0", port=int(app.config.get("PORT", 5000)), threaded=True, use_reloader=False)
