from __future__ import annotations

from flask import Flask

from ..common.web import json_body, json_errors, json_response
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    runtime = container.runtime
    lock = container.session_lock

    def _lock_state(**extra):
        return json_response(200, locked=runtime.call(lambda: lock.locked), timeout=lock.timeout, **extra)

    @app.route("/api/session/activity", methods=["POST"], endpoint="session_activity")
    @json_errors
    def session_activity():
        event = str(json_body().get("event") or "")
        if event not in lock.activity_events:
            raise ValidationError("Evento de atividade desconhecido")
        reset = runtime.call(lock.notify, event)
        return _lock_state(reset=reset)

    @app.route("/api/session/lock", methods=["GET"], endpoint="session_lock_state")
    @json_errors
    def session_lock_state():
        return _lock_state()

    @app.route("/api/session/unlock", methods=["POST"], endpoint="session_unlock")
    @json_errors
    def session_unlock():
        runtime.call(lock.unlock)
        return _lock_state()
