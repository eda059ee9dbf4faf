from __future__ import annotations

import time

from flask import Flask, Response, stream_with_context

from ..access.decorators import permission_required
from ..common.serializers import employee_to_dict, punch_to_dict, snapshot_to_dict
from ..common.web import json_body, json_errors, json_response
from ..container import Container
from ..core.enums import AppPermission, PunchDirection, WorkflowStep
from ..core.exceptions import ValidationError
from ..devices.imaging import encode_preview_frame, multipart_frame

PREVIEW_FPS = 15


def register(app: Flask, container: Container) -> None:
    runtime = container.runtime
    workflow = container.workflow
    timeclock_required = permission_required(container, AppPermission.VIEW_TIMECLOCK)

    def _state(**extra):
        snapshot, employees = runtime.call(lambda: (workflow.snapshot(), workflow.filtered_employees))
        if snapshot.step != WorkflowStep.SELECT_EMPLOYEE:
            employees = None
        return json_response(200, state=snapshot_to_dict(snapshot, employees=employees), **extra)

    @app.route("/api/ponto/state", methods=["GET"], endpoint="kiosk_state")
    @json_errors
    @timeclock_required
    def kiosk_state():
        return _state()

    @app.route("/api/ponto/employees", methods=["GET"], endpoint="kiosk_employees")
    @json_errors
    @timeclock_required
    def kiosk_employees():
        employees = runtime.call(lambda: workflow.filtered_employees)
        return json_response(200, employees=[employee_to_dict(e) for e in employees])

    @app.route("/api/ponto/direction", methods=["POST"], endpoint="kiosk_direction")
    @json_errors
    @timeclock_required
    def kiosk_direction():
        try:
            direction = PunchDirection(json_body().get("direction"))
        except ValueError:
            raise ValidationError("Tipo de movimento inválido")

        runtime.run(workflow.start(direction))
        return _state()

    @app.route("/api/ponto/search", methods=["POST"], endpoint="kiosk_search")
    @json_errors
    @timeclock_required
    def kiosk_search():
        term = str(json_body().get("term") or "")
        runtime.call(workflow.set_search_term, term)
        employees = runtime.call(lambda: workflow.filtered_employees)
        return json_response(200, employees=[employee_to_dict(e) for e in employees])

    @app.route("/api/ponto/employee", methods=["POST"], endpoint="kiosk_employee")
    @json_errors
    @timeclock_required
    def kiosk_employee():
        employee_id = str(json_body().get("employee_id") or "").strip()
        if not employee_id:
            raise ValidationError("Colaborador em falta")

        runtime.call(workflow.select_employee_by_id, employee_id)
        return _state()

    @app.route("/api/ponto/confirm", methods=["POST"], endpoint="kiosk_confirm")
    @json_errors
    @timeclock_required
    def kiosk_confirm():
        punch = runtime.run(workflow.confirm_capture())
        snapshot = runtime.call(workflow.snapshot)
        return json_response(
            200,
            success=punch is not None,
            punch=punch_to_dict(punch) if punch else None,
            state=snapshot_to_dict(snapshot),
        )

    @app.route("/api/ponto/cancel", methods=["POST"], endpoint="kiosk_cancel")
    @json_errors
    @timeclock_required
    def kiosk_cancel():
        runtime.call(workflow.cancel)
        return _state()

    @app.route("/ponto/preview.mjpg", methods=["GET"], endpoint="kiosk_preview")
    @json_errors
    @timeclock_required
    def kiosk_preview():
        if runtime.call(lambda: workflow.stream) is None:
            return json_response(404, message="Câmara inativa")

        def generate():
            # Ends as soon as the workflow lets go of the stream.
            while True:
                stream = runtime.call(lambda: workflow.stream)
                if stream is None:
                    break
                jpeg = encode_preview_frame(stream)
                if jpeg:
                    yield multipart_frame(jpeg)
                time.sleep(1.0 / PREVIEW_FPS)

        return Response(stream_with_context(generate()), mimetype="multipart/x-mixed-replace; boundary=frame")
