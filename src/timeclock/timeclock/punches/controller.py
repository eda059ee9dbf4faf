from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..access.decorators import permission_required
from ..common.datetime_utils import parse_iso_date
from ..common.serializers import day_statistics_to_dict, punch_to_dict
from ..common.web import json_body, json_errors, json_response
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AppPermission, PunchDirection, PunchMethod
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    history = container.punch_history_service
    registration = container.punch_registration_service
    hr_required = permission_required(container, AppPermission.VIEW_ATTENDANCE)

    @app.route("/api/rh/movimentos", methods=["GET"], endpoint="punches_list")
    @json_errors
    @hr_required
    def punches_list():
        try:
            limit = int(request.args.get("limit", DEFAULT_HISTORY_LIMIT))
        except ValueError:
            raise ValidationError("Parâmetro limit inválido")

        employee_id = request.args.get("colaborador_id")
        if employee_id:
            punches = history.list_for_employee(employee_id, limit=limit)
        else:
            punches = history.list_recent(limit=limit)
        include_image = request.args.get("com_foto", "").lower() in {"1", "true", "sim"}
        return json_response(200, movimentos=[punch_to_dict(p, include_image=include_image) for p in punches])

    @app.route("/api/rh/movimentos/resumo", methods=["GET"], endpoint="punches_summary")
    @json_errors
    @hr_required
    def punches_summary():
        day_s = request.args.get("data")
        try:
            day = parse_iso_date(day_s) if day_s else date.today()
        except ValueError:
            raise ValidationError("Data inválida (AAAA-MM-DD)")
        return json_response(200, data=day.isoformat(), resumo=day_statistics_to_dict(history.day_statistics(day)))

    @app.route("/api/rh/movimentos", methods=["POST"], endpoint="punches_manual")
    @json_errors
    @hr_required
    def punches_manual():
        data = json_body()
        try:
            direction = PunchDirection(data.get("tipo"))
        except ValueError:
            raise ValidationError("Tipo de movimento inválido")

        punch = registration.register(
            employee_id=str(data.get("colaborador_id") or ""),
            direction=direction,
            method=PunchMethod.MANUAL,
        )
        return json_response(201, movimento=punch_to_dict(punch))
