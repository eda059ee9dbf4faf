from __future__ import annotations

from flask import Flask, request

from ..access.decorators import permission_required
from ..common.datetime_utils import parse_iso_date
from ..common.serializers import absence_to_dict, vacation_to_dict
from ..common.web import json_body, json_errors, json_response
from ..container import Container
from ..core.enums import AbsenceKind, AppPermission, ApprovalStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.leave_service
    hr_required = permission_required(container, AppPermission.VIEW_ATTENDANCE)
    absences_manager = permission_required(container, AppPermission.MANAGE_ABSENCES)
    vacations_manager = permission_required(container, AppPermission.MANAGE_VACATIONS)

    def _status_arg():
        value = request.args.get("estado")
        if not value:
            return None
        try:
            return ApprovalStatus(value)
        except ValueError:
            raise ValidationError("Estado inválido")

    def _decision():
        try:
            return ApprovalStatus(json_body().get("estado"))
        except ValueError:
            raise ValidationError("Decisão inválida")

    @app.route("/api/rh/ausencias", methods=["GET"], endpoint="absences_list")
    @json_errors
    @hr_required
    def absences_list():
        items = service.list_absences(status=_status_arg())
        return json_response(200, ausencias=[absence_to_dict(a) for a in items])

    @app.route("/api/rh/ausencias", methods=["POST"], endpoint="absences_create")
    @json_errors
    @hr_required
    def absences_create():
        data = json_body()
        try:
            start = parse_iso_date(str(data.get("data_inicio") or ""))
            end = parse_iso_date(str(data.get("data_fim") or ""))
            kind = AbsenceKind(data.get("tipo", AbsenceKind.OTHER.value))
        except ValueError:
            raise ValidationError("Dados da ausência inválidos")

        absence = service.create_absence(
            employee_id=str(data.get("colaborador_id") or ""),
            start_date=start,
            end_date=end,
            kind=kind,
            reason=str(data.get("motivo") or ""),
            proof_url=data.get("comprovativo_url"),
        )
        return json_response(201, ausencia=absence_to_dict(absence))

    @app.route("/api/rh/ausencias/<absence_id>/decisao", methods=["POST"], endpoint="absences_decide")
    @json_errors
    @absences_manager
    def absences_decide(absence_id: str):
        absence = service.decide_absence(absence_id, _decision())
        return json_response(200, ausencia=absence_to_dict(absence))

    @app.route("/api/rh/ferias", methods=["GET"], endpoint="vacations_list")
    @json_errors
    @hr_required
    def vacations_list():
        items = service.list_vacations(status=_status_arg())
        return json_response(200, ferias=[vacation_to_dict(v) for v in items])

    @app.route("/api/rh/ferias/<request_id>/decisao", methods=["POST"], endpoint="vacations_decide")
    @json_errors
    @vacations_manager
    def vacations_decide(request_id: str):
        vacation = service.decide_vacation(request_id, _decision())
        return json_response(200, pedido=vacation_to_dict(vacation))
