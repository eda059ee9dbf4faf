from __future__ import annotations

from flask import Flask

from ..access.decorators import permission_required
from ..common.serializers import employee_to_dict
from ..common.web import json_body, json_errors, json_response
from ..container import Container
from ..core.enums import AppPermission
from ..devices.imaging import decode_data_url


def register(app: Flask, container: Container) -> None:
    service = container.employee_service
    hr_required = permission_required(container, AppPermission.VIEW_ATTENDANCE)

    @app.route("/api/rh/colaboradores", methods=["GET"], endpoint="employees_list")
    @json_errors
    @hr_required
    def employees_list():
        return json_response(200, colaboradores=[employee_to_dict(e) for e in service.list_employees()])

    @app.route("/api/rh/colaboradores", methods=["POST"], endpoint="employees_create")
    @json_errors
    @hr_required
    def employees_create():
        data = json_body()
        employee = service.add_employee(
            name=data.get("nome", ""),
            email=data.get("email", ""),
            job_title=data.get("cargo", ""),
            department=data.get("departamento", ""),
            photo_url=data.get("foto_url"),
        )
        return json_response(201, colaborador=employee_to_dict(employee))

    @app.route("/api/rh/colaboradores/<employee_id>/estado", methods=["POST"], endpoint="employees_toggle")
    @json_errors
    @hr_required
    def employees_toggle(employee_id: str):
        employee = service.toggle_status(employee_id)
        return json_response(200, colaborador=employee_to_dict(employee))

    @app.route("/api/rh/colaboradores/<employee_id>/biometria", methods=["POST"], endpoint="employees_biometrics")
    @json_errors
    @hr_required
    def employees_biometrics(employee_id: str):
        service.get(employee_id)
        image_data = str(json_body().get("image_data") or "")
        decode_data_url(image_data)
        employee = service.register_biometrics(employee_id, image_data)
        return json_response(200, colaborador=employee_to_dict(employee))
