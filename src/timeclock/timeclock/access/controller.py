from __future__ import annotations

from flask import Flask, request, session

from ..common.serializers import access_config_to_dict
from ..common.web import json_body, json_errors, json_response
from ..container import Container
from ..core.enums import AppPermission, UserRole
from ..core.exceptions import ValidationError
from .decorators import current_role, ensure_unlocked, permission_required
from .permissions import permissions_for


def register(app: Flask, container: Container) -> None:
    service = container.access_service
    acl_manager = permission_required(container, AppPermission.MANAGE_ACL)

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @json_errors
    def me():
        role = current_role(container)
        granted = permissions_for(role, service.get_access_control())
        return json_response(200, role=role.value, permissions=sorted(p.value for p in granted))

    @app.route("/api/session/role", methods=["POST"], endpoint="switch_role")
    @json_errors
    def switch_role():
        ensure_unlocked(container)
        try:
            role = UserRole(json_body().get("role"))
        except ValueError:
            raise ValidationError("Perfil inválido")
        session["role"] = role.value
        return json_response(200, role=role.value)

    @app.route("/api/acl", methods=["GET"], endpoint="acl_get")
    @json_errors
    @acl_manager
    def acl_get():
        return json_response(200, acl=[access_config_to_dict(c) for c in service.get_access_control()])

    @app.route("/api/acl", methods=["PUT"], endpoint="acl_save")
    @json_errors
    @acl_manager
    def acl_save():
        payload = request.get_json(silent=True)
        if not isinstance(payload, list):
            payload = json_body().get("acl")
        if not isinstance(payload, list):
            raise ValidationError("Configuração de acessos inválida")

        saved = service.save_access_control(service.parse_configs(payload))
        return json_response(200, acl=[access_config_to_dict(c) for c in saved])
