from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from ..core.enums import AppPermission, UserRole
from ..core.exceptions import ValidationError
from .model import RoleAccessConfig
from .permissions import has_permission
from .repository import AccessControlRepository


class AccessControlService:
    """Use case: consultar e gravar a matriz de acessos (ACL)."""

    def __init__(self, acl: AccessControlRepository):
        self._acl = acl

    def get_access_control(self) -> Sequence[RoleAccessConfig]:
        return self._acl.get_all()

    def can(self, role: UserRole, permission: AppPermission) -> bool:
        return has_permission(role, permission, self._acl.get_all())

    def save_access_control(self, configs: Iterable[RoleAccessConfig]) -> Sequence[RoleAccessConfig]:
        configs = list(configs)
        seen: set[UserRole] = set()
        for config in configs:
            if config.role in seen:
                raise ValidationError(f"Perfil repetido: {config.role.value}")
            seen.add(config.role)

        self._acl.save_all(configs)
        return self._acl.get_all()

    @staticmethod
    def parse_configs(payload: Iterable[Mapping]) -> list[RoleAccessConfig]:
        """Build configs from the JSON shape `[{"role": ..., "permissions": [...]}]`."""
        try:
            return [
                RoleAccessConfig(
                    role=UserRole(item["role"]),
                    permissions=frozenset(AppPermission(p) for p in item.get("permissions", [])),
                )
                for item in payload
            ]
        except (KeyError, TypeError, ValueError):
            raise ValidationError("Configuração de acessos inválida")
