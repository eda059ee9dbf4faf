from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AppPermission, UserRole


@dataclass(frozen=True)
class RoleAccessConfig:
    role: UserRole
    permissions: frozenset[AppPermission]
