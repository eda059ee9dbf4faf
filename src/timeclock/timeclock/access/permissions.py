"""Role/permission lookup.

Pure functions over the access table; no inheritance, no per-role classes.
"""
from __future__ import annotations

from typing import Sequence

from ..core.enums import AppPermission, UserRole
from .model import RoleAccessConfig

DEFAULT_ACCESS_CONTROL: tuple[RoleAccessConfig, ...] = (
    RoleAccessConfig(role=UserRole.ADMIN, permissions=frozenset(AppPermission)),
    RoleAccessConfig(
        role=UserRole.MANAGER,
        permissions=frozenset(
            {
                AppPermission.VIEW_DASHBOARD,
                AppPermission.VIEW_QUOTES,
                AppPermission.EDIT_QUOTES,
                AppPermission.VIEW_SALES,
                AppPermission.VIEW_CUSTOMERS,
                AppPermission.VIEW_ATTENDANCE,
                AppPermission.MANAGE_ABSENCES,
                AppPermission.MANAGE_VACATIONS,
                AppPermission.VIEW_EMAILS,
            }
        ),
    ),
    RoleAccessConfig(
        role=UserRole.OPERATOR,
        permissions=frozenset(
            {
                AppPermission.VIEW_QUOTES,
                AppPermission.EDIT_QUOTES,
                AppPermission.VIEW_TIMECLOCK,
                AppPermission.VIEW_EMAILS,
            }
        ),
    ),
)


def has_permission(role: UserRole, permission: AppPermission, access_config: Sequence[RoleAccessConfig]) -> bool:
    for config in access_config:
        if config.role == role:
            return permission in config.permissions
    return False


def permissions_for(role: UserRole, access_config: Sequence[RoleAccessConfig]) -> frozenset[AppPermission]:
    for config in access_config:
        if config.role == role:
            return config.permissions
    return frozenset()
