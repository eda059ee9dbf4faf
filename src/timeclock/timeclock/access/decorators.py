from __future__ import annotations

from functools import wraps
from typing import TYPE_CHECKING

from flask import session

from ..core.enums import AppPermission, UserRole
from ..core.exceptions import AuthorizationError, SessionLockedError

if TYPE_CHECKING:
    from ..container import Container


def current_role(container: "Container") -> UserRole:
    try:
        return UserRole(session.get("role") or container.default_role.value)
    except ValueError:
        return container.default_role


def ensure_unlocked(container: "Container") -> None:
    if container.runtime.call(lambda: container.session_lock.locked):
        raise SessionLockedError("Sessão bloqueada por inatividade")


def permission_required(container: "Container", permission: AppPermission):
    """Route guard: session not locked and current role holds `permission`.

    Must sit inside `json_errors` so the raised errors become JSON responses.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            ensure_unlocked(container)
            if not container.access_service.can(current_role(container), permission):
                raise AuthorizationError("Não tem permissão para aceder a esta funcionalidade")
            return view(*args, **kwargs)

        return wrapper

    return decorator
