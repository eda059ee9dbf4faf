from __future__ import annotations

from typing import Protocol, Sequence

from .model import RoleAccessConfig


class AccessControlRepository(Protocol):
    def get_all(self) -> Sequence[RoleAccessConfig]:
        raise NotImplementedError

    def save_all(self, configs: Sequence[RoleAccessConfig]) -> None:
        raise NotImplementedError
