from __future__ import annotations

from typing import Sequence

from .model import RoleAccessConfig
from .permissions import DEFAULT_ACCESS_CONTROL


class InMemoryAccessControlRepository:
    def __init__(self, configs: Sequence[RoleAccessConfig] = DEFAULT_ACCESS_CONTROL):
        self._configs = tuple(configs)

    def get_all(self) -> Sequence[RoleAccessConfig]:
        return self._configs

    def save_all(self, configs: Sequence[RoleAccessConfig]) -> None:
        self._configs = tuple(configs)
