from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import PunchEvent


class PunchRepository(Protocol):
    """Append-only store: punches are never updated nor deleted."""

    def add(self, punch: PunchEvent) -> None:
        raise NotImplementedError

    def next_id(self) -> str:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[PunchEvent]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str, limit: int) -> Sequence[PunchEvent]:
        raise NotImplementedError

    def list_for_date(self, day: date) -> Sequence[PunchEvent]:
        raise NotImplementedError
