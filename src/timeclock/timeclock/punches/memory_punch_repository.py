from __future__ import annotations

from datetime import date
from itertools import count
from typing import Sequence

from .model import PunchEvent


class InMemoryPunchRepository:
    def __init__(self):
        self._items: list[PunchEvent] = []
        self._ids = count(1)

    def next_id(self) -> str:
        return f"mov-{next(self._ids)}"

    def add(self, punch: PunchEvent) -> None:
        self._items.append(punch)

    def list_recent(self, limit: int) -> Sequence[PunchEvent]:
        items = sorted(self._items, key=lambda p: p.timestamp, reverse=True)
        return items[:limit]

    def list_for_employee(self, employee_id: str, limit: int) -> Sequence[PunchEvent]:
        items = [p for p in self._items if p.employee_id == employee_id]
        items.sort(key=lambda p: p.timestamp, reverse=True)
        return items[:limit]

    def list_for_date(self, day: date) -> Sequence[PunchEvent]:
        items = [p for p in self._items if p.timestamp.date() == day]
        items.sort(key=lambda p: p.timestamp, reverse=True)
        return items
