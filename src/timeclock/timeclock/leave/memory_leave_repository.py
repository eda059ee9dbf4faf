from __future__ import annotations

from dataclasses import replace
from datetime import date
from itertools import count
from typing import Optional, Sequence

from ..core.enums import AbsenceKind, ApprovalStatus
from .model import Absence, VacationRequest


class InMemoryAbsenceRepository:
    def __init__(self, absences: Sequence[Absence] = ()):
        self._by_id: dict[str, Absence] = {a.absence_id: a for a in absences}
        self._ids = count(len(self._by_id) + 1)

    def list_all(self) -> Sequence[Absence]:
        return sorted(self._by_id.values(), key=lambda a: a.start_date, reverse=True)

    def get(self, absence_id: str) -> Optional[Absence]:
        return self._by_id.get(absence_id)

    def create(
        self,
        *,
        employee_id: str,
        employee_name: str,
        start_date: date,
        end_date: date,
        kind: AbsenceKind,
        reason: str,
        proof_url: Optional[str] = None,
    ) -> Absence:
        absence_id = f"a{next(self._ids)}"
        while absence_id in self._by_id:
            absence_id = f"a{next(self._ids)}"

        absence = Absence(
            absence_id=absence_id,
            employee_id=employee_id,
            employee_name=employee_name,
            start_date=start_date,
            end_date=end_date,
            kind=kind,
            reason=reason,
            status=ApprovalStatus.PENDING,
            proof_url=proof_url,
        )
        self._by_id[absence_id] = absence
        return absence

    def set_status(self, absence_id: str, status: ApprovalStatus) -> bool:
        current = self._by_id.get(absence_id)
        if not current:
            return False
        self._by_id[absence_id] = replace(current, status=status)
        return True


class InMemoryVacationRepository:
    def __init__(self, requests: Sequence[VacationRequest] = ()):
        self._by_id: dict[str, VacationRequest] = {r.request_id: r for r in requests}

    def list_all(self) -> Sequence[VacationRequest]:
        return sorted(self._by_id.values(), key=lambda r: r.start_date, reverse=True)

    def get(self, request_id: str) -> Optional[VacationRequest]:
        return self._by_id.get(request_id)

    def set_status(self, request_id: str, status: ApprovalStatus) -> bool:
        current = self._by_id.get(request_id)
        if not current:
            return False
        self._by_id[request_id] = replace(current, status=status)
        return True
