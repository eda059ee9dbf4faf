from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AbsenceKind, ApprovalStatus
from .model import Absence, VacationRequest


class AbsenceRepository(Protocol):
    def list_all(self) -> Sequence[Absence]:
        raise NotImplementedError

    def get(self, absence_id: str) -> Optional[Absence]:
        raise NotImplementedError

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
        raise NotImplementedError

    def set_status(self, absence_id: str, status: ApprovalStatus) -> bool:
        raise NotImplementedError


class VacationRepository(Protocol):
    def list_all(self) -> Sequence[VacationRequest]:
        raise NotImplementedError

    def get(self, request_id: str) -> Optional[VacationRequest]:
        raise NotImplementedError

    def set_status(self, request_id: str, status: ApprovalStatus) -> bool:
        raise NotImplementedError
