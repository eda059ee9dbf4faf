from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_date_range, require_non_empty
from ..core.enums import AbsenceKind, ApprovalStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Absence, VacationRequest
from .repository import AbsenceRepository, VacationRepository

_DECISIONS = {ApprovalStatus.APPROVED, ApprovalStatus.REJECTED}


class LeaveService:
    """Use case: ausências e pedidos de férias (circuito de aprovação)."""

    def __init__(self, absences: AbsenceRepository, vacations: VacationRepository, employees: EmployeeRepository):
        self._absences = absences
        self._vacations = vacations
        self._employees = employees

    def list_absences(self, *, status: Optional[ApprovalStatus] = None) -> Sequence[Absence]:
        items = list(self._absences.list_all())
        if status:
            items = [a for a in items if a.status == status]
        return items

    def list_vacations(self, *, status: Optional[ApprovalStatus] = None) -> Sequence[VacationRequest]:
        items = list(self._vacations.list_all())
        if status:
            items = [v for v in items if v.status == status]
        return items

    def create_absence(
        self,
        *,
        employee_id: str,
        start_date: date,
        end_date: date,
        kind: AbsenceKind,
        reason: str,
        proof_url: Optional[str] = None,
    ) -> Absence:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Colaborador não existe")

        require_date_range(start_date, end_date)
        reason = require_non_empty(reason, "Motivo")

        return self._absences.create(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            start_date=start_date,
            end_date=end_date,
            kind=AbsenceKind(kind),
            reason=reason,
            proof_url=(proof_url or "").strip() or None,
        )

    def decide_absence(self, absence_id: str, status: ApprovalStatus) -> Absence:
        self._require_decision(status)
        absence = self._absences.get(absence_id)
        if not absence:
            raise NotFoundError("Ausência não existe")
        if absence.status != ApprovalStatus.PENDING:
            raise ValidationError("O pedido já foi processado")

        self._absences.set_status(absence_id, status)
        return self._absences.get(absence_id)

    def decide_vacation(self, request_id: str, status: ApprovalStatus) -> VacationRequest:
        self._require_decision(status)
        request = self._vacations.get(request_id)
        if not request:
            raise NotFoundError("Pedido de férias não existe")
        if request.status != ApprovalStatus.PENDING:
            raise ValidationError("O pedido já foi processado")

        self._vacations.set_status(request_id, status)
        return self._vacations.get(request_id)

    @staticmethod
    def _require_decision(status: ApprovalStatus) -> None:
        if ApprovalStatus(status) not in _DECISIONS:
            raise ValidationError("Decisão inválida")
