from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AbsenceKind, ApprovalStatus


@dataclass(frozen=True)
class Absence:
    absence_id: str
    employee_id: str
    employee_name: str
    start_date: date
    end_date: date
    kind: AbsenceKind
    reason: str
    status: ApprovalStatus
    proof_url: Optional[str] = None


@dataclass(frozen=True)
class VacationRequest:
    request_id: str
    employee_id: str
    employee_name: str
    start_date: date
    end_date: date
    working_days: int
    status: ApprovalStatus
    notes: Optional[str] = None
