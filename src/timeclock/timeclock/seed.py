"""Demo data loaded into the in-memory repositories."""
from __future__ import annotations

from datetime import date

from .core.enums import AbsenceKind, ApprovalStatus
from .employees.model import Employee
from .leave.model import Absence, VacationRequest

DEMO_EMPLOYEES = (
    Employee(
        employee_id="c1",
        name="João Operário",
        email="joao@mdv.ao",
        job_title="Operador de Máquinas",
        department="Produção",
        vacation_balance=22,
    ),
    Employee(
        employee_id="c2",
        name="Maria Silva",
        email="maria@mdv.ao",
        job_title="Assistente RH",
        department="Recursos Humanos",
        vacation_balance=15,
    ),
    Employee(
        employee_id="c3",
        name="António Motorista",
        email="antonio@mdv.ao",
        job_title="Logística",
        department="Logística",
        vacation_balance=5,
    ),
)

DEMO_ABSENCES = (
    Absence(
        absence_id="a1",
        employee_id="c1",
        employee_name="João Operário",
        start_date=date(2024, 3, 10),
        end_date=date(2024, 3, 12),
        kind=AbsenceKind.SICKNESS,
        reason="Gripe",
        status=ApprovalStatus.APPROVED,
    ),
)

DEMO_VACATIONS = (
    VacationRequest(
        request_id="f1",
        employee_id="c2",
        employee_name="Maria Silva",
        start_date=date(2024, 8, 1),
        end_date=date(2024, 8, 15),
        working_days=10,
        status=ApprovalStatus.PENDING,
        notes="Férias de Verão",
    ),
)
