from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import BIOMETRIC_REGISTERED, DEFAULT_VACATION_BALANCE_DAYS
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def filter_roster(employees: Iterable[Employee], term: str) -> list[Employee]:
    """Case-insensitive substring match on name OR job title."""
    needle = (term or "").casefold()
    return [e for e in employees if needle in e.name.casefold() or needle in e.job_title.casefold()]


class EmployeeService:
    """Use case: gestão de colaboradores (RH)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self, *, only_active: bool = False) -> Sequence[Employee]:
        items = list(self._employees.list_all())
        if only_active:
            items = [e for e in items if e.active]
        return items

    def get(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Colaborador não existe")
        return employee

    def add_employee(
        self,
        *,
        name: str,
        email: str,
        job_title: str,
        department: str,
        photo_url: Optional[str] = None,
    ) -> Employee:
        name = require_non_empty(name, "Nome")
        job_title = require_non_empty(job_title, "Cargo")
        email = (email or "").strip()
        department = (department or "").strip()

        employee = self._employees.create(
            name=name,
            email=email,
            job_title=job_title,
            department=department,
            vacation_balance=DEFAULT_VACATION_BALANCE_DAYS,
            photo_url=(photo_url or "").strip() or None,
        )
        logger.info("Employee %s onboarded (%s)", employee.employee_id, employee.name)
        return employee

    def toggle_status(self, employee_id: str) -> Employee:
        employee = self.get(employee_id)
        if not self._employees.set_active(employee_id, active=not employee.active):
            raise ValidationError("Falha ao atualizar o estado do colaborador")
        return self.get(employee_id)

    def register_biometrics(self, employee_id: str, image_data: str) -> Employee:
        """Store the opaque marker saying a face photo was registered.

        The photo itself is not kept nor analysed.
        """
        employee = self.get(employee_id)
        require_non_empty(image_data, "Fotografia")
        if not self._employees.set_biometric_reference(employee.employee_id, BIOMETRIC_REGISTERED):
            raise ValidationError("Falha ao registar biometria")
        return self.get(employee_id)
