from __future__ import annotations

from dataclasses import replace
from itertools import count
from typing import Optional, Sequence

from .model import Employee


class InMemoryEmployeeRepository:
    """Process-memory roster; contents reset on restart."""

    def __init__(self, employees: Sequence[Employee] = ()):
        self._by_id: dict[str, Employee] = {e.employee_id: e for e in employees}
        self._ids = count(len(self._by_id) + 1)

    def list_all(self) -> Sequence[Employee]:
        return list(self._by_id.values())

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def create(
        self,
        *,
        name: str,
        email: str,
        job_title: str,
        department: str,
        vacation_balance: int,
        photo_url: Optional[str] = None,
    ) -> Employee:
        employee_id = f"c{next(self._ids)}"
        while employee_id in self._by_id:
            employee_id = f"c{next(self._ids)}"

        employee = Employee(
            employee_id=employee_id,
            name=name,
            email=email,
            job_title=job_title,
            department=department,
            vacation_balance=vacation_balance,
            active=True,
            photo_url=photo_url,
        )
        self._by_id[employee_id] = employee
        return employee

    def set_active(self, employee_id: str, *, active: bool) -> bool:
        current = self._by_id.get(employee_id)
        if not current:
            return False
        self._by_id[employee_id] = replace(current, active=active)
        return True

    def set_biometric_reference(self, employee_id: str, reference: str) -> bool:
        current = self._by_id.get(employee_id)
        if not current:
            return False
        self._by_id[employee_id] = replace(current, biometric_reference=reference)
        return True
