from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Interface do repositório de colaboradores.

    Nota: os serviços dependem desta interface e não de um backend concreto.
    """

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

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
        raise NotImplementedError

    def set_active(self, employee_id: str, *, active: bool) -> bool:
        raise NotImplementedError

    def set_biometric_reference(self, employee_id: str, reference: str) -> bool:
        raise NotImplementedError
