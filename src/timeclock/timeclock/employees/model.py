from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Entidade de domínio: Colaborador.

    Nota: objeto de dados puro (sem código de acesso a dados).
    """

    employee_id: str
    name: str
    email: str
    job_title: str
    department: str
    vacation_balance: int
    active: bool = True
    photo_url: Optional[str] = None
    biometric_reference: Optional[str] = None

    @property
    def has_biometrics(self) -> bool:
        return self.biometric_reference is not None
