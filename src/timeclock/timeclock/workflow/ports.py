from __future__ import annotations

import asyncio
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchDirection
from ..core.exceptions import DomainError, RegistrationServerError
from ..employees.model import Employee
from ..employees.service import EmployeeService
from ..punches.model import PunchEvent
from ..punches.service import PunchRegistrationService


class PunchRegistration(Protocol):
    async def submit(
        self,
        employee_id: str,
        image_data: str,
        direction: PunchDirection,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> PunchEvent:
        raise NotImplementedError


class EmployeeRoster(Protocol):
    async def list_employees(self) -> Sequence[Employee]:
        raise NotImplementedError


class ServiceRoster:
    """Roster read from the local employee service (active employees only)."""

    def __init__(self, employees: EmployeeService):
        self._employees = employees

    async def list_employees(self) -> Sequence[Employee]:
        return await asyncio.to_thread(self._employees.list_employees, only_active=True)


class ServicePunchRegistration:
    def __init__(self, registration: PunchRegistrationService):
        self._registration = registration

    async def submit(
        self,
        employee_id: str,
        image_data: str,
        direction: PunchDirection,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> PunchEvent:
        try:
            return await asyncio.to_thread(
                self._registration.register,
                employee_id=employee_id,
                direction=direction,
                image_data=image_data,
                latitude=latitude,
                longitude=longitude,
            )
        except DomainError as exc:
            raise RegistrationServerError(str(exc)) from exc
