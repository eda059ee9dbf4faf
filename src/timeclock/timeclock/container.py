from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .access.memory_access_repository import InMemoryAccessControlRepository
from .access.service import AccessControlService
from .core.constants import (
    DEFAULT_CAMERA_HEIGHT,
    DEFAULT_CAMERA_WIDTH,
    DEFAULT_INACTIVITY_TIMEOUT_SECONDS,
    DEFAULT_PUNCH_RESET_DELAY_SECONDS,
)
from .core.enums import UserRole
from .devices.camera import CameraCapture, OpenCVCamera
from .devices.geolocation import FixedGeolocation, Geolocation
from .employees.memory_employee_repository import InMemoryEmployeeRepository
from .employees.service import EmployeeService
from .leave.memory_leave_repository import InMemoryAbsenceRepository, InMemoryVacationRepository
from .leave.service import LeaveService
from .punches.memory_punch_repository import InMemoryPunchRepository
from .punches.service import PunchHistoryService, PunchRegistrationService
from .seed import DEMO_ABSENCES, DEMO_EMPLOYEES, DEMO_VACATIONS
from .session.inactivity_lock import InactivityLock
from .workflow.ports import PunchRegistration, ServicePunchRegistration, ServiceRoster
from .workflow.punch_workflow import PunchWorkflow
from .workflow.runtime import KioskRuntime


@dataclass(frozen=True)
class Container:
    runtime: KioskRuntime

    employees_repo: InMemoryEmployeeRepository
    punches_repo: InMemoryPunchRepository
    absences_repo: InMemoryAbsenceRepository
    vacations_repo: InMemoryVacationRepository
    acl_repo: InMemoryAccessControlRepository

    employee_service: EmployeeService
    punch_registration_service: PunchRegistrationService
    punch_history_service: PunchHistoryService
    leave_service: LeaveService
    access_service: AccessControlService

    workflow: PunchWorkflow
    session_lock: InactivityLock
    default_role: UserRole

    def shutdown(self) -> None:
        async def _teardown() -> None:
            self.session_lock.stop()
            await self.workflow.close()

        self.runtime.stop(cleanup=_teardown)


def build_container(
    *,
    settings: Any,
    camera: Optional[CameraCapture] = None,
    geolocation: Optional[Geolocation] = None,
    registration: Optional[PunchRegistration] = None,
) -> Container:
    """Wire repositories, services and the kiosk workflow.

    `settings` is a settings module (or any object with the same attributes).
    Devices can be injected; by default the local webcam and the configured
    kiosk coordinates are used.
    """
    seed = bool(getattr(settings, "SEED_DEMO_DATA", True))

    employees_repo = InMemoryEmployeeRepository(DEMO_EMPLOYEES if seed else ())
    punches_repo = InMemoryPunchRepository()
    absences_repo = InMemoryAbsenceRepository(DEMO_ABSENCES if seed else ())
    vacations_repo = InMemoryVacationRepository(DEMO_VACATIONS if seed else ())
    acl_repo = InMemoryAccessControlRepository()

    employee_service = EmployeeService(employees_repo)
    punch_registration_service = PunchRegistrationService(punches_repo, employees_repo)
    punch_history_service = PunchHistoryService(punches_repo)
    leave_service = LeaveService(absences_repo, vacations_repo, employees_repo)
    access_service = AccessControlService(acl_repo)

    if camera is None:
        camera = OpenCVCamera(getattr(settings, "CAMERA_INDEX", 0))
    if geolocation is None:
        geolocation = FixedGeolocation(
            getattr(settings, "KIOSK_LATITUDE", None),
            getattr(settings, "KIOSK_LONGITUDE", None),
        )
    if registration is None:
        registration = ServicePunchRegistration(punch_registration_service)

    workflow = PunchWorkflow(
        camera=camera,
        geolocation=geolocation,
        registration=registration,
        roster=ServiceRoster(employee_service),
        reset_delay=float(getattr(settings, "PUNCH_RESET_DELAY_SECONDS", DEFAULT_PUNCH_RESET_DELAY_SECONDS)),
        ideal_width=int(getattr(settings, "CAMERA_IDEAL_WIDTH", DEFAULT_CAMERA_WIDTH)),
        ideal_height=int(getattr(settings, "CAMERA_IDEAL_HEIGHT", DEFAULT_CAMERA_HEIGHT)),
    )
    session_lock = InactivityLock(
        timeout=float(getattr(settings, "INACTIVITY_TIMEOUT_SECONDS", DEFAULT_INACTIVITY_TIMEOUT_SECONDS)),
    )

    runtime = KioskRuntime().start()
    # Locking the kiosk abandons any punch in progress and frees the webcam.
    session_lock.add_listener(workflow.cancel)
    runtime.call(session_lock.start)

    return Container(
        runtime=runtime,
        employees_repo=employees_repo,
        punches_repo=punches_repo,
        absences_repo=absences_repo,
        vacations_repo=vacations_repo,
        acl_repo=acl_repo,
        employee_service=employee_service,
        punch_registration_service=punch_registration_service,
        punch_history_service=punch_history_service,
        leave_service=leave_service,
        access_service=access_service,
        workflow=workflow,
        session_lock=session_lock,
        default_role=UserRole(getattr(settings, "DEFAULT_ROLE", UserRole.ADMIN.value)),
    )
