from __future__ import annotations

import asyncio
import logging
from typing import Callable, Coroutine, Optional

from ..core.constants import (
    CAMERA_FACING_USER,
    DEFAULT_CAMERA_HEIGHT,
    DEFAULT_CAMERA_WIDTH,
    DEFAULT_PUNCH_RESET_DELAY_SECONDS,
    HAVE_CURRENT_DATA,
)
from ..core.enums import MessageKind, PunchDirection, WorkflowStep
from ..core.exceptions import GeolocationUnsupported, InvalidTransitionError, NotFoundError
from ..devices.camera import CameraCapture, VideoStream
from ..devices.geolocation import Geolocation
from ..devices.imaging import capture_still
from ..employees.model import Employee
from ..employees.service import filter_roster
from ..punches.model import PunchEvent
from .ports import EmployeeRoster, PunchRegistration
from .state import WorkflowMessage, WorkflowSnapshot

logger = logging.getLogger(__name__)

CAMERA_ERROR_TEXT = (
    "Não foi possível aceder à webcam. Verifique se deu permissão de acesso e se o dispositivo está ligado."
)
CAMERA_UNAVAILABLE_TEXT = "Câmara indisponível."
LOCATION_FAILED_TEXT = "Localização não detetada. O registo será marcado sem coordenadas."
LOCATION_UNSUPPORTED_TEXT = "Geolocalização não suportada neste dispositivo."
ROSTER_FAILED_TEXT = "Não foi possível carregar a lista de colaboradores."
WAITING_FRAME_TEXT = "A aguardar sinal da câmara... Tente novamente em instantes."
SUBMITTING_TEXT = "A registar ponto e localização..."
SUBMIT_FAILED_TEXT = "Falha técnica no registo. Tente novamente."


class PunchWorkflow:
    """Assistente de registo de ponto: tipo de movimento -> colaborador -> captura.

    Every method must run on the event loop that owns the instance. Device
    failures never escape: they become advisory state (`message`,
    `camera_error`, `location_error`) and the user either retries or cancels.

    The camera stream is acquired when an employee is selected and stopped on
    cancel, on successful submission and on `close()`. A stream that shows up
    after its attempt was abandoned is stopped on arrival.
    """

    def __init__(
        self,
        *,
        camera: CameraCapture,
        geolocation: Geolocation,
        registration: PunchRegistration,
        roster: EmployeeRoster,
        reset_delay: float = DEFAULT_PUNCH_RESET_DELAY_SECONDS,
        ideal_width: int = DEFAULT_CAMERA_WIDTH,
        ideal_height: int = DEFAULT_CAMERA_HEIGHT,
        frame_encoder: Callable[[VideoStream], str] = capture_still,
    ):
        self._camera = camera
        self._geolocation = geolocation
        self._registration = registration
        self._roster = roster
        self._reset_delay = float(reset_delay)
        self._ideal_width = int(ideal_width)
        self._ideal_height = int(ideal_height)
        self._frame_encoder = frame_encoder

        self._employees: list[Employee] = []
        self._acquisitions: set[asyncio.Task] = set()
        self._reset_handle: Optional[asyncio.TimerHandle] = None
        # Bumped on every select/cancel; late device results from an older attempt are dropped.
        self._attempt = 0
        self._processing = False
        self._last_punch: Optional[PunchEvent] = None
        self._clear()

    def _clear(self) -> None:
        self._step = WorkflowStep.SELECT_DIRECTION
        self._direction: Optional[PunchDirection] = None
        self._employee: Optional[Employee] = None
        self._stream: Optional[VideoStream] = None
        self._location = None
        self._location_error: Optional[str] = None
        self._camera_error: Optional[str] = None
        self._message: Optional[WorkflowMessage] = None
        self._search_term = ""

    @property
    def step(self) -> WorkflowStep:
        return self._step

    @property
    def stream(self) -> Optional[VideoStream]:
        return self._stream

    @property
    def can_confirm(self) -> bool:
        return self._step == WorkflowStep.CAPTURING and self._stream is not None and not self._processing

    @property
    def reset_pending(self) -> bool:
        return self._reset_handle is not None

    @property
    def filtered_employees(self) -> list[Employee]:
        return filter_roster(self._employees, self._search_term)

    # --- step 1 ---------------------------------------------------------

    async def start(self, direction: PunchDirection) -> None:
        self._require_step(WorkflowStep.SELECT_DIRECTION, "Já existe um registo em curso")
        direction = PunchDirection(direction)

        try:
            employees = await self._roster.list_employees()
        except Exception:
            logger.exception("Roster load failed")
            self._message = WorkflowMessage(MessageKind.ERROR, ROSTER_FAILED_TEXT)
            return

        # Another start may have won while the roster was loading.
        self._require_step(WorkflowStep.SELECT_DIRECTION, "Já existe um registo em curso")
        self._employees = list(employees)
        self._direction = direction
        self._search_term = ""
        self._message = None
        self._step = WorkflowStep.SELECT_EMPLOYEE

    # --- step 2 ---------------------------------------------------------

    def set_search_term(self, term: str) -> None:
        self._require_step(WorkflowStep.SELECT_EMPLOYEE, "Selecione primeiro o tipo de movimento")
        self._search_term = term or ""

    def select_employee(self, employee: Employee) -> None:
        self._require_step(WorkflowStep.SELECT_EMPLOYEE, "Selecione primeiro o tipo de movimento")

        self._employee = employee
        self._step = WorkflowStep.CAPTURING
        self._camera_error = None
        self._location_error = None
        self._location = None
        self._message = None

        self._attempt += 1
        self._spawn(self._acquire_camera(self._attempt))
        self._spawn(self._acquire_location(self._attempt))

    def select_employee_by_id(self, employee_id: str) -> Employee:
        self._require_step(WorkflowStep.SELECT_EMPLOYEE, "Selecione primeiro o tipo de movimento")
        employee = next((e for e in self._employees if e.employee_id == employee_id), None)
        if employee is None:
            raise NotFoundError("Colaborador não encontrado")
        self.select_employee(employee)
        return employee

    def _spawn(self, coro: Coroutine) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._acquisitions.add(task)
        task.add_done_callback(self._acquisitions.discard)

    async def _acquire_camera(self, attempt: int) -> None:
        try:
            stream = await self._camera.acquire_stream(
                facing=CAMERA_FACING_USER,
                ideal_width=self._ideal_width,
                ideal_height=self._ideal_height,
            )
        except Exception as exc:
            logger.warning("Camera acquisition failed: %s", exc)
            if attempt == self._attempt:
                self._camera_error = CAMERA_ERROR_TEXT
                self._message = WorkflowMessage(MessageKind.ERROR, CAMERA_UNAVAILABLE_TEXT)
            return

        if attempt != self._attempt:
            self._camera.stop_stream(stream)
            return
        self._stream = stream

    async def _acquire_location(self, attempt: int) -> None:
        try:
            position = await self._geolocation.get_current_position()
        except GeolocationUnsupported:
            error_text = LOCATION_UNSUPPORTED_TEXT
        except Exception as exc:
            logger.warning("Geolocation failed: %s", exc)
            error_text = LOCATION_FAILED_TEXT
        else:
            if attempt == self._attempt:
                self._location = position
            return

        if attempt == self._attempt:
            self._location_error = error_text

    async def settle(self) -> None:
        """Wait until pending camera/location acquisitions have finished."""
        while self._acquisitions:
            await asyncio.gather(*list(self._acquisitions), return_exceptions=True)

    # --- step 3 ---------------------------------------------------------

    async def confirm_capture(self) -> Optional[PunchEvent]:
        if not self.can_confirm:
            return None

        stream = self._stream
        if stream.ready_state < HAVE_CURRENT_DATA:
            self._message = WorkflowMessage(MessageKind.INFO, WAITING_FRAME_TEXT)
            return None

        attempt = self._attempt
        employee = self._employee
        direction = self._direction
        location = self._location

        self._processing = True
        self._step = WorkflowStep.SUBMITTING
        self._message = WorkflowMessage(MessageKind.INFO, SUBMITTING_TEXT)
        try:
            image_data = await asyncio.to_thread(self._frame_encoder, stream)
            punch = await self._registration.submit(
                employee.employee_id,
                image_data,
                direction,
                location.latitude if location else None,
                location.longitude if location else None,
            )
        except Exception:
            logger.exception("Punch registration failed for employee %s", employee.employee_id)
            if attempt == self._attempt:
                self._step = WorkflowStep.CAPTURING
                self._message = WorkflowMessage(MessageKind.ERROR, SUBMIT_FAILED_TEXT)
            return None
        finally:
            self._processing = False

        self._last_punch = punch
        if attempt != self._attempt:
            # Cancelled while the submission was in flight; the punch still stands.
            return punch

        self._release_stream()
        self._step = WorkflowStep.COMPLETED
        self._message = WorkflowMessage(
            MessageKind.SUCCESS,
            f"{punch.direction.value} registada para {employee.name} às {punch.timestamp:%H:%M:%S}",
        )
        self._reset_handle = asyncio.get_running_loop().call_later(
            self._reset_delay, self._reset_after_success, attempt
        )
        return punch

    def _reset_after_success(self, attempt: int) -> None:
        self._reset_handle = None
        if attempt == self._attempt and self._step == WorkflowStep.COMPLETED:
            self.cancel()

    # --- exits ----------------------------------------------------------

    def cancel(self) -> None:
        self._release_stream()
        self._cancel_reset()
        self._attempt += 1
        self._clear()

    async def close(self) -> None:
        """Teardown: release everything, including streams still being opened."""
        self.cancel()
        await self.settle()

    def _release_stream(self) -> None:
        if self._stream is not None:
            self._camera.stop_stream(self._stream)
            self._stream = None

    def _cancel_reset(self) -> None:
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None

    def _require_step(self, expected: WorkflowStep, message: str) -> None:
        if self._step != expected:
            raise InvalidTransitionError(message)

    def snapshot(self) -> WorkflowSnapshot:
        return WorkflowSnapshot(
            step=self._step,
            direction=self._direction,
            employee=self._employee,
            stream_live=self._stream is not None,
            can_confirm=self.can_confirm,
            processing=self._processing,
            location=self._location,
            location_error=self._location_error,
            camera_error=self._camera_error,
            message=self._message,
            last_punch=self._last_punch,
            search_term=self._search_term,
        )
