from __future__ import annotations

import logging
import random
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_coordinates, require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import PunchDirection, PunchMethod
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import DayStatistics, PunchEvent
from .repository import PunchRepository

logger = logging.getLogger(__name__)


def _require_limit(limit: int) -> int:
    limit = int(limit)
    if limit < 1:
        raise ValidationError("O limite tem de ser pelo menos 1")
    return limit


def simulated_confidence() -> float:
    # No face matching happens; the score only fills the display badge.
    return 0.94 + random.random() * 0.05


class PunchRegistrationService:
    """Use case: registar um movimento de ponto."""

    def __init__(
        self,
        punches: PunchRepository,
        employees: EmployeeRepository,
        *,
        confidence_source: Callable[[], float] = simulated_confidence,
        clock: Callable[[], datetime] = now_local,
    ):
        self._punches = punches
        self._employees = employees
        self._confidence_source = confidence_source
        self._clock = clock

    def register(
        self,
        *,
        employee_id: str,
        direction: PunchDirection,
        image_data: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        method: PunchMethod = PunchMethod.FACIAL,
    ) -> PunchEvent:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Colaborador não existe")
        if not employee.active:
            raise ValidationError("Colaborador inativo")

        require_coordinates(latitude, longitude)

        confidence = None
        if method == PunchMethod.FACIAL:
            image_data = require_non_empty(image_data, "Fotografia")
            confidence = float(self._confidence_source())

        punch = PunchEvent(
            punch_id=self._punches.next_id(),
            employee_id=employee.employee_id,
            timestamp=self._clock(),
            direction=PunchDirection(direction),
            method=method,
            confidence_score=confidence,
            image_data=image_data or None,
            latitude=None if latitude is None else float(latitude),
            longitude=None if longitude is None else float(longitude),
        )
        self._punches.add(punch)

        logger.info(
            "Punch %s registered: %s %s (%s)",
            punch.punch_id, employee.name, punch.direction.value, punch.method.value,
        )
        return punch


class PunchHistoryService:
    def __init__(self, punches: PunchRepository):
        self._punches = punches

    def list_recent(self, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[PunchEvent]:
        return self._punches.list_recent(_require_limit(limit))

    def list_for_employee(self, employee_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[PunchEvent]:
        return self._punches.list_for_employee(employee_id, _require_limit(limit))

    def day_statistics(self, day: date) -> DayStatistics:
        punches = self._punches.list_for_date(day)
        return DayStatistics(
            total_punches=len(punches),
            distinct_employees=len({p.employee_id for p in punches}),
            last_punch_at=max((p.timestamp for p in punches), default=None),
        )
