from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import MessageKind, PunchDirection, WorkflowStep
from ..devices.geolocation import Position
from ..employees.model import Employee
from ..punches.model import PunchEvent


@dataclass(frozen=True)
class WorkflowMessage:
    kind: MessageKind
    text: str


@dataclass(frozen=True)
class WorkflowSnapshot:
    """Read-only view of the wizard, rendered by the kiosk UI."""

    step: WorkflowStep
    direction: Optional[PunchDirection]
    employee: Optional[Employee]
    stream_live: bool
    can_confirm: bool
    processing: bool
    location: Optional[Position]
    location_error: Optional[str]
    camera_error: Optional[str]
    message: Optional[WorkflowMessage]
    last_punch: Optional[PunchEvent]
    search_term: str
