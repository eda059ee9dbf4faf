from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PunchDirection, PunchMethod


@dataclass(frozen=True)
class PunchEvent:
    """Entidade de domínio: Movimento de ponto (imutável)."""

    punch_id: str
    employee_id: str
    timestamp: datetime
    direction: PunchDirection
    method: PunchMethod
    confidence_score: Optional[float] = None
    image_data: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class DayStatistics:
    """Read-model para o resumo diário do relógio de ponto."""

    total_punches: int
    distinct_employees: int
    last_punch_at: Optional[datetime]
