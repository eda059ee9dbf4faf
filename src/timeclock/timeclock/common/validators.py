from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} inválido")
    return value.strip()


def require_date_range(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("A data de fim não pode ser anterior à data de início")


def require_coordinates(latitude: Optional[float], longitude: Optional[float]) -> None:
    if (latitude is None) != (longitude is None):
        raise ValidationError("Coordenadas incompletas (latitude e longitude)")
    if latitude is None:
        return
    if not -90.0 <= float(latitude) <= 90.0 or not -180.0 <= float(longitude) <= 180.0:
        raise ValidationError("Coordenadas fora do intervalo válido")
