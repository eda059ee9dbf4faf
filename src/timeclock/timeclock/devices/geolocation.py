from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from ..core.exceptions import GeolocationUnsupported


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float


class Geolocation(Protocol):
    async def get_current_position(self) -> Position:
        raise NotImplementedError


class FixedGeolocation:
    """Kiosk position taken from settings; unsupported when not configured."""

    def __init__(self, latitude: Optional[float] = None, longitude: Optional[float] = None):
        self._latitude = latitude
        self._longitude = longitude

    async def get_current_position(self) -> Position:
        if self._latitude is None or self._longitude is None:
            raise GeolocationUnsupported("Geolocalização não configurada neste posto")
        return Position(latitude=float(self._latitude), longitude=float(self._longitude))
