from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from ..common.validators import require_coordinates
from ..core.exceptions import LocationAccessDenied
from .model import GeoPoint


class PositionProvider(Protocol):
    def get_current_position(self) -> GeoPoint:
        """Return the device position or raise ``LocationAccessDenied``."""

        raise NotImplementedError


@dataclass(frozen=True)
class FixedPosition:
    point: GeoPoint

    def get_current_position(self) -> GeoPoint:
        return self.point


_POSITION_ERRORS = {
    "PERMISSION_DENIED": "GPS fault: location permission denied.",
    "POSITION_UNAVAILABLE": "GPS fault: position unavailable.",
    "TIMEOUT": "GPS fault: position request timed out.",
}


@dataclass(frozen=True)
class ReportedPosition:
    """Position fix reported by the browser with the clock-in request.

    The browser geolocation API runs client side; the request carries either
    ``{"latitude", "longitude"}`` or the error code it produced.
    """

    coords: Optional[Mapping[str, Any]]
    error: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ReportedPosition":
        return cls(coords=payload.get("position"), error=payload.get("position_error"))

    def get_current_position(self) -> GeoPoint:
        if self.error:
            raise LocationAccessDenied(_POSITION_ERRORS.get(str(self.error).upper(), "GPS fault: location unavailable."))
        if not self.coords or self.coords.get("latitude") is None or self.coords.get("longitude") is None:
            raise LocationAccessDenied()
        lat, lon = require_coordinates(self.coords["latitude"], self.coords["longitude"])
        return GeoPoint(lat, lon)
