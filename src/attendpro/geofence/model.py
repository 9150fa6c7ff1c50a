from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Location:
    """Authorized geofence zone: a circle of ``radius`` meters around a center."""

    location_id: int
    name: str
    latitude: float
    longitude: float
    radius: float
    created_by: Optional[int] = None

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)


@dataclass(frozen=True)
class GeofenceMatch:
    location: Location
    distance_m: float
