from __future__ import annotations

import math
from typing import Optional, Sequence

from ..common.validators import require_coordinates
from ..core.constants import EARTH_RADIUS_METERS
from ..core.enums import ZoneSelection
from .model import GeofenceMatch, GeoPoint, Location
from .policies.base import ZoneSelectionPolicy
from .policies.first_match import FirstMatchPolicy
from .policies.nearest_match import NearestMatchPolicy


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points, in meters."""

    lat1, lon1 = math.radians(a.latitude), math.radians(a.longitude)
    lat2, lon2 = math.radians(b.latitude), math.radians(b.longitude)
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Clamp: rounding can push h a hair above 1 for antipodal points.
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(h))


def policy_for(selection: ZoneSelection | str) -> ZoneSelectionPolicy:
    if ZoneSelection(selection) == ZoneSelection.NEAREST:
        return NearestMatchPolicy()
    return FirstMatchPolicy()


class GeoFenceEvaluator:
    """Decides whether a point lies inside any authorized zone.

    Pure: always reports the match status. Whether a miss is fatal depends on
    the caller's role and is decided by the attendance service.
    """

    def __init__(self, policy: ZoneSelectionPolicy | None = None):
        self._policy = policy or FirstMatchPolicy()

    def matches(self, point: GeoPoint, zones: Sequence[Location]) -> list[GeofenceMatch]:
        require_coordinates(point.latitude, point.longitude)

        out: list[GeofenceMatch] = []
        for zone in zones:
            require_coordinates(zone.latitude, zone.longitude)
            distance = haversine_distance(point, zone.center)
            if distance <= zone.radius:
                out.append(GeofenceMatch(location=zone, distance_m=distance))
        return out

    def is_within_any_zone(self, point: GeoPoint, zones: Sequence[Location]) -> Optional[GeofenceMatch]:
        return self._policy.select(self.matches(point, zones))
