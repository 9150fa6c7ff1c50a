from __future__ import annotations

from typing import Optional, Sequence

from ..model import GeofenceMatch
from .base import ZoneSelectionPolicy


class NearestMatchPolicy(ZoneSelectionPolicy):
    """Closest zone center wins; equal distances keep configured order."""

    def select(self, candidates: Sequence[GeofenceMatch]) -> Optional[GeofenceMatch]:
        if not candidates:
            return None
        return min(candidates, key=lambda m: m.distance_m)
