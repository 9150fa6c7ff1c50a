from __future__ import annotations

from typing import Optional, Sequence

from ..model import GeofenceMatch
from .base import ZoneSelectionPolicy


class FirstMatchPolicy(ZoneSelectionPolicy):
    """First matching zone in configured order wins."""

    def select(self, candidates: Sequence[GeofenceMatch]) -> Optional[GeofenceMatch]:
        return candidates[0] if candidates else None
