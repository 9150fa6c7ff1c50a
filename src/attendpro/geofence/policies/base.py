from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..model import GeofenceMatch


class ZoneSelectionPolicy(ABC):
    """Strategy Pattern: pick one zone when the point lies inside several."""

    @abstractmethod
    def select(self, candidates: Sequence[GeofenceMatch]) -> Optional[GeofenceMatch]:
        """``candidates`` are the matching zones, in input order."""

        raise NotImplementedError
