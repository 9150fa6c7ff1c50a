from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class LatenessDecision:
    is_late: bool
    note: Optional[str] = None


class CheckInStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide lateness at clock-in."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime, threshold: datetime) -> LatenessDecision:
        raise NotImplementedError
