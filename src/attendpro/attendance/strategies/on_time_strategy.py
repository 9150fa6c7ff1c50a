from __future__ import annotations

from datetime import datetime

from .base import CheckInStrategy, LatenessDecision


class OnTimeStrategy(CheckInStrategy):
    """Clock-in at or before the official time."""

    def decide_checkin(self, *, now: datetime, threshold: datetime) -> LatenessDecision:
        return LatenessDecision(is_late=False)
