from __future__ import annotations

from datetime import datetime

from .base import CheckInStrategy, LatenessDecision


class LateStrategy(CheckInStrategy):
    """Late clock-in."""

    def decide_checkin(self, *, now: datetime, threshold: datetime) -> LatenessDecision:
        late_minutes = int((now - threshold).total_seconds() // 60)
        return LatenessDecision(is_late=True, note=f"Late by {late_minutes} min")
