from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..common.datetime_utils import at_time_of_day
from ..core.constants import PRIVILEGED_ROLES
from ..core.enums import Role
from .strategies.base import CheckInStrategy
from .strategies.exempt_strategy import ExemptStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(
        self,
        *,
        now: datetime,
        today: date,
        official_time: time,
        role: Role,
        grace_minutes: int = 0,
    ) -> CheckInStrategy:
        if role in PRIVILEGED_ROLES:
            return ExemptStrategy()

        # Strictly after the threshold is late; the threshold second itself is on time.
        if now <= self.threshold(today=today, official_time=official_time, grace_minutes=grace_minutes):
            return OnTimeStrategy()
        return LateStrategy()

    @staticmethod
    def threshold(*, today: date, official_time: time, grace_minutes: int = 0) -> datetime:
        return at_time_of_day(today, official_time) + timedelta(minutes=grace_minutes)
