from __future__ import annotations

from .base import WorkHoursCalculator
from ...attendance.model import AttendanceRecord


class StandardWorkHoursCalculator(WorkHoursCalculator):
    """Standard rule: out - in, open sessions count 0, never below 0."""

    def worked_minutes(self, record: AttendanceRecord) -> int:
        if not record.clock_out:
            return 0
        minutes = int((record.clock_out - record.clock_in).total_seconds() // 60)
        return max(minutes, 0)
