from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import at_time_of_day, now_local
from ..core.enums import ClosedBy
from ..policy.repository import ConfigProvider
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def auto_close_time(work_date: date, *, now: datetime, clock_out_time: time) -> Optional[datetime]:
    """When an open session dated ``work_date`` should have ended, or None if it may stay open.

    Stale days close at their own official clock-out; today closes at today's
    official clock-out once that instant has passed.
    """

    today = now.date()
    if work_date < today:
        return at_time_of_day(work_date, clock_out_time)
    if work_date == today:
        cutoff = at_time_of_day(today, clock_out_time)
        if now > cutoff:
            return cutoff
    return None


@dataclass
class SweepReport:
    closed: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)
    aborted: bool = False

    def to_dict(self) -> dict:
        return {
            "closed": list(self.closed),
            "skipped": list(self.skipped),
            "failed": list(self.failed),
            "aborted": self.aborted,
        }


class AutoClockOutReconciler:
    """Force-closes sessions left open past the official clock-out.

    Best effort: nothing raised out of ``sweep``; every failure is logged and
    counted. Safe to run on any cadence and concurrently with manual clock-outs.
    """

    def __init__(self, attendance: AttendanceRepository, config: ConfigProvider):
        self._attendance = attendance
        self._config = config

    def sweep(self, *, now: datetime | None = None) -> SweepReport:
        report = SweepReport()
        try:
            config = self._config.get_system_config()
            now = now or now_local(config.timezone)
            open_records = list(self._attendance.list_open())
        except Exception:
            logger.exception("Auto clock-out sweep aborted: could not load config or open sessions")
            report.aborted = True
            return report

        for record in open_records:
            try:
                self._reconcile(record, now=now, clock_out_time=config.official_clock_out_time, report=report)
            except Exception:
                logger.exception("Auto clock-out failed for attendance_id=%s (user %s)", record.attendance_id, record.user_id)
                report.failed.append(record.attendance_id)

        if report.closed or report.failed:
            logger.info(
                "Auto clock-out sweep: closed=%d skipped=%d failed=%d",
                len(report.closed),
                len(report.skipped),
                len(report.failed),
            )
        return report

    def close_stale(self, record: AttendanceRecord, *, now: datetime, clock_out_time: time) -> bool:
        """Close ``record`` if it is due; True when this call closed it."""

        close_at = auto_close_time(record.work_date, now=now, clock_out_time=clock_out_time)
        if close_at is None:
            return False

        # A session opened after the cutoff still gets clock_out >= clock_in.
        close_at = max(close_at, record.clock_in)
        return self._attendance.close_if_open(
            attendance_id=record.attendance_id,
            clock_out=close_at,
            closed_by=ClosedBy.AUTO,
        )

    def _reconcile(self, record: AttendanceRecord, *, now: datetime, clock_out_time: time, report: SweepReport) -> None:
        if auto_close_time(record.work_date, now=now, clock_out_time=clock_out_time) is None:
            return

        if self.close_stale(record, now=now, clock_out_time=clock_out_time):
            logger.info("Auto-terminated attendance_id=%s for user %s (%s)", record.attendance_id, record.user_id, record.work_date)
            report.closed.append(record.attendance_id)
        else:
            # Closed by the user between our read and our write.
            report.skipped.append(record.attendance_id)
