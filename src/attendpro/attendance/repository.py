from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ClosedBy, Role, VerificationMethod
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceRecord]:
        """Most recent record of the user without a clock-out."""

        raise NotImplementedError

    def list_open(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_range(self, *, start_date: date, end_date: date, user_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: int,
        user_name: str,
        role: Role,
        work_date: date,
        clock_in: datetime,
        latitude: float,
        longitude: float,
        verification_method: VerificationMethod,
        verification_artifact: Optional[str],
        confidence: Optional[float],
        is_late: bool,
        matched_location_id: Optional[int] = None,
    ) -> int:
        """Insert an OPEN record; raise ``DuplicateSessionConflict`` if (user, date) exists."""

        raise NotImplementedError

    def close_if_open(self, *, attendance_id: int, clock_out: datetime, closed_by: ClosedBy) -> bool:
        """Conditional update: set clock_out only while it is still NULL.

        Returns False when the record was already closed (or does not exist).
        """

        raise NotImplementedError
