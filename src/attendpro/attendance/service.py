from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_hhmm, now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import ClosedBy, NotificationType, VerificationMethod
from ..core.exceptions import (
    BiometricMismatch,
    DuplicateSessionConflict,
    NoOpenSession,
    OutsideGeofence,
    ValidationError,
)
from ..geofence.evaluator import GeoFenceEvaluator
from ..geofence.position import PositionProvider
from ..geofence.repository import LocationRepository
from ..notifications.repository import NotificationSink
from ..policy.model import SystemConfig
from ..policy.repository import ConfigProvider
from ..users.model import User
from ..users.repository import UserRepository
from ..verification.gate import IdentityVerificationGate
from ..verification.model import ImageArtifact, VerificationArtifact, VerificationResult
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .reconciler import AutoClockOutReconciler
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance session lifecycle: NO_SESSION -> OPEN -> CLOSED, per user and day.

    Every check (identity, geofence) runs before anything is written, so a
    rejected clock-in leaves no trace.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        locations: LocationRepository,
        config: ConfigProvider,
        gate: IdentityVerificationGate,
        notifications: NotificationSink,
        *,
        geofence: GeoFenceEvaluator | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
        reconciler: AutoClockOutReconciler | None = None,
        grace_minutes: int = 0,
        default_admin_recipient_id: int | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._locations = locations
        self._config = config
        self._gate = gate
        self._notifications = notifications
        self._geofence = geofence or GeoFenceEvaluator()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._reconciler = reconciler or AutoClockOutReconciler(attendance, config)
        self._grace_minutes = int(grace_minutes)
        self._default_admin_recipient_id = default_admin_recipient_id

    def _require_user(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise ValidationError("Employee does not exist")
        return user

    def _close_previous_days(self, user_id: int, *, now: datetime, config: SystemConfig) -> None:
        open_record = self._attendance.get_open_for_user(user_id)
        if open_record and open_record.work_date < now.date():
            if self._reconciler.close_stale(open_record, now=now, clock_out_time=config.official_clock_out_time):
                logger.info("Closed stale session attendance_id=%s before new clock-in", open_record.attendance_id)

    def _resolve_existing(self, existing: AttendanceRecord) -> AttendanceRecord:
        if existing.is_open:
            logger.info("Repeated clock-in for user %s on %s ignored", existing.user_id, existing.work_date)
            return existing
        raise DuplicateSessionConflict("You have already completed attendance for today", existing=existing)

    def _verify(self, user: User, artifact: Optional[VerificationArtifact]) -> Optional[VerificationResult]:
        if artifact is None:
            return None

        enrolled = self._users.get_master_face(user.user_id) if isinstance(artifact, ImageArtifact) else None
        result = self._gate.verify(artifact, enrolled)
        if not result.passed:
            logger.info("Biometric mismatch for user %s (confidence %.1f)", user.user_id, result.confidence)
            raise BiometricMismatch(result.confidence)
        return result

    def clock_in(
        self,
        user_id: int,
        *,
        position_provider: PositionProvider,
        artifact: Optional[VerificationArtifact] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        user = self._require_user(user_id)
        config = self._config.get_system_config()
        now = now or now_local(config.timezone)
        today = now.date()

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing:
            return self._resolve_existing(existing)

        verification = self._verify(user, artifact)

        point = position_provider.get_current_position()
        match = self._geofence.is_within_any_zone(point, self._locations.list_all())
        if match is None and not user.is_privileged:
            logger.info("Clock-in rejected for user %s: outside geofence at (%.6f, %.6f)", user_id, point.latitude, point.longitude)
            raise OutsideGeofence()

        strategy = self._factory.for_checkin(
            now=now,
            today=today,
            official_time=config.official_clock_in_time,
            role=user.role,
            grace_minutes=self._grace_minutes,
        )
        threshold = self._factory.threshold(
            today=today, official_time=config.official_clock_in_time, grace_minutes=self._grace_minutes
        )
        decision = strategy.decide_checkin(now=now, threshold=threshold)

        # All checks passed; writes start here.
        self._close_previous_days(user_id, now=now, config=config)

        method = verification.method if verification else VerificationMethod.NONE
        stored_artifact = artifact.to_base64() if isinstance(artifact, ImageArtifact) else None
        confidence = verification.confidence if verification else None
        location_id = match.location.location_id if match else None

        try:
            attendance_id = self._attendance.create_checkin(
                user_id=user_id,
                user_name=user.name,
                role=user.role,
                work_date=today,
                clock_in=now,
                latitude=point.latitude,
                longitude=point.longitude,
                verification_method=method,
                verification_artifact=stored_artifact,
                confidence=confidence,
                is_late=decision.is_late,
                matched_location_id=location_id,
            )
        except DuplicateSessionConflict:
            # Lost a double-submit race; the other request created the session.
            existing = self._attendance.get_for_user_and_date(user_id, today)
            if existing is None:
                raise
            return self._resolve_existing(existing)

        if verification and verification.enrolled and isinstance(artifact, ImageArtifact):
            self._users.save_master_face(user_id, artifact.data)
            logger.info("Enrolled master face profile for user %s", user_id)

        record = AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            user_name=user.name,
            role=user.role,
            work_date=today,
            clock_in=now,
            clock_out=None,
            latitude=point.latitude,
            longitude=point.longitude,
            verification_method=method,
            verification_artifact=stored_artifact,
            confidence=confidence,
            is_late=decision.is_late,
            matched_location_id=location_id,
        )
        logger.info("User %s clocked in at %s (attendance id=%s, late=%s)", user_id, now.isoformat(), attendance_id, decision.is_late)

        if record.is_late:
            self._notify_late(user, record, config=config)
        return record

    def _notify_late(self, user: User, record: AttendanceRecord, *, config: SystemConfig) -> None:
        recipient = user.manager_id or self._default_admin_recipient_id
        if not recipient:
            logger.warning("Late arrival of user %s has no recipient to notify", user.user_id)
            return

        message = (
            f"LATE ALERT: Staff member {user.name} clocked in at {record.clock_in:%H:%M:%S} "
            f"(Official: {format_hhmm(config.official_clock_in_time)})."
        )
        if record.confidence is not None and record.verification_method == VerificationMethod.FACE:
            message += f" Face match confidence: {record.confidence:.0f}%."

        try:
            self._notifications.enqueue(
                recipient_id=recipient,
                message=message,
                type=NotificationType.LATE_ARRIVAL,
                timestamp=record.clock_in,
            )
        except Exception:
            # The session is already persisted; the alert is best effort.
            logger.exception("Failed to enqueue late notification for user %s", user.user_id)

    def clock_out(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        config = self._config.get_system_config()
        now = now or now_local(config.timezone)

        record = self._attendance.get_open_for_user(user_id)
        if record is None:
            today_record = self._attendance.get_for_user_and_date(user_id, now.date())
            if today_record and not today_record.is_open:
                return today_record
            raise NoOpenSession("You have not clocked in today")

        clock_out = max(now, record.clock_in)
        if not self._attendance.close_if_open(attendance_id=record.attendance_id, clock_out=clock_out, closed_by=ClosedBy.MANUAL):
            # The reconciler got there first; keep its closure.
            current = self._attendance.get_by_id(record.attendance_id)
            logger.info("Clock-out for attendance_id=%s found it already closed", record.attendance_id)
            return current or record

        logger.info("User %s clocked out at %s (attendance id=%s)", user_id, clock_out.isoformat(), record.attendance_id)
        return replace(record, clock_out=clock_out, closed_by=ClosedBy.MANUAL)

    def get_today_record(self, user_id: int, today: date) -> Optional[AttendanceRecord]:
        """Get today's attendance record for a user"""
        return self._attendance.get_for_user_and_date(user_id, today)

    def get_current_session(self, user_id: int) -> Optional[AttendanceRecord]:
        return self._attendance.get_open_for_user(user_id)

    def today(self) -> date:
        return now_local(self._config.get_system_config().timezone).date()

    def get_history_ui(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT):
        rows = self._attendance.get_recent_for_user(user_id, limit)
        return [self._to_ui(r) for r in rows]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        if r.is_open:
            status = "Open"
        elif r.closed_by == ClosedBy.AUTO:
            status = "Auto clock-out"
        else:
            status = "Closed"

        return {
            "date": r.work_date.strftime("%Y-%m-%d"),
            "clock_in": r.clock_in.strftime("%H:%M:%S"),
            "clock_out": r.clock_out.strftime("%H:%M:%S") if r.clock_out else "-",
            "status": status,
            "late": r.is_late,
            "method": r.verification_method.value,
        }
