from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.reconciler import AutoClockOutReconciler
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import (
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_MATCH_THRESHOLD,
    DEFAULT_ORACLE_TIMEOUT_SECONDS,
    DEFAULT_TIMEZONE,
)
from .core.enums import ZoneSelection
from .database.connection import DBConfig, DatabaseConnection
from .geofence.evaluator import GeoFenceEvaluator, policy_for
from .geofence.mysql_location_repository import MySQLLocationRepository
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .payroll.service import WorkHoursService
from .policy.mysql_config_repository import MySQLConfigRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService
from .verification.gate import IdentityVerificationGate
from .verification.oracle import HttpComparisonOracle


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository

    auth_service: AuthService
    attendance_service: AttendanceService
    reconciler: AutoClockOutReconciler
    hours_service: WorkHoursService


def build_container(*, db_config: dict, settings: ModuleType | None = None) -> Container:
    def setting(name: str, default=None):
        return getattr(settings, name, default) if settings is not None else default

    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    users_repo = MySQLUserRepository(conn)
    locations_repo = MySQLLocationRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    notifications_repo = MySQLNotificationRepository(conn)
    config_repo = MySQLConfigRepository(conn, default_timezone=setting("COMPANY_TIMEZONE", DEFAULT_TIMEZONE))

    oracle = HttpComparisonOracle(
        setting("FACE_ORACLE_URL", "http://localhost:8500"),
        api_key=setting("FACE_ORACLE_API_KEY"),
        timeout=float(setting("FACE_ORACLE_TIMEOUT_SECONDS", DEFAULT_ORACLE_TIMEOUT_SECONDS)),
    )
    gate = IdentityVerificationGate(oracle, threshold=float(setting("FACE_MATCH_THRESHOLD", DEFAULT_MATCH_THRESHOLD)))
    geofence = GeoFenceEvaluator(policy_for(setting("ZONE_SELECTION", ZoneSelection.FIRST.value)))
    reconciler = AutoClockOutReconciler(attendance_repo, config_repo)

    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        locations_repo,
        config_repo,
        gate,
        notifications_repo,
        geofence=geofence,
        strategy_factory=AttendanceStrategyFactory(),
        reconciler=reconciler,
        grace_minutes=int(setting("LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES)),
        default_admin_recipient_id=setting("DEFAULT_ADMIN_RECIPIENT_ID"),
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        attendance_service=attendance_service,
        reconciler=reconciler,
        hours_service=WorkHoursService(attendance_repo),
    )
