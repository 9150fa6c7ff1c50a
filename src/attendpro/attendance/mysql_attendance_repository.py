from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ClosedBy, Role, VerificationMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, user_id, user_name, role, work_date, clock_in, clock_out,
    latitude, longitude, verification_method, verification_artifact, confidence,
    is_late, closed_by, matched_location_id
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        user_name=r["user_name"],
        role=Role(r["role"]),
        work_date=r["work_date"],
        clock_in=r["clock_in"],
        clock_out=r.get("clock_out"),
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        verification_method=VerificationMethod(r.get("verification_method") or VerificationMethod.NONE.value),
        verification_artifact=r.get("verification_artifact"),
        confidence=float(r["confidence"]) if r.get("confidence") is not None else None,
        is_late=bool(r.get("is_late")),
        closed_by=ClosedBy(r["closed_by"]) if r.get("closed_by") else None,
        matched_location_id=r.get("matched_location_id"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND clock_out IS NULL
                ORDER BY work_date DESC
                LIMIT 1
                """,
                (user_id,),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_open(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE clock_out IS NULL
                ORDER BY work_date ASC, attendance_id ASC
                """
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_range(self, *, start_date: date, end_date: date, user_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {" AND ".join(clauses)}
                ORDER BY work_date DESC, user_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        # uq_attendance_user_date turns a concurrent double submit into DuplicateSessionConflict.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    user_id, user_name, role, work_date, clock_in, latitude, longitude,
                    verification_method, verification_artifact, confidence, is_late, matched_location_id
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user_id,
                    user_name,
                    role.value,
                    work_date,
                    clock_in,
                    latitude,
                    longitude,
                    verification_method.value,
                    verification_artifact,
                    confidence,
                    int(bool(is_late)),
                    matched_location_id,
                ),
            )
            return int(cur.lastrowid)

    def close_if_open(self, *, attendance_id: int, clock_out: datetime, closed_by: ClosedBy) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_out=%s, closed_by=%s
                WHERE attendance_id=%s AND clock_out IS NULL
                """,
                (clock_out, closed_by.value, int(attendance_id)),
            )
            return cur.rowcount > 0
