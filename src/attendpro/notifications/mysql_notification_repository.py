from __future__ import annotations

from datetime import datetime

from ..core.enums import NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .repository import NotificationSink


class MySQLNotificationRepository(NotificationSink):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def enqueue(self, *, recipient_id: int, message: str, type: NotificationType, timestamp: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(recipient_id, message, type, timestamp, `read`)
                VALUES(%s,%s,%s,%s,0)
                """,
                (int(recipient_id), message[:500], type.value, timestamp),
            )
            return int(cur.lastrowid)
