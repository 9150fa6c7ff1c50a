from __future__ import annotations

import json
import logging

from ..core.constants import DEFAULT_TIMEZONE, SYSTEM_CONFIG_ID
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SystemConfig
from .repository import ConfigProvider

logger = logging.getLogger(__name__)


class MySQLConfigRepository(ConfigProvider):
    """Reads the singleton ``system_config`` row.

    ``default_timezone`` is the company zone from settings; the stored document
    may override it.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, default_timezone: str = DEFAULT_TIMEZONE):
        self._conn_factory = conn_factory
        self._default_timezone = default_timezone

    def get_system_config(self) -> SystemConfig:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT config FROM system_config WHERE id=%s", (SYSTEM_CONFIG_ID,))
            row = fetchone(cur)

        if not row:
            logger.warning("system_config row %r missing; using defaults", SYSTEM_CONFIG_ID)
            return SystemConfig(timezone=self._default_timezone)

        raw = row["config"]
        doc = json.loads(raw) if isinstance(raw, (str, bytes, bytearray)) else (raw or {})
        return SystemConfig.from_document(doc, default_timezone=self._default_timezone)
