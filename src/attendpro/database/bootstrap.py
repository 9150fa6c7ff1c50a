from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.constants import (
    DEFAULT_CLOCK_IN_TIME,
    DEFAULT_CLOCK_OUT_TIME,
    DEFAULT_COMPANY_NAME,
    SYSTEM_CONFIG_ID,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "attendpro")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_system_config(db_config: dict) -> None:
    """Create the global operational parameters row if it is missing."""

    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SELECT id FROM system_config WHERE id=%s", (SYSTEM_CONFIG_ID,))
        if cur.fetchone():
            return
        payload = {
            "officialClockInTime": DEFAULT_CLOCK_IN_TIME,
            "officialClockOutTime": DEFAULT_CLOCK_OUT_TIME,
            "companyName": DEFAULT_COMPANY_NAME,
        }
        cur.execute("INSERT INTO system_config(id, config) VALUES(%s, %s)", (SYSTEM_CONFIG_ID, json.dumps(payload)))
        conn.commit()
        logger.info("Initialized global operational parameters: %s", payload)
    finally:
        conn.close()


def ensure_demo_users(db_config: dict) -> None:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_user(name: str, username: str, password: str, role: str, manager_username: str | None) -> None:
            manager_id = None
            if manager_username:
                cur.execute("SELECT user_id FROM users WHERE username=%s", (manager_username,))
                row = cur.fetchone()
                manager_id = int(row["user_id"]) if row else None

            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET name=%s, password_hash=%s, role=%s, manager_id=%s, is_active=1
                    WHERE username=%s
                    """,
                    (name, password_hash, role, manager_id, username),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (name, username, password_hash, role, manager_id)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (name, username, password_hash, role, manager_id),
                )

        upsert_user("Boss Demo", "boss", "boss123", "BOSS", None)
        upsert_user("Manager Demo", "manager", "manager123", "MANAGER", "boss")
        upsert_user("Employee Demo", "employee", "employee123", "EMPLOYEE", "manager")

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
