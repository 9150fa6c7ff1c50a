from __future__ import annotations

from unittest.mock import MagicMock

import mysql.connector
import pytest
from mysql.connector import errorcode

from attendpro.core.exceptions import DuplicateSessionConflict, PersistenceFailure
from attendpro.database.mysql_base import db_cursor


def _factory():
    conn = MagicMock()
    cur = MagicMock()
    conn.cursor.return_value = cur
    factory = MagicMock()
    factory.connect.return_value = conn
    return factory, conn, cur


def test_commits_and_closes_on_success():
    factory, conn, cur = _factory()

    with db_cursor(factory) as (_, c):
        c.execute("SELECT 1")

    conn.commit.assert_called_once()
    conn.rollback.assert_not_called()
    cur.close.assert_called_once()
    conn.close.assert_called_once()


def test_duplicate_key_becomes_duplicate_session():
    factory, conn, cur = _factory()
    cur.execute.side_effect = mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)

    with pytest.raises(DuplicateSessionConflict):
        with db_cursor(factory) as (_, c):
            c.execute("INSERT ...")

    conn.rollback.assert_called_once()
    conn.close.assert_called_once()


def test_driver_error_becomes_persistence_failure():
    factory, conn, cur = _factory()
    cur.execute.side_effect = mysql.connector.ProgrammingError(msg="Table 'x' doesn't exist", errno=1146)

    with pytest.raises(PersistenceFailure) as exc:
        with db_cursor(factory) as (_, c):
            c.execute("SELECT * FROM x")

    assert "doesn't exist" in exc.value.cause
    conn.rollback.assert_called_once()


def test_connect_failure_becomes_persistence_failure():
    factory = MagicMock()
    factory.connect.side_effect = mysql.connector.InterfaceError(msg="Can't connect", errno=2003)

    with pytest.raises(PersistenceFailure, match="Can't connect"):
        with db_cursor(factory):
            pass


def test_other_exceptions_roll_back_and_propagate():
    factory, conn, _ = _factory()

    with pytest.raises(KeyError):
        with db_cursor(factory):
            raise KeyError("boom")

    conn.rollback.assert_called_once()
    conn.commit.assert_not_called()
