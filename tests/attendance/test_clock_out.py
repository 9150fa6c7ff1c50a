from __future__ import annotations

from datetime import date, datetime

import pytest

from attendpro.core.enums import ClosedBy
from attendpro.core.exceptions import NoOpenSession

from tests.fakes import AT_OFFICE, make_record


def test_clock_out_closes_open_session(service, attendance_repo, fixed_now):
    opened = service.clock_in(3, position_provider=AT_OFFICE, now=fixed_now)

    closed = service.clock_out(3, now=datetime(2026, 2, 2, 17, 45))

    assert closed.attendance_id == opened.attendance_id
    assert closed.clock_out == datetime(2026, 2, 2, 17, 45)
    assert closed.closed_by == ClosedBy.MANUAL
    stored = attendance_repo.get_by_id(opened.attendance_id)
    assert stored.clock_out == closed.clock_out
    assert stored.clock_out >= stored.clock_in


def test_clock_out_without_session_raises(service, fixed_now):
    with pytest.raises(NoOpenSession, match="not clocked in"):
        service.clock_out(3, now=fixed_now)


def test_second_clock_out_is_noop(service, attendance_repo, fixed_now):
    service.clock_in(3, position_provider=AT_OFFICE, now=fixed_now)
    first = service.clock_out(3, now=datetime(2026, 2, 2, 17, 0))
    calls = attendance_repo.close_calls

    second = service.clock_out(3, now=datetime(2026, 2, 2, 17, 30))

    assert second.clock_out == first.clock_out
    assert attendance_repo.close_calls == calls


def test_clock_out_never_precedes_clock_in(service, attendance_repo):
    opened = service.clock_in(3, position_provider=AT_OFFICE, now=datetime(2026, 2, 2, 8, 30, 10))

    # Clock skew between requests must not produce a negative session.
    closed = service.clock_out(3, now=datetime(2026, 2, 2, 8, 30, 0))
    assert closed.clock_out == opened.clock_in


def test_clock_out_closes_session_opened_on_previous_day(service, attendance_repo):
    attendance_repo.add(make_record(attendance_id=9, work_date=date(2026, 2, 1), clock_in=datetime(2026, 2, 1, 22, 0)))

    closed = service.clock_out(3, now=datetime(2026, 2, 2, 2, 0))

    assert closed.attendance_id == 9
    assert closed.clock_out == datetime(2026, 2, 2, 2, 0)
    assert closed.closed_by == ClosedBy.MANUAL


def test_clock_out_losing_race_to_reconciler_keeps_auto_closure(service, attendance_repo):
    record = attendance_repo.add(make_record(attendance_id=11, work_date=date(2026, 2, 2)))
    original = attendance_repo.get_open_for_user

    def stale_read(user_id):
        # Reconciler closes the session right after our read.
        found = original(user_id)
        attendance_repo.close_if_open(
            attendance_id=record.attendance_id, clock_out=datetime(2026, 2, 2, 18, 0), closed_by=ClosedBy.AUTO
        )
        return found

    attendance_repo.get_open_for_user = stale_read

    result = service.clock_out(3, now=datetime(2026, 2, 2, 18, 5))

    assert result.closed_by == ClosedBy.AUTO
    assert result.clock_out == datetime(2026, 2, 2, 18, 0)


def test_history_ui_marks_status(service, attendance_repo, fixed_now):
    attendance_repo.add(
        make_record(
            attendance_id=1,
            work_date=date(2026, 1, 29),
            clock_out=datetime(2026, 1, 29, 18, 0),
            closed_by=ClosedBy.AUTO,
        )
    )
    attendance_repo.add(
        make_record(
            attendance_id=2,
            work_date=date(2026, 1, 30),
            clock_out=datetime(2026, 1, 30, 17, 0),
            closed_by=ClosedBy.MANUAL,
        )
    )
    service.clock_in(3, position_provider=AT_OFFICE, now=fixed_now)

    rows = service.get_history_ui(3)

    assert [r["status"] for r in rows] == ["Open", "Closed", "Auto clock-out"]
    assert rows[0]["clock_out"] == "-"
    assert rows[1]["method"] == "FINGERPRINT"
