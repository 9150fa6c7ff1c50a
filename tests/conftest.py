from __future__ import annotations

from datetime import datetime, time

import pytest
from werkzeug.security import generate_password_hash

from attendpro.attendance.reconciler import AutoClockOutReconciler
from attendpro.attendance.service import AttendanceService
from attendpro.core.enums import Role
from attendpro.policy.model import SystemConfig
from attendpro.policy.repository import StaticConfigProvider
from attendpro.users.model import User
from attendpro.verification.gate import IdentityVerificationGate
from attendpro.verification.oracle import OracleError

from tests.fakes import (
    OFFICE,
    FakeOracle,
    InMemoryAttendance,
    InMemoryLocations,
    InMemoryUsers,
    RecordingNotifications,
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 30, 0)


@pytest.fixture
def system_config() -> SystemConfig:
    return SystemConfig(official_clock_in_time=time(9, 0), official_clock_out_time=time(18, 0), company_name="Acme")


@pytest.fixture
def config_provider(system_config) -> StaticConfigProvider:
    return StaticConfigProvider(system_config)


@pytest.fixture
def users() -> InMemoryUsers:
    pw = generate_password_hash("pw")
    return InMemoryUsers(
        [
            User(user_id=1, name="Boss", username="boss", password_hash=pw, role=Role.BOSS),
            User(user_id=2, name="Mia Manager", username="mia", password_hash=pw, role=Role.MANAGER, manager_id=1),
            User(user_id=3, name="Eli Employee", username="eli", password_hash=pw, role=Role.EMPLOYEE, manager_id=2),
            User(user_id=4, name="Noa Newbie", username="noa", password_hash=pw, role=Role.EMPLOYEE),
        ]
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def notifications() -> RecordingNotifications:
    return RecordingNotifications()


@pytest.fixture
def oracle() -> FakeOracle:
    return FakeOracle()


@pytest.fixture
def service(attendance_repo, users, config_provider, oracle, notifications) -> AttendanceService:
    return AttendanceService(
        attendance_repo,
        users,
        InMemoryLocations([OFFICE]),
        config_provider,
        IdentityVerificationGate(oracle),
        notifications,
        default_admin_recipient_id=1,
    )


@pytest.fixture
def reconciler(attendance_repo, config_provider) -> AutoClockOutReconciler:
    return AutoClockOutReconciler(attendance_repo, config_provider)


@pytest.fixture
def oracle_down() -> FakeOracle:
    return FakeOracle(error=OracleError("connection refused"))
