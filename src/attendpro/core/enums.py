from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization and attendance policy."""

    BOSS = "BOSS"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class VerificationMethod(str, Enum):
    """How the identity of the user was confirmed at clock-in."""

    FACE = "FACE"
    FINGERPRINT = "FINGERPRINT"
    NONE = "NONE"


class ClosedBy(str, Enum):
    """Who closed an attendance session."""

    MANUAL = "MANUAL"
    AUTO = "AUTO"


class NotificationType(str, Enum):
    LATE_ARRIVAL = "LATE_ARRIVAL"


class ZoneSelection(str, Enum):
    """Tie-break when a point lies inside several geofence zones."""

    FIRST = "first"
    NEAREST = "nearest"
