from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso_or_none
from ..core.constants import FINGERPRINT_SENTINEL
from ..core.enums import ClosedBy, Role, VerificationMethod


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance session per (user, work date).

    OPEN while ``clock_out`` is None; CLOSED afterwards, and never reopened.
    ``verification_artifact`` is the base64 face capture for FACE sessions.
    """

    attendance_id: int
    user_id: int
    user_name: str
    role: Role
    work_date: date
    clock_in: datetime
    clock_out: Optional[datetime]
    latitude: float
    longitude: float
    verification_method: VerificationMethod = VerificationMethod.NONE
    verification_artifact: Optional[str] = None
    confidence: Optional[float] = None
    is_late: bool = False
    closed_by: Optional[ClosedBy] = None
    matched_location_id: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    def to_dict(self, *, include_artifact: bool = False) -> dict:
        out = {
            "id": self.attendance_id,
            "userId": self.user_id,
            "userName": self.user_name,
            "role": self.role.value,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "clockIn": iso_or_none(self.clock_in),
            "clockOut": iso_or_none(self.clock_out),
            "latitude": self.latitude,
            "longitude": self.longitude,
            "verificationMethod": self.verification_method.value,
            "confidence": self.confidence,
            "isLate": self.is_late,
            "closedBy": self.closed_by.value if self.closed_by else None,
            "matchedLocationId": self.matched_location_id,
        }
        if include_artifact:
            if self.verification_method == VerificationMethod.FINGERPRINT:
                out["selfieBase64"] = FINGERPRINT_SENTINEL
            else:
                out["selfieBase64"] = self.verification_artifact
        return out
