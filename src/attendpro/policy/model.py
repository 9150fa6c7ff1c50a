from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Any, Mapping

from ..common.datetime_utils import format_hhmm, parse_hhmm
from ..core.constants import (
    DEFAULT_CLOCK_IN_TIME,
    DEFAULT_CLOCK_OUT_TIME,
    DEFAULT_COMPANY_NAME,
    DEFAULT_TIMEZONE,
)


@dataclass(frozen=True)
class SystemConfig:
    """Company-wide operational parameters (owned by the admin screens)."""

    official_clock_in_time: time = field(default_factory=lambda: parse_hhmm(DEFAULT_CLOCK_IN_TIME))
    official_clock_out_time: time = field(default_factory=lambda: parse_hhmm(DEFAULT_CLOCK_OUT_TIME))
    company_name: str = DEFAULT_COMPANY_NAME
    timezone: str = DEFAULT_TIMEZONE

    @classmethod
    def from_document(cls, doc: Mapping[str, Any], *, default_timezone: str = DEFAULT_TIMEZONE) -> "SystemConfig":
        """Build from the stored JSON document (camelCase keys, missing keys use defaults)."""

        return cls(
            official_clock_in_time=parse_hhmm(doc.get("officialClockInTime") or DEFAULT_CLOCK_IN_TIME),
            official_clock_out_time=parse_hhmm(doc.get("officialClockOutTime") or DEFAULT_CLOCK_OUT_TIME),
            company_name=doc.get("companyName") or DEFAULT_COMPANY_NAME,
            timezone=doc.get("timezone") or default_timezone,
        )

    def to_document(self) -> dict:
        return {
            "officialClockInTime": format_hhmm(self.official_clock_in_time),
            "officialClockOutTime": format_hhmm(self.official_clock_out_time),
            "companyName": self.company_name,
            "timezone": self.timezone,
        }
