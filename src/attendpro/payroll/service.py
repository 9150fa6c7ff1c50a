from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.exceptions import ValidationError
from .calculator.base import WorkHoursCalculator
from .calculator.standard_calculator import StandardWorkHoursCalculator


def _hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class WorkHoursService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[WorkHoursCalculator] = None,
    ):
        self._attendance = attendance
        self._calculator = calculator or StandardWorkHoursCalculator()

    def build_hours_report(
        self,
        *,
        start: date,
        end: date,
        user_id: Optional[int] = None,
    ) -> ReportData:
        if end < start:
            raise ValidationError("End date must not be before start date")

        records = self._attendance.get_range(start_date=start, end_date=end, user_id=user_id)

        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for r in records:
            minutes = self._calculator.worked_minutes(r)

            out_rows.append(
                {
                    "user_id": r.user_id,
                    "user_name": r.user_name,
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "clock_in": r.clock_in.strftime("%H:%M"),
                    "clock_out": r.clock_out.strftime("%H:%M") if r.clock_out else "-",
                    "worked_hours": _hhmm(minutes),
                    "is_late": r.is_late,
                    "closed_by": r.closed_by.value if r.closed_by else "",
                }
            )

            s = summary_map.get(r.user_id)
            if not s:
                s = {
                    "user_id": r.user_id,
                    "user_name": r.user_name,
                    "total_minutes": 0,
                    "late_days": 0,
                }
                summary_map[r.user_id] = s
            s["total_minutes"] += minutes
            s["late_days"] += int(r.is_late)

        summary = []
        for s in summary_map.values():
            summary.append(
                {
                    "user_id": s["user_id"],
                    "user_name": s["user_name"],
                    "total_minutes": int(s["total_minutes"]),
                    "total_hours": _hhmm(int(s["total_minutes"])),
                    "late_days": s["late_days"],
                }
            )

        summary.sort(key=lambda x: x["total_minutes"], reverse=True)
        return ReportData(rows=out_rows, summary=summary)
