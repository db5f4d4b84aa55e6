"""Attendance-side records: raw punches and the report rows built from them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from gym_dashboard.models.fields import first_of, parse_date, parse_datetime, parse_int


@dataclass(frozen=True, slots=True)
class PunchRecord:
    id: Optional[int]
    punch_id: Optional[str]
    employee_id: Optional[int]
    employee_name: str
    log_date_time: Optional[datetime]

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "PunchRecord":
        punch_id = doc.get("punchId")
        return cls(
            id=parse_int(doc.get("id")),
            punch_id=str(punch_id) if punch_id is not None else None,
            employee_id=parse_int(doc.get("employeeId")),
            employee_name=str(doc.get("employeeName") or ""),
            log_date_time=parse_datetime(doc.get("logDateTime")),
        )


@dataclass(frozen=True, slots=True)
class InactiveEmployee:
    """Row of the inactive/active/last-punch reports."""

    employee_id: Optional[int]
    employee_name: str
    doj: Optional[date] = None
    contact_no: Optional[str] = None
    last_punch_date: Optional[datetime] = None
    inactive_days_since_last_punch: Optional[int] = None

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "InactiveEmployee":
        return cls(
            employee_id=parse_int(first_of(doc, "employeeId", "id")),
            employee_name=str(first_of(doc, "employeeName", "name", default="")),
            doj=parse_date(doc.get("doj")),
            contact_no=doc.get("contactNo"),
            last_punch_date=parse_datetime(first_of(doc, "lastPunchDate", "lastPunchTime")),
            inactive_days_since_last_punch=parse_int(doc.get("inactiveDaysSinceLastPunch")),
        )


@dataclass(frozen=True, slots=True)
class AttendanceSummary:
    employee_id: Optional[int]
    employee_name: str
    working_days: int = 0
    present_days: int = 0

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "AttendanceSummary":
        return cls(
            employee_id=parse_int(first_of(doc, "employeeId", "id")),
            employee_name=str(first_of(doc, "employeeName", "name", default="")),
            working_days=parse_int(doc.get("workingDays")) or 0,
            present_days=parse_int(doc.get("presentDays")) or 0,
        )

    @property
    def attendance_percentage(self) -> float:
        if not self.working_days:
            return 0.0
        return round(self.present_days * 100.0 / self.working_days, 1)
