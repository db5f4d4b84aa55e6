"""Domain model for a gym member (the API calls them employees)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from gym_dashboard.models.fields import first_of, iso, parse_amount, parse_date, parse_datetime, parse_int

STATUS_ACTIVE = "Active"
STATUS_EXPIRED = "Expired"

DEFAULT_JOINING_FEE = 1000.0


@dataclass(frozen=True, slots=True)
class Member:
    id: Optional[int]
    name: str
    contact_no: Optional[str] = None
    doj: Optional[date] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    blood_group: Optional[str] = None
    is_admin: bool = False
    expiry_from: Optional[date] = None
    expiry_to: Optional[date] = None
    joining_fee: Optional[float] = None
    last_punch_date: Optional[date] = None
    advance_in_months: Optional[int] = None
    payment_mode: Optional[str] = None

    # ---------- mappings ----------
    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Member":
        """Build a `Member` from a members/report payload entry."""
        last_punch = parse_datetime(first_of(doc, "lastPunchDate", "lastPunchTime"))
        return cls(
            id=parse_int(first_of(doc, "id", "employeeId")),
            name=str(first_of(doc, "name", "employeeName", default="")),
            contact_no=first_of(doc, "contactNo", "contact"),
            doj=parse_date(doc.get("doj")),
            dob=parse_date(doc.get("dob")),
            gender=doc.get("gender"),
            weight=parse_amount(doc.get("weight")),
            height=parse_amount(doc.get("height")),
            blood_group=doc.get("bloodGroup"),
            is_admin=bool(doc.get("isAdmin", False)),
            expiry_from=parse_date(doc.get("expiryFrom")),
            expiry_to=parse_date(doc.get("expiryTo")),
            joining_fee=parse_amount(doc.get("joiningFee")),
            last_punch_date=last_punch.date() if last_punch else None,
            advance_in_months=parse_int(doc.get("advanceInMonths")),
            payment_mode=doc.get("paymentMode"),
        )

    def to_api(self) -> Dict[str, Any]:
        """Request body for create/update."""
        return {
            "id": self.id,
            "name": self.name,
            "contactNo": self.contact_no,
            "doj": iso(self.doj),
            "dob": iso(self.dob),
            "gender": self.gender,
            "weight": self.weight,
            "height": self.height,
            "bloodGroup": self.blood_group,
            "isAdmin": self.is_admin,
            # A new member's term starts on the joining date unless told otherwise
            "expiryFrom": iso(self.expiry_from or self.doj),
            "expiryTo": iso(self.expiry_to),
            "joiningFee": self.joining_fee if self.joining_fee is not None else DEFAULT_JOINING_FEE,
            "advanceInMonths": self.advance_in_months,
            "paymentMode": self.payment_mode,
        }

    # ---------- helpers ----------
    def status(self, today: Optional[date] = None) -> str:
        today = today or date.today()
        if self.expiry_to and self.expiry_to >= today:
            return STATUS_ACTIVE
        return STATUS_EXPIRED

    def matches(self, term: str) -> bool:
        """Case-insensitive match on name, id or contact number."""
        term = term.lower()
        return (
            term in self.name.lower()
            or (self.id is not None and term in str(self.id))
            or (self.contact_no is not None and term in str(self.contact_no))
        )


@dataclass(frozen=True, slots=True)
class PunchEntry:
    date: Optional[date]
    day_of_week: str
    time: str

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "PunchEntry":
        return cls(
            date=parse_date(doc.get("date")),
            day_of_week=str(doc.get("dayOfWeek") or ""),
            time=str(doc.get("time") or ""),
        )


@dataclass(frozen=True, slots=True)
class MonthlyPunchSummary:
    month_year: str
    total_days: int
    punch_records: tuple = ()

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "MonthlyPunchSummary":
        records = doc.get("punchRecords") or []
        return cls(
            month_year=str(doc.get("monthYear") or ""),
            total_days=parse_int(doc.get("totalDays")) or 0,
            punch_records=tuple(PunchEntry.from_api(r) for r in records if isinstance(r, dict)),
        )
