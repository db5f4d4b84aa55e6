"""Payment records and the record-payment request body."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from gym_dashboard.models.fields import first_of, iso, parse_amount, parse_date, parse_datetime, parse_int

PAYMENT_MODES = ("Cash", "UPI", "Card", "Bank Transfer", "Cheque")


@dataclass(frozen=True, slots=True)
class Payment:
    id: Optional[int]
    employee_id: Optional[int]
    employee_name: str
    due_date: Optional[date]
    amount: Optional[float] = None
    admission_amount: Optional[float] = None
    advanced_amount: Optional[float] = None
    paid_amount: Optional[float] = None
    paid: bool = False
    payment_mode: Optional[str] = None
    is_admission_fee: bool = False
    paid_on: Optional[datetime] = None

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Payment":
        employee = doc.get("employeeDetail") if isinstance(doc.get("employeeDetail"), dict) else {}
        return cls(
            id=parse_int(doc.get("id")),
            employee_id=parse_int(first_of(employee, "id", "employeeId", default=doc.get("employeeId"))),
            employee_name=str(first_of(employee, "name", "employeeName", default=doc.get("employeeName") or "")),
            due_date=parse_date(doc.get("dueDate")),
            amount=parse_amount(doc.get("amount")),
            admission_amount=parse_amount(doc.get("admissionAmount")),
            advanced_amount=parse_amount(doc.get("advancedAmount")),
            paid_amount=parse_amount(doc.get("paidAmount")),
            paid=bool(doc.get("paid", False)),
            payment_mode=doc.get("paymentMode"),
            is_admission_fee=bool(first_of(doc, "isAdmissionFee", "admissionFee", default=False)),
            paid_on=parse_datetime(doc.get("paidOn")),
        )

    @property
    def kind(self) -> str:
        return "Admission" if self.is_admission_fee else "Monthly"

    def matches(self, term: str) -> bool:
        return term in self.employee_name.lower() or (
            self.employee_id is not None and term in str(self.employee_id)
        )


@dataclass(frozen=True, slots=True)
class PaymentRequest:
    """Body of POST /payments."""

    employee_id: int
    due_date: date
    paid_amount: Optional[float] = None
    payment_mode: str = "Cash"
    advance_in_months: int = 0
    is_admission_fee: bool = False
    paid_on: Optional[datetime] = None

    def to_api(self) -> Dict[str, Any]:
        paid_on = self.paid_on or datetime.now()
        return {
            "employeeDetail": {"id": self.employee_id},
            "dueDate": iso(self.due_date),
            "paidAmount": self.paid_amount,
            "paymentMode": self.payment_mode,
            "advanceInMonths": self.advance_in_months,
            "isAdmissionFee": self.is_admission_fee,
            "paidOn": paid_on.isoformat(),
        }
