from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from gym_dashboard.models.fields import iso, parse_amount, parse_date, parse_int


@dataclass(frozen=True, slots=True)
class Expense:
    id: Optional[int]
    expense_name: str
    amount: Optional[float]
    date: Optional[date]
    paid_by_employee_id: Optional[int] = None
    paid_by_employee_name: Optional[str] = None
    remarks: Optional[str] = None

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Expense":
        return cls(
            id=parse_int(doc.get("id")),
            expense_name=str(doc.get("expenseName") or ""),
            amount=parse_amount(doc.get("amount")),
            date=parse_date(doc.get("date")),
            paid_by_employee_id=parse_int(doc.get("paidByEmployeeId")),
            paid_by_employee_name=doc.get("paidByEmployeeName"),
            remarks=doc.get("remarks"),
        )

    def to_api(self) -> Dict[str, Any]:
        body = {
            "expenseName": self.expense_name,
            "amount": self.amount,
            "date": iso(self.date),
            "paidByEmployeeId": self.paid_by_employee_id,
            "remarks": self.remarks,
        }
        if self.id is not None:
            body["id"] = self.id
        return body
