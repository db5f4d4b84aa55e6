from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from gym_dashboard.models.fields import parse_amount, parse_int


@dataclass(frozen=True, slots=True)
class Partner:
    id: Optional[int]
    employee_id: Optional[int]
    partner_name: str
    profit_share_percentage: Optional[float] = None
    contact_no: Optional[str] = None
    remarks: Optional[str] = None
    is_active: bool = True

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Partner":
        return cls(
            id=parse_int(doc.get("id")),
            employee_id=parse_int(doc.get("employeeId")),
            partner_name=str(doc.get("partnerName") or ""),
            profit_share_percentage=parse_amount(doc.get("profitSharePercentage")),
            contact_no=doc.get("contactNo"),
            remarks=doc.get("remarks"),
            is_active=bool(doc.get("isActive", True)),
        )

    def to_api(self) -> Dict[str, Any]:
        return {
            "employeeId": self.employee_id,
            "partnerName": self.partner_name,
            "profitSharePercentage": self.profit_share_percentage,
            "contactNo": self.contact_no,
            "remarks": self.remarks,
            "isActive": self.is_active,
        }

    def matches(self, term: str) -> bool:
        return term in self.partner_name.lower() or (
            self.employee_id is not None and term in str(self.employee_id)
        )
