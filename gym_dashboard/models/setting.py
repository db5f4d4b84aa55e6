"""Dated fee settings (monthly fee, admission fee) managed on the server."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from gym_dashboard.models.fields import iso, parse_date, parse_int

SETTING_KEYS = ("MONTHLY_FEE", "ADMISSION_FEE")

SETTING_KEY_LABELS = {
    "MONTHLY_FEE": "Monthly Fee",
    "ADMISSION_FEE": "Admission Fee",
}


@dataclass(frozen=True, slots=True)
class Setting:
    id: Optional[int]
    setting_key: str
    setting_value: str
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    is_active: bool = True
    description: Optional[str] = None
    status: Optional[str] = None      # CURRENT | FUTURE | EXPIRED, computed server-side

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Setting":
        value = doc.get("settingValue")
        return cls(
            id=parse_int(doc.get("id")),
            setting_key=str(doc.get("settingKey") or ""),
            setting_value="" if value is None else str(value),
            effective_from=parse_date(doc.get("effectiveFrom")),
            effective_to=parse_date(doc.get("effectiveTo")),
            is_active=bool(doc.get("isActive", True)),
            description=doc.get("description"),
            status=doc.get("status"),
        )

    def to_api(self) -> Dict[str, Any]:
        return {
            "settingKey": self.setting_key,
            "settingValue": str(self.setting_value),
            "effectiveFrom": iso(self.effective_from),
            "effectiveTo": iso(self.effective_to),
            "isActive": self.is_active,
            "description": self.description or "",
        }

    @property
    def label(self) -> str:
        return SETTING_KEY_LABELS.get(self.setting_key, self.setting_key)
