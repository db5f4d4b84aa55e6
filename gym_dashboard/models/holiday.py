from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from gym_dashboard.models.fields import parse_int


@dataclass(frozen=True, slots=True)
class Holiday:
    id: Optional[int]
    holiday_month_year: str      # MM/YYYY
    number_of_holidays: int

    @classmethod
    def from_api(cls, doc: Dict[str, Any]) -> "Holiday":
        return cls(
            id=parse_int(doc.get("id")),
            holiday_month_year=str(doc.get("holidayMonthYear") or ""),
            number_of_holidays=parse_int(doc.get("numberOfHolidays")) or 0,
        )

    def to_api(self) -> Dict[str, Any]:
        return {
            "holidayMonthYear": self.holiday_month_year,
            "numberOfHolidays": self.number_of_holidays,
        }


def holiday_totals(holidays: Sequence[Holiday]) -> Dict[str, float]:
    """Count of months, total holidays and the per-month average."""
    count = len(holidays)
    total = sum(h.number_of_holidays for h in holidays)
    return {
        "count": count,
        "total": total,
        "average": round(total / count, 1) if count else 0.0,
    }
