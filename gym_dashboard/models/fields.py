"""Lenient converters shared by the model `from_api` mappings."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional


def parse_datetime(value: Any) -> Optional[datetime]:
    """Convert various inputs → datetime | None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        # Accept both ISO strings and plain YYYY-MM-DD
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_date(value: Any) -> Optional[date]:
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def parse_amount(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_int(value: Any) -> Optional[int]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def first_of(doc: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Value of the first key present (and not None) in `doc`."""
    for key in keys:
        value = doc.get(key)
        if value is not None:
            return value
    return default


def iso(value: Optional[date]) -> Optional[str]:
    """date → `YYYY-MM-DD` for request bodies."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    return value.isoformat()
