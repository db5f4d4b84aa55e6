"""
Formatting utility functions
"""

from datetime import date, datetime
from typing import Any, Optional, Union

PLACEHOLDER = "-"


def format_date(date_value: Any, format_str: str = "%b %d, %Y") -> str:
    """
    Format a date value as a string

    Args:
        date_value: Date value to format (string, date, datetime, or other)
        format_str: Format string for strftime

    Returns:
        Formatted date string or '-' if empty
    """
    if not date_value:
        return PLACEHOLDER

    # If already a string, try to parse it
    if isinstance(date_value, str):
        try:
            dt = datetime.fromisoformat(date_value.replace('Z', '+00:00'))
            return dt.strftime(format_str)
        except ValueError:
            # Return original if parsing fails
            return date_value

    if isinstance(date_value, (datetime, date)):
        return date_value.strftime(format_str)

    return str(date_value)


def format_datetime(date_value: Any) -> str:
    return format_date(date_value, "%b %d, %Y %H:%M")


def _group_indian(whole: str) -> str:
    """12345678 → 1,23,45,678 (lakh/crore grouping)."""
    if len(whole) <= 3:
        return whole
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_currency(value: Union[str, int, float, None], symbol: str = "₹") -> str:
    """
    Format an amount with Indian digit grouping

    Args:
        value: Amount to format
        symbol: Currency symbol prefix

    Returns:
        e.g. '₹1,25,000' or '₹1,250.50'; '₹0' when missing
    """
    if value is None or value == "":
        return f"{symbol}0"
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return str(value)

    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    whole, _, fraction = f"{amount:.2f}".partition(".")
    text = _group_indian(whole)
    if fraction != "00":
        text = f"{text}.{fraction}"
    return f"{sign}{symbol}{text}"


def format_phone(phone: Optional[str]) -> str:
    """Prefix bare 10-digit numbers with the +91 country code."""
    if not phone:
        return PLACEHOLDER
    phone = str(phone).strip()
    if len(phone) == 10 and phone.isdigit():
        return f"+91 {phone}"
    return phone


def calculate_age(dob: Optional[date], today: Optional[date] = None) -> Optional[int]:
    if not dob:
        return None
    today = today or date.today()
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age


def days_until_birthday(dob: Optional[date], today: Optional[date] = None) -> Optional[int]:
    if not dob:
        return None
    today = today or date.today()
    try:
        upcoming = dob.replace(year=today.year)
    except ValueError:
        # 29 Feb in a non-leap year
        upcoming = date(today.year, 3, 1)
    if upcoming < today:
        try:
            upcoming = dob.replace(year=today.year + 1)
        except ValueError:
            upcoming = date(today.year + 1, 3, 1)
    return (upcoming - today).days


def truncate_text(text: str, max_length: int = 50, ellipsis: str = "...") -> str:
    """
    Truncate text to a maximum length

    Args:
        text: Text to truncate
        max_length: Maximum length
        ellipsis: Ellipsis string to append

    Returns:
        Truncated text
    """
    if not text:
        return ""

    if len(text) <= max_length:
        return text

    return text[:max_length-len(ellipsis)] + ellipsis


def display(value: Any) -> str:
    """Cell text for optional values."""
    if value is None or value == "":
        return PLACEHOLDER
    return str(value)
