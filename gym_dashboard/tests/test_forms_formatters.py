import unittest
from datetime import date

from gym_dashboard.errors import ValidationError
from gym_dashboard.ui.widgets.form_modal import FormField, parse_form
from gym_dashboard.utils.formatters import (
    calculate_age,
    days_until_birthday,
    display,
    format_currency,
    format_date,
    format_phone,
    truncate_text,
)

FIELDS = [
    FormField("name", "Name", required=True),
    FormField("weight", "Weight", kind="float"),
    FormField("advance", "Advance Months", kind="int"),
    FormField("doj", "Date of Joining", kind="date", required=True),
    FormField("mode", "Payment Mode", kind="select", options=[("Cash", "CASH"), ("UPI", "UPI")]),
    FormField("is_admin", "Admin", kind="bool"),
]


class TestParseForm(unittest.TestCase):
    def test_typed_values(self):
        values = parse_form(FIELDS, {
            "name": "  Asha ",
            "weight": "61.5",
            "advance": "3",
            "doj": "2025-01-15",
            "mode": "UPI",
            "is_admin": True,
        })
        self.assertEqual(values, {
            "name": "Asha",
            "weight": 61.5,
            "advance": 3,
            "doj": date(2025, 1, 15),
            "mode": "UPI",
            "is_admin": True,
        })

    def test_blank_optionals_become_none(self):
        values = parse_form(FIELDS, {"name": "Asha", "doj": "2025-01-15", "mode": object()})
        self.assertIsNone(values["weight"])
        self.assertIsNone(values["mode"])
        self.assertFalse(values["is_admin"])

    def test_every_problem_is_reported(self):
        with self.assertRaises(ValidationError) as ctx:
            parse_form(FIELDS, {"name": "", "weight": "heavy", "doj": "15/01/2025"})
        message = str(ctx.exception)
        self.assertIn("Name is required", message)
        self.assertIn("Weight is invalid", message)
        self.assertIn("Date of Joining is invalid (YYYY-MM-DD)", message)


class TestFormatters(unittest.TestCase):
    def test_currency_uses_indian_grouping(self):
        self.assertEqual(format_currency(125000), "₹1,25,000")
        self.assertEqual(format_currency(1250.5), "₹1,250.50")
        self.assertEqual(format_currency(12345678), "₹1,23,45,678")
        self.assertEqual(format_currency(None), "₹0")
        self.assertEqual(format_currency(-600), "-₹600")
        self.assertEqual(format_currency("n/a"), "n/a")

    def test_dates(self):
        self.assertEqual(format_date("2025-01-15"), "Jan 15, 2025")
        self.assertEqual(format_date(date(2025, 1, 15)), "Jan 15, 2025")
        self.assertEqual(format_date(None), "-")
        self.assertEqual(format_date("soon"), "soon")

    def test_phone(self):
        self.assertEqual(format_phone("9876543210"), "+91 9876543210")
        self.assertEqual(format_phone("+44 20 7946 0958"), "+44 20 7946 0958")
        self.assertEqual(format_phone(None), "-")

    def test_age_and_birthday_countdown(self):
        today = date(2025, 6, 10)
        self.assertEqual(calculate_age(date(1990, 6, 11), today), 34)
        self.assertEqual(calculate_age(date(1990, 6, 10), today), 35)
        self.assertEqual(days_until_birthday(date(1990, 6, 10), today), 0)
        self.assertEqual(days_until_birthday(date(1990, 6, 12), today), 2)
        self.assertEqual(days_until_birthday(date(1990, 6, 9), today), 364)
        self.assertEqual(days_until_birthday(date(2000, 2, 29), date(2025, 2, 1)), 28)
        self.assertIsNone(days_until_birthday(None, today))

    def test_text_helpers(self):
        self.assertEqual(truncate_text("abcdefghij", 8), "abcde...")
        self.assertEqual(truncate_text("short", 8), "short")
        self.assertEqual(display(None), "-")
        self.assertEqual(display(0), "0")
