import unittest
from datetime import date, datetime

from gym_dashboard.models.holiday import Holiday, holiday_totals
from gym_dashboard.models.member import Member, MonthlyPunchSummary
from gym_dashboard.models.payment import Payment, PaymentRequest
from gym_dashboard.models.setting import Setting


class TestMember(unittest.TestCase):
    def test_alternate_field_names(self):
        member = Member.from_api({"employeeId": "12", "employeeName": "Ravi", "expiryTo": "2025-02-01"})
        self.assertEqual(member.id, 12)
        self.assertEqual(member.name, "Ravi")
        self.assertEqual(member.expiry_to, date(2025, 2, 1))

    def test_status_by_expiry(self):
        member = Member.from_api({"id": 1, "name": "A", "expiryTo": "2025-02-01"})
        self.assertEqual(member.status(date(2025, 2, 1)), "Active")
        self.assertEqual(member.status(date(2025, 2, 2)), "Expired")
        self.assertEqual(Member.from_api({"id": 2, "name": "B"}).status(date(2025, 1, 1)), "Expired")

    def test_matches_name_id_or_phone(self):
        member = Member.from_api({"id": 42, "name": "Asha Rao", "contactNo": "9876543210"})
        self.assertTrue(member.matches("asha"))
        self.assertTrue(member.matches("42"))
        self.assertTrue(member.matches("98765"))
        self.assertFalse(member.matches("ravi"))


class TestPayments(unittest.TestCase):
    def test_nested_employee_detail(self):
        payment = Payment.from_api({
            "id": 5,
            "employeeDetail": {"id": 9, "name": "Asha"},
            "dueDate": "2025-01-05",
            "amount": "600",
            "isAdmissionFee": True,
        })
        self.assertEqual(payment.employee_id, 9)
        self.assertEqual(payment.employee_name, "Asha")
        self.assertEqual(payment.amount, 600.0)
        self.assertEqual(payment.kind, "Admission")

    def test_flat_employee_fields(self):
        payment = Payment.from_api({"employeeId": 3, "employeeName": "Ravi"})
        self.assertEqual(payment.employee_id, 3)
        self.assertEqual(payment.kind, "Monthly")

    def test_request_body(self):
        body = PaymentRequest(
            employee_id=9,
            due_date=date(2025, 1, 5),
            paid_amount=600.0,
            payment_mode="UPI",
            advance_in_months=2,
            paid_on=datetime(2025, 1, 6, 10, 30),
        ).to_api()
        self.assertEqual(body, {
            "employeeDetail": {"id": 9},
            "dueDate": "2025-01-05",
            "paidAmount": 600.0,
            "paymentMode": "UPI",
            "advanceInMonths": 2,
            "isAdmissionFee": False,
            "paidOn": "2025-01-06T10:30:00",
        })


class TestHolidaysAndSettings(unittest.TestCase):
    def test_totals(self):
        holidays = [Holiday(1, "01/2025", 4), Holiday(2, "02/2025", 3), Holiday(3, "03/2025", 3)]
        self.assertEqual(holiday_totals(holidays), {"count": 3, "total": 10, "average": 3.3})
        self.assertEqual(holiday_totals([]), {"count": 0, "total": 0, "average": 0.0})

    def test_setting_round_trip_fields(self):
        setting = Setting.from_api({
            "id": 1,
            "settingKey": "MONTHLY_FEE",
            "settingValue": 600,
            "effectiveFrom": "2025-01-01",
            "status": "CURRENT",
        })
        self.assertEqual(setting.setting_value, "600")
        self.assertEqual(setting.label, "Monthly Fee")
        self.assertEqual(setting.to_api()["effectiveTo"], None)
        self.assertEqual(setting.to_api()["effectiveFrom"], "2025-01-01")


class TestPunchSummary(unittest.TestCase):
    def test_from_api(self):
        summary = MonthlyPunchSummary.from_api({"monthYear": "01/2025", "totalDays": 2, "punchRecords": []})
        self.assertEqual(summary.month_year, "01/2025")
        self.assertEqual(summary.total_days, 2)
