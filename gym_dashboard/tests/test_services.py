import unittest
from unittest.mock import Mock

from gym_dashboard.services.attendance_service import AttendanceService
from gym_dashboard.services.birthday_service import BirthdayService
from gym_dashboard.services.expense_service import ExpenseService
from gym_dashboard.services.holiday_service import HolidayService
from gym_dashboard.services.member_service import MemberService
from gym_dashboard.services.partner_service import PartnerService
from gym_dashboard.services.payment_service import PaymentService
from gym_dashboard.services.report_service import ReportService
from gym_dashboard.services.settings_service import SettingsService
from gym_dashboard.services.whatsapp_service import WhatsAppService, split_parameters


class TestMemberService(unittest.TestCase):
    def setUp(self):
        self.api = Mock()
        self.service = MemberService(self.api, default_page_size=10)

    def test_all_members_with_trimmed_search(self):
        self.service.get_all_members(1, 20, "name", "desc", False, "  ravi ")
        self.api.get.assert_called_once_with(
            "/members",
            params={"page": 1, "size": 20, "sortBy": "name", "sortDir": "desc", "isAdmin": False, "search": "ravi"},
        )

    def test_blank_search_is_left_out(self):
        self.service.get_all_members(search="   ")
        _, kwargs = self.api.get.call_args
        self.assertNotIn("search", kwargs["params"])
        self.assertEqual(kwargs["params"]["size"], 10)

    def test_admins(self):
        self.service.get_admin_members(0, 5)
        _, kwargs = self.api.get.call_args
        self.assertTrue(kwargs["params"]["isAdmin"])

    def test_uploads(self):
        self.service.upload_members("~/members.xlsx")
        self.api.upload.assert_called_once()
        self.assertEqual(self.api.upload.call_args[0][1], "~/members.xlsx")


class TestAttendanceService(unittest.TestCase):
    def setUp(self):
        self.api = Mock()
        self.service = AttendanceService(self.api, default_page_size=10)

    def test_generic_search_drops_empty_criteria(self):
        self.service.get_punch_details_paginated(employee_id="42", employee_name="", page=2)
        self.api.get.assert_called_once_with(
            "/punch/details-paginated",
            params={"employeeId": 42, "page": 2, "size": 10},
        )

    def test_inactive_window_must_be_supported(self):
        self.service.get_inactive_last_days_paginated(30, 1, 25)
        self.api.get.assert_called_once_with(
            "/report/inactive-last-30-days-paginated", params={"page": 1, "size": 25}
        )
        with self.assertRaises(ValueError):
            self.service.get_inactive_last_days(45)

    def test_active_period(self):
        self.service.get_active_employees("last-7-days", True, 0, 10)
        _, kwargs = self.api.get.call_args
        self.assertEqual(kwargs["params"]["period"], "last-7-days")
        with self.assertRaises(ValueError):
            self.service.get_active_employees("yesterday")

    def test_export_rejects_unknown_format(self):
        with self.assertRaises(ValueError):
            self.service.export_inactive_members(30, "csv", "/tmp/x.csv")
        self.api.download.assert_not_called()


class TestOtherServices(unittest.TestCase):
    def test_pending_payments_date_is_optional(self):
        api = Mock()
        service = PaymentService(api)
        service.get_pending_payments()
        api.get.assert_called_with("/payments/pending", params=None)
        service.get_pending_payments("2025-01-05")
        api.get.assert_called_with("/payments/pending", params={"date": "2025-01-05"})

    def test_expense_filters(self):
        api = Mock()
        ExpenseService(api, default_page_size=10).get_expenses(0, None, 2025, "")
        api.get.assert_called_once_with("/expenses", params={"page": 0, "size": 10, "year": 2025})

    def test_upcoming_birthdays(self):
        api = Mock()
        BirthdayService(api).get_upcoming("03/2025")
        api.get.assert_called_once_with("/birthday/upcoming", params={"input": "03/2025"})

    def test_whatsapp_body(self):
        api = Mock()
        WhatsAppService(api).send_message(" 919876543210 ", "payment_reminder", "en", "John Doe, 600, 2025-11-15")
        api.post.assert_called_once_with(
            "/whatsapp/send",
            json={
                "to": "919876543210",
                "templateName": "payment_reminder",
                "language": "en",
                "parameters": ["John Doe", "600", "2025-11-15"],
            },
        )

    def test_split_parameters(self):
        self.assertEqual(split_parameters(""), [])
        self.assertEqual(split_parameters(None), [])
        self.assertEqual(split_parameters("a, ,b"), ["a", "b"])
        self.assertEqual(split_parameters([" a ", ""]), ["a"])


class TestLookupEndpoints(unittest.TestCase):
    def setUp(self):
        self.api = Mock()

    def assert_gets(self, call, path, params=None):
        self.api.reset_mock()
        call()
        if params is None:
            self.api.get.assert_called_once_with(path)
        else:
            self.api.get.assert_called_once_with(path, params=params)

    def test_member_lists(self):
        members = MemberService(self.api, default_page_size=10)
        self.assert_gets(members.get_all_members_unpaginated, "/members", {"size": 1000})
        self.assert_gets(members.get_unattended_members, "/members/unattended-members")

    def test_payment_reports(self):
        reports = ReportService(self.api)
        self.assert_gets(reports.get_monthly_revenue, "/payments/reports/monthly-revenue", {"months": 12})
        self.assert_gets(lambda: reports.get_payment_mode_analysis(6),
                         "/payments/reports/payment-mode-analysis", {"months": 6})
        self.assert_gets(lambda: reports.get_collection_summary(2025, 3),
                         "/payments/reports/collection-summary", {"year": 2025, "month": 3})
        self.assert_gets(reports.get_collection_summary, "/payments/reports/collection-summary", {})
        self.assert_gets(lambda: reports.get_member_payment_history(17),
                         "/payments/reports/member-payment-history/17")

    def test_attendance_reads(self):
        attendance = AttendanceService(self.api, default_page_size=10)
        self.assert_gets(attendance.get_todays_attendance, "/punch/today")
        self.assert_gets(lambda: attendance.get_punch_details({"employeeId": 4}),
                         "/punch/details", {"employeeId": 4})

    def test_single_records(self):
        self.assert_gets(lambda: ExpenseService(self.api).get_expense(8), "/expenses/8")
        self.assert_gets(lambda: HolidayService(self.api).get_by_id(2), "/holidays/2")
        partners = PartnerService(self.api)
        self.assert_gets(lambda: partners.get_by_id(5), "/partners/5")
        self.assert_gets(lambda: partners.get_by_employee_id(42), "/partners/employee/42")
        self.assert_gets(lambda: SettingsService(self.api).get_by_key_and_date("MONTHLY_FEE", "2025-01-01"),
                         "/settings/key/MONTHLY_FEE/date/2025-01-01")
