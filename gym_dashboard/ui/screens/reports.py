# gym_dashboard/ui/screens/reports.py
"""
Attendance and payment reports. One report type is active at a time; its
parameters live in the URL so a report can be bookmarked.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, Input

from gym_dashboard.models.attendance import AttendanceSummary, InactiveEmployee
from gym_dashboard.models.fields import first_of, parse_amount
from gym_dashboard.models.pagination import (
    PageResult,
    PageState,
    extract_list,
    from_count_wrapper,
    from_list_wrapper,
    from_spring_page,
    paginate_locally,
)
from gym_dashboard.models.payment import Payment
from gym_dashboard.ui.controllers.list_state import FilterSpec, ListStateController
from gym_dashboard.ui.screens.base import ListScreen
from gym_dashboard.ui.widgets.record_table import Column
from gym_dashboard.utils.formatters import display, format_currency, format_date, format_datetime, format_phone

REPORTS_KEY = ("reports",)

# report type → the inputs it reads
REPORT_INPUTS = {
    "attendance": ("dateMonthYear",),
    "lastPunch": ("fromDate", "toDate"),
    "noPunch": ("fromDate", "toDate"),
    "inactive": ("inactiveDays",),
    "last7Days": (),
    "defaulters": (),
    "settlement": ("year", "month"),
}

INPUT_PLACEHOLDERS = {
    "dateMonthYear": "Month/Year (MM/YYYY)",
    "fromDate": "From (YYYY-MM-DD)",
    "toDate": "To (YYYY-MM-DD)",
    "inactiveDays": "Inactive days",
    "year": "Year",
    "month": "Month (1-12)",
}


def default_params(today: Optional[date] = None) -> Dict[str, str]:
    today = today or date.today()
    return {
        "dateMonthYear": f"{today.month:02d}/{today.year}",
        "fromDate": today.isoformat(),
        "toDate": today.isoformat(),
        "inactiveDays": "30",
        "year": str(today.year),
        "month": str(today.month),
    }


def employee_matches(row: InactiveEmployee, term: str) -> bool:
    return term in row.employee_name.lower() or (
        row.employee_id is not None and term in str(row.employee_id)
    )


def decode_defaulters(payload: Any, state: PageState) -> PageResult:
    """Spring page when the server pages; plain list otherwise."""
    if isinstance(payload, dict) and "content" in payload:
        return from_spring_page(payload, Payment.from_api, state.size)
    return from_list_wrapper(payload, Payment.from_api, state, "data")


def decode_settlement(payload: Any, state: PageState) -> PageResult:
    rows = [doc for doc in extract_list(payload, "partners") if isinstance(doc, dict)]
    return paginate_locally(rows, state.page, state.size)


def _last_punch(row: InactiveEmployee) -> str:
    return format_datetime(row.last_punch_date) if row.last_punch_date else "No punch"


ATTENDANCE_COLUMNS = [
    Column("employee_id", "Employee ID", lambda r: display(r.employee_id), width=12),
    Column("name", "Name", lambda r: r.employee_name),
    Column("working", "Working Days", lambda r: str(r.working_days)),
    Column("present", "Present Days", lambda r: str(r.present_days)),
    Column("percent", "Attendance %", lambda r: f"{r.attendance_percentage}%"),
]

LAST_PUNCH_COLUMNS = [
    Column("employee_id", "Employee ID", lambda r: display(r.employee_id), width=12),
    Column("name", "Name", lambda r: r.employee_name),
    Column("doj", "DOJ", lambda r: format_date(r.doj)),
    Column("last_punch", "Last Punch", _last_punch),
]

NO_PUNCH_COLUMNS = [
    Column("employee_id", "Employee ID", lambda r: display(r.employee_id), width=12),
    Column("name", "Name", lambda r: r.employee_name),
    Column("doj", "DOJ", lambda r: format_date(r.doj)),
    Column("contact", "Contact", lambda r: format_phone(r.contact_no)),
]

INACTIVE_COLUMNS = LAST_PUNCH_COLUMNS + [
    Column("inactive_days", "Inactive Days", lambda r: f"{r.inactive_days_since_last_punch or 0} days"),
]

DEFAULTER_COLUMNS = [
    Column("member_id", "Member ID", lambda p: display(p.employee_id), width=10),
    Column("name", "Member", lambda p: p.employee_name),
    Column("due", "Due Since", lambda p: format_date(p.due_date)),
    Column("amount", "Amount Due", lambda p: format_currency(p.amount)),
]

SETTLEMENT_COLUMNS = [
    Column("partner", "Partner", lambda r: display(first_of(r, "partnerName", "name"))),
    Column("share", "Share %", lambda r: display(first_of(r, "profitSharePercentage", "sharePercentage"))),
    Column("revenue", "Revenue", lambda r: format_currency(parse_amount(first_of(r, "totalRevenue", "revenue")))),
    Column("settlement", "Settlement", lambda r: format_currency(
        parse_amount(first_of(r, "settlementAmount", "shareAmount", "amount")))),
]

COLUMNS = {
    "attendance": ATTENDANCE_COLUMNS,
    "lastPunch": LAST_PUNCH_COLUMNS,
    "noPunch": NO_PUNCH_COLUMNS,
    "inactive": INACTIVE_COLUMNS,
    "last7Days": INACTIVE_COLUMNS,
    "defaulters": DEFAULTER_COLUMNS,
    "settlement": SETTLEMENT_COLUMNS,
}


class ReportsScreen(ListScreen):
    PATH = "/reports"
    HEADING = "Reports & Analytics"
    NOUN = "Rows"
    SEARCH_PLACEHOLDER = "Filter rows by name or ID..."
    WATCH_KEYS = (REPORTS_KEY,)

    def build_controller(self) -> ListStateController:
        attendance = self.container.attendance_service
        reports = self.container.report_service

        def employees(payload: Any, s: PageState) -> PageResult:
            return from_list_wrapper(payload, InactiveEmployee.from_api, s, "employees", employee_matches)

        def int_param(s: PageState, name: str) -> Optional[int]:
            value = s.param(name)
            return int(value) if value.isdigit() else None

        filters = [
            FilterSpec(
                "attendance", "Employee Attendance",
                query_key=lambda s: (*REPORTS_KEY, "attendance", s.param("dateMonthYear"), s.page, s.size),
                fetch=lambda s: attendance.get_attendance_report(s.param("dateMonthYear"), s.page, s.size),
                decode=lambda p, s: from_count_wrapper(p, AttendanceSummary.from_api, "result", s.size),
                enabled=lambda s: bool(s.param("dateMonthYear")),
                sortable=False,
                searchable=False,
            ),
            FilterSpec(
                "lastPunch", "Last Punch",
                query_key=lambda s: (*REPORTS_KEY, "lastPunch", s.param("fromDate"), s.param("toDate")),
                fetch=lambda s: attendance.get_employee_last_punch(s.param("fromDate"), s.param("toDate")),
                decode=employees,
                enabled=lambda s: bool(s.param("fromDate") and s.param("toDate")),
                sortable=False,
            ),
            FilterSpec(
                "noPunch", "No Punch",
                query_key=lambda s: (*REPORTS_KEY, "noPunch", s.param("fromDate"), s.param("toDate")),
                fetch=lambda s: attendance.get_employees_without_punch(s.param("fromDate"), s.param("toDate")),
                decode=employees,
                enabled=lambda s: bool(s.param("fromDate") and s.param("toDate")),
                sortable=False,
            ),
            FilterSpec(
                "inactive", "Inactive Members",
                query_key=lambda s: (*REPORTS_KEY, "inactive", s.param("inactiveDays")),
                fetch=lambda s: attendance.get_inactive_employees(int_param(s, "inactiveDays")),
                decode=employees,
                enabled=lambda s: int_param(s, "inactiveDays") is not None,
                sortable=False,
            ),
            FilterSpec(
                "last7Days", "Inactive Last 7 Days",
                query_key=lambda s: (*REPORTS_KEY, "last7Days"),
                fetch=lambda s: attendance.get_inactive_last_days(7),
                decode=employees,
                sortable=False,
            ),
            FilterSpec(
                "defaulters", "Defaulters",
                query_key=lambda s: (*REPORTS_KEY, "defaulters", s.page, s.size),
                fetch=lambda s: reports.get_defaulters(s.page, s.size),
                decode=decode_defaulters,
                sortable=False,
                searchable=False,
            ),
            FilterSpec(
                "settlement", "Partner Settlement",
                query_key=lambda s: (*REPORTS_KEY, "settlement", s.param("year"), s.param("month")),
                fetch=lambda s: reports.get_partner_settlement(int_param(s, "year"), int_param(s, "month")),
                decode=decode_settlement,
                sortable=False,
                searchable=False,
            ),
        ]
        return ListStateController(
            filters,
            default_filter="attendance",
            page_size=self.per_page,
            url_params=default_params(),
            filter_param="type",
            search_debounce=self.debounce_delay,
            schedule=self.schedule,
            name="reports",
        )

    def columns_for(self, filter_key: Optional[str]) -> List[Column]:
        return COLUMNS.get(filter_key or "attendance", ATTENDANCE_COLUMNS)

    def compose_toolbar(self) -> ComposeResult:
        with Horizontal(classes="toolbar"):
            for name, placeholder in INPUT_PLACEHOLDERS.items():
                yield Input(placeholder=placeholder, id=f"report-{name}", classes="report-param")
            yield Button("Generate Report", variant="primary", id="generate-report")

    def after_seed(self) -> None:
        state = self.controller.state
        for name in INPUT_PLACEHOLDERS:
            self.query_one(f"#report-{name}", Input).value = state.param(name)
        self._show_inputs(state.filter)

    def _show_inputs(self, report: Optional[str]) -> None:
        wanted = REPORT_INPUTS.get(report or "", ())
        for name in INPUT_PLACEHOLDERS:
            self.query_one(f"#report-{name}", Input).display = name in wanted

    def on_filter_bar_selected(self, event) -> None:
        super().on_filter_bar_selected(event)
        self._show_inputs(self.controller.state.filter)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.has_class("report-param"):
            self.generate()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "generate-report":
            self.generate()

    def generate(self) -> None:
        """Apply the visible parameters; regenerate if nothing changed."""
        wanted = REPORT_INPUTS.get(self.controller.state.filter or "", ())
        values = {name: self.query_one(f"#report-{name}", Input).value.strip() for name in wanted}
        if any(not value for value in values.values()):
            self.toast("Please fill in the report parameters", "warning")
            return
        if all(self.controller.state.param(name) == value for name, value in values.items()):
            self.action_refresh()
            return
        self.controller.set_params(**values)
