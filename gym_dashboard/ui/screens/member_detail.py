# gym_dashboard/ui/screens/member_detail.py
"""
Single-member pages: profile + payment history, and the monthly punch summary.
"""

from __future__ import annotations

from typing import List, Optional

from rich.table import Table
from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.widgets import Label, Static, Tree

from gym_dashboard.models.member import Member, MonthlyPunchSummary
from gym_dashboard.models.pagination import extract_list
from gym_dashboard.models.payment import Payment
from gym_dashboard.ui.routing import Route
from gym_dashboard.ui.screens.base import BaseScreen
from gym_dashboard.ui.widgets.loading_indicator import LoadingOverlay
from gym_dashboard.ui.widgets.record_table import Column, RecordTable
from gym_dashboard.utils.formatters import (
    calculate_age,
    display,
    format_currency,
    format_date,
    format_datetime,
    format_phone,
)

PAYMENT_COLUMNS = [
    Column("due", "Due Date", lambda p: format_date(p.due_date)),
    Column("amount", "Amount", lambda p: format_currency(p.amount)),
    Column("paid_amount", "Paid", lambda p: format_currency(p.paid_amount)),
    Column("mode", "Mode", lambda p: display(p.payment_mode)),
    Column("paid_on", "Paid On", lambda p: format_datetime(p.paid_on)),
    Column("status", "Status", lambda p: Text("Paid", style="green") if p.paid else Text("Pending", style="yellow")),
]


def profile_table(member: Member) -> Table:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    age = calculate_age(member.dob)
    rows = [
        ("Member ID", display(member.id)),
        ("Name", member.name),
        ("Contact", format_phone(member.contact_no)),
        ("Gender", display(member.gender)),
        ("Date of Birth", f"{format_date(member.dob)}" + (f" ({age} yrs)" if age is not None else "")),
        ("Joined", format_date(member.doj)),
        ("Membership", f"{format_date(member.expiry_from)} → {format_date(member.expiry_to)}"),
        ("Status", member.status()),
        ("Weight / Height", f"{display(member.weight)} kg / {display(member.height)} cm"),
        ("Blood Group", display(member.blood_group)),
        ("Joining Fee", format_currency(member.joining_fee)),
        ("Admin", "Yes" if member.is_admin else "No"),
    ]
    for label, value in rows:
        table.add_row(label, value)
    return table


class MemberDetailScreen(BaseScreen):
    PATH = "/members/<id>"
    HEADING = "Member Details"

    BINDINGS = [
        Binding("escape", "back", "Back", show=True),
        Binding("p", "punch_records", "Punch Records", show=True),
        Binding("r", "refresh", "Refresh", show=True),
    ]

    def __init__(self, container, route: Optional[Route] = None, *, member_id: str, id: Optional[str] = None) -> None:
        super().__init__(container, route or Route(f"/members/{member_id}"), id=id)
        self.member_id = member_id
        self.WATCH_KEYS = (("member", member_id), ("members",))

    def compose_body(self) -> ComposeResult:
        yield LoadingOverlay(id="loading-overlay")
        yield Static(id="member-profile", classes="panel")
        yield Label("Admission Fee Payments", classes="section-title")
        yield RecordTable(PAYMENT_COLUMNS, empty_message="No admission payments", id="admission-payments")
        yield Label("Monthly Payments", classes="section-title")
        yield RecordTable(PAYMENT_COLUMNS, empty_message="No monthly payments", id="monthly-payments")
        yield Label("Press p to view punch records", classes="hint")

    def on_mount(self) -> None:
        super().on_mount()
        self.sync_location()
        self.refresh_data()

    def refresh_data(self) -> None:
        self.run_worker(self._load_profile(), exclusive=True, group="member-profile")
        self.run_worker(self._load_payments(), exclusive=True, group="member-payments")

    async def _load_profile(self) -> None:
        overlay = self.query_one(LoadingOverlay)
        overlay.start("profile", "Loading member...")
        result = await self.fetch(
            ("member", self.member_id),
            lambda: self.container.member_service.get_member(self.member_id),
        )
        overlay.stop("profile")
        profile = self.query_one("#member-profile", Static)
        if not result.ok or not isinstance(result.data, dict):
            profile.update(Text("Member not found", style="red"))
            return
        member = Member.from_api(result.data)
        self.sub_title = member.name
        profile.update(profile_table(member))

    async def _load_payments(self) -> None:
        overlay = self.query_one(LoadingOverlay)
        overlay.start("payments", "Loading payments...")
        result = await self.fetch(
            ("member", self.member_id, "payments"),
            lambda: self.container.payment_service.get_member_payments(self.member_id),
        )
        overlay.stop("payments")
        payments: List[Payment] = [
            Payment.from_api(doc) for doc in extract_list(result.data) if isinstance(doc, dict)
        ]
        self.query_one("#admission-payments", RecordTable).show([p for p in payments if p.is_admission_fee])
        self.query_one("#monthly-payments", RecordTable).show([p for p in payments if not p.is_admission_fee])

    def action_back(self) -> None:
        self.app.go_back()

    def action_punch_records(self) -> None:
        self.app.navigate(Route(f"/members/{self.member_id}/punch-records"))

    def action_refresh(self) -> None:
        self.query_client.invalidate(("member", self.member_id))


class PunchRecordsScreen(BaseScreen):
    PATH = "/members/<id>/punch-records"
    HEADING = "Punch Records"

    BINDINGS = [
        Binding("escape", "back", "Back", show=True),
        Binding("r", "refresh", "Refresh", show=True),
    ]

    def __init__(self, container, route: Optional[Route] = None, *, member_id: str, id: Optional[str] = None) -> None:
        super().__init__(container, route or Route(f"/members/{member_id}/punch-records"), id=id)
        self.member_id = member_id
        self.WATCH_KEYS = (("member", member_id),)

    def compose_body(self) -> ComposeResult:
        yield LoadingOverlay(id="loading-overlay")
        yield Label("", id="punch-member")
        tree: Tree[None] = Tree("Months", id="punch-tree")
        tree.show_root = False
        yield tree

    def on_mount(self) -> None:
        super().on_mount()
        self.sync_location()
        self.refresh_data()

    def refresh_data(self) -> None:
        self.run_worker(self._load(), exclusive=True, group="punch-summary")

    async def _load(self) -> None:
        overlay = self.query_one(LoadingOverlay)
        overlay.start("punches", "Loading punch records...")
        member = await self.fetch(
            ("member", self.member_id),
            lambda: self.container.member_service.get_member(self.member_id),
            silent=True,
        )
        summary = await self.fetch(
            ("member", self.member_id, "punch-summary"),
            lambda: self.container.member_service.get_monthly_punch_summary(self.member_id),
        )
        overlay.stop("punches")

        name = member.data.get("name") if isinstance(member.data, dict) else None
        self.query_one("#punch-member", Label).update(f"Attendance history for {name or 'Member'}")

        months = [MonthlyPunchSummary.from_api(doc) for doc in extract_list(summary.data) if isinstance(doc, dict)]
        self.show_months(months, failed=not summary.ok)

    def show_months(self, months: List[MonthlyPunchSummary], failed: bool = False) -> None:
        tree = self.query_one("#punch-tree", Tree)
        tree.clear()
        if failed:
            tree.root.add_leaf(Text("Failed to load punch records", style="red"))
            return
        if not months:
            tree.root.add_leaf(Text("This member has no attendance records yet.", style="italic bright_black"))
            return
        for month in months:
            label = Text.assemble(
                (month.month_year, "bold"),
                f"  {month.total_days} days attended • {len(month.punch_records)} total punches",
            )
            node = tree.root.add(label, expand=False)
            for record in month.punch_records:
                node.add_leaf(f"{format_date(record.date)}  {record.day_of_week:<10} {record.time}")

    def action_back(self) -> None:
        self.app.go_back()

    def action_refresh(self) -> None:
        self.query_client.invalidate(("member", self.member_id))
