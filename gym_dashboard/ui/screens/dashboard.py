# gym_dashboard/ui/screens/dashboard.py
"""Landing screen: four stat cards, each fetched on its own."""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid
from textual.widgets import Label

from gym_dashboard.models.fields import parse_int
from gym_dashboard.models.pagination import extract_list
from gym_dashboard.ui.routing import Route
from gym_dashboard.ui.screens.base import BaseScreen
from gym_dashboard.ui.widgets.stat_card import StatCard

UNATTENDED_DAYS = 30

# card id → (title, route, accent)
CARDS = (
    ("paid", "Paid Members", "/members?filter=paid", "green"),
    ("unpaid", "Unpaid Members", "/members?filter=unpaid", "red"),
    ("pending", "Pending Payments", "/payments", "yellow"),
    ("unattended", "Unattended Members", f"/attendance?tab=inactive&filter={UNATTENDED_DAYS}days", "blue"),
)


def total_of(payload: Any) -> int:
    """`{total: n}` when the server counts, else the length of the list it sent."""
    if isinstance(payload, dict):
        total = parse_int(payload.get("total"))
        if total is not None:
            return total
    return len(extract_list(payload))


def count_of(payload: Any) -> int:
    if isinstance(payload, dict):
        count = parse_int(payload.get("count"))
        if count is not None:
            return count
    return len(extract_list(payload))


def total_elements_of(payload: Any) -> int:
    if isinstance(payload, dict):
        return parse_int(payload.get("totalElements")) or 0
    return 0


class DashboardScreen(BaseScreen):
    PATH = "/"
    HEADING = "Dashboard"
    WATCH_KEYS = (("members",), ("payments",), ("attendance",))

    BINDINGS = [
        Binding("1", "open_card('paid')", "Paid", show=False),
        Binding("2", "open_card('unpaid')", "Unpaid", show=False),
        Binding("3", "open_card('pending')", "Pending", show=False),
        Binding("4", "open_card('unattended')", "Unattended", show=False),
        Binding("r", "refresh", "Refresh", show=True),
    ]

    def compose_body(self) -> ComposeResult:
        yield Label("Welcome to Rock Gym Management System", classes="hint")
        with Grid(id="stat-grid"):
            for index, (card_id, title, route, accent) in enumerate(CARDS, start=1):
                yield StatCard(title, route, hotkey=str(index), style=accent, id=f"card-{card_id}")
        yield Label(
            "m Members  •  a Attendance  •  p Payments  •  b Birthdays  •  w WhatsApp  •  g Go to route",
            classes="hint",
        )

    def on_mount(self) -> None:
        super().on_mount()
        self.sync_location()
        self.refresh_data()

    def refresh_data(self) -> None:
        for loader in (self._load_paid, self._load_unpaid, self._load_pending, self._load_unattended):
            self.run_worker(loader(), group=f"card-{loader.__name__}", exclusive=True)

    def _card(self, card_id: str) -> StatCard:
        return self.query_one(f"#card-{card_id}", StatCard)

    async def _fill(self, card_id: str, key, fn, extract) -> None:
        card = self._card(card_id)
        card.busy = True
        result = await self.fetch(key, fn, silent=True)
        if result.ok:
            card.set_value(str(extract(result.data)))
        else:
            card.set_failed()

    async def _load_paid(self) -> None:
        await self._fill("paid", ("members", "paid"), self.container.member_service.get_paid_members, total_of)

    async def _load_unpaid(self) -> None:
        await self._fill("unpaid", ("members", "unpaid"), self.container.member_service.get_unpaid_members, total_of)

    async def _load_pending(self) -> None:
        today = date.today().isoformat()
        payments = self.container.payment_service
        await self._fill(
            "pending", ("payments", "pending", today), lambda: payments.get_pending_payments(today), count_of
        )

    async def _load_unattended(self) -> None:
        card = self._card("unattended")
        card.busy = True
        attendance = self.container.attendance_service
        members = self.container.member_service
        inactive, everyone = await asyncio.gather(
            self.fetch(
                ("attendance", "inactive-last", UNATTENDED_DAYS),
                lambda: attendance.get_inactive_last_days(UNATTENDED_DAYS),
                silent=True,
            ),
            self.fetch(
                ("members", "non-admin-total"),
                lambda: members.get_all_members(0, 1, "id", "asc", False),
                silent=True,
            ),
        )
        if inactive.ok and everyone.ok:
            card.set_value(f"{count_of(inactive.data)}/{total_elements_of(everyone.data)}")
        else:
            card.set_failed()

    # ---------- navigation ----------
    def _open(self, route: Optional[str]) -> None:
        if route:
            self.app.navigate(Route.parse(route))

    def action_open_card(self, card_id: str) -> None:
        self._open(self._card(card_id).route)

    def on_stat_card_pressed(self, event: StatCard.Pressed) -> None:
        self._open(event.route)

    def action_refresh(self) -> None:
        for prefix in (("members", "paid"), ("members", "unpaid"), ("payments", "pending"),
                       ("attendance", "inactive-last"), ("members", "non-admin-total")):
            self.query_client.invalidate(prefix)
