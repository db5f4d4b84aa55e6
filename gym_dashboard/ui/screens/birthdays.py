# gym_dashboard/ui/screens/birthdays.py
"""Member birthdays: today, this week, this month, or any month."""

from __future__ import annotations

import re
from datetime import date
from typing import Any, List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, Input

from gym_dashboard.models.member import Member
from gym_dashboard.models.pagination import from_list_wrapper
from gym_dashboard.ui.controllers.list_state import FilterSpec, ListStateController
from gym_dashboard.ui.routing import Route
from gym_dashboard.ui.screens.base import ListScreen
from gym_dashboard.ui.widgets.record_table import Column
from gym_dashboard.utils.formatters import calculate_age, days_until_birthday, display, format_date, format_phone

BIRTHDAYS_KEY = ("birthdays",)

MONTH_YEAR = re.compile(r"^(0[1-9]|1[0-2])/\d{4}$")


def _matches(member: Member, term: str) -> bool:
    return member.matches(term)


def _countdown(member: Member) -> Text:
    days = days_until_birthday(member.dob)
    if days is None:
        return Text("-")
    if days == 0:
        return Text("Today!", style="bold green")
    return Text(f"in {days} days", style="cyan" if days <= 7 else "")


class BirthdaysScreen(ListScreen):
    PATH = "/birthdays"
    HEADING = "Birthdays"
    NOUN = "Birthdays"
    SEARCH_PLACEHOLDER = "Search by name or ID..."
    WATCH_KEYS = (BIRTHDAYS_KEY, ("members",))

    def build_controller(self) -> ListStateController:
        birthdays = self.container.birthday_service
        today = date.today()

        def decode(payload: Any, s) -> Any:
            return from_list_wrapper(payload, Member.from_api, s, "data", _matches)

        filters = [
            FilterSpec("today", "Today", query_key=lambda s: (*BIRTHDAYS_KEY, "today"),
                       fetch=lambda s: birthdays.get_today(), decode=decode, sortable=False),
            FilterSpec("week", "This Week", query_key=lambda s: (*BIRTHDAYS_KEY, "week"),
                       fetch=lambda s: birthdays.get_this_week(), decode=decode, sortable=False),
            FilterSpec("month", "This Month", query_key=lambda s: (*BIRTHDAYS_KEY, "month"),
                       fetch=lambda s: birthdays.get_this_month(), decode=decode, sortable=False),
            FilterSpec("upcoming", "By Month", query_key=lambda s: (*BIRTHDAYS_KEY, "upcoming", s.param("monthYear")),
                       fetch=lambda s: birthdays.get_upcoming(s.param("monthYear")), decode=decode,
                       enabled=lambda s: bool(MONTH_YEAR.match(s.param("monthYear"))), sortable=False),
        ]
        return ListStateController(
            filters,
            default_filter="today",
            page_size=self.per_page,
            url_params={"monthYear": f"{today.month:02d}/{today.year}"},
            search_debounce=self.debounce_delay,
            schedule=self.schedule,
            name="birthdays",
        )

    def columns_for(self, filter_key: Optional[str]) -> List[Column]:
        return [
            Column("id", "ID", lambda m: display(m.id), width=8),
            Column("name", "Name", lambda m: m.name),
            Column("dob", "Birthday", lambda m: format_date(m.dob)),
            Column("age", "Age", lambda m: display(calculate_age(m.dob))),
            Column("countdown", "When", _countdown),
            Column("contact", "Contact", lambda m: format_phone(m.contact_no)),
            Column("gender", "Gender", lambda m: display(m.gender)),
        ]

    def compose_toolbar(self) -> ComposeResult:
        with Horizontal(classes="toolbar", id="upcoming-toolbar"):
            yield Input(placeholder="MM/YYYY", id="birthday-month")
            yield Button("Show", variant="primary", id="show-month")

    def after_seed(self) -> None:
        self.query_one("#birthday-month", Input).value = self.controller.state.param("monthYear")
        self._toggle_month_input()

    def _toggle_month_input(self) -> None:
        self.query_one("#upcoming-toolbar").display = self.controller.state.filter == "upcoming"

    def on_filter_bar_selected(self, event) -> None:
        super().on_filter_bar_selected(event)
        self._toggle_month_input()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "birthday-month":
            self._apply_month()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "show-month":
            self._apply_month()

    def _apply_month(self) -> None:
        value = self.query_one("#birthday-month", Input).value.strip()
        if not MONTH_YEAR.match(value):
            self.toast("Month must be MM/YYYY", "warning")
            return
        self.controller.set_param("monthYear", value)

    def on_row_chosen(self, item: Member) -> None:
        if item.id is not None:
            self.app.navigate(Route(f"/members/{item.id}"))
