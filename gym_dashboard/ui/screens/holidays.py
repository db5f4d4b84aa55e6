# gym_dashboard/ui/screens/holidays.py
"""Holiday counts per month, with CRUD and totals."""

from __future__ import annotations

import re
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Label

from gym_dashboard.models.holiday import Holiday, holiday_totals
from gym_dashboard.models.pagination import extract_list, from_list_wrapper
from gym_dashboard.ui.controllers.list_state import FilterSpec, ListStateController
from gym_dashboard.ui.screens.base import ListScreen
from gym_dashboard.ui.widgets.form_modal import FormField, FormModal
from gym_dashboard.ui.widgets.record_table import Column

HOLIDAYS_KEY = ("holidays",)

MONTH_YEAR = re.compile(r"^(0[1-9]|1[0-2])/\d{4}$")

HOLIDAY_FIELDS = [
    FormField("holiday_month_year", "Month/Year", required=True, placeholder="MM/YYYY"),
    FormField("number_of_holidays", "Number of Holidays", kind="int", required=True),
]


class HolidaysScreen(ListScreen):
    PATH = "/holidays"
    HEADING = "Holidays"
    NOUN = "Holiday months"
    SEARCH_PLACEHOLDER = "Filter by month/year..."
    WATCH_KEYS = (HOLIDAYS_KEY,)

    BINDINGS = ListScreen.BINDINGS + [
        Binding("n", "new_holiday", "New", show=True),
        Binding("e", "edit_holiday", "Edit", show=True),
        Binding("delete", "delete_holiday", "Delete", show=True),
    ]

    def build_controller(self) -> ListStateController:
        holidays = self.container.holiday_service
        spec = FilterSpec(
            "all", "All",
            query_key=lambda s: HOLIDAYS_KEY,
            fetch=lambda s: holidays.get_all(),
            decode=lambda payload, s: from_list_wrapper(
                payload, Holiday.from_api, s, "data", lambda h, term: term in h.holiday_month_year
            ),
            sortable=False,
        )
        return ListStateController(
            [spec],
            default_filter="all",
            page_size=self.per_page,
            search_debounce=self.debounce_delay,
            schedule=self.schedule,
            name="holidays",
        )

    def columns_for(self, filter_key: Optional[str]) -> List[Column]:
        return [
            Column("month_year", "Month/Year", lambda h: h.holiday_month_year),
            Column("count", "Holidays", lambda h: str(h.number_of_holidays)),
        ]

    def compose_toolbar(self) -> ComposeResult:
        with Horizontal(classes="toolbar"):
            yield Button("New Holiday", variant="success", id="new-holiday")
            yield Button("Edit", id="edit-holiday")
            yield Button("Delete", variant="error", id="delete-holiday")
        yield Label("", id="holiday-totals", classes="summary")

    def render_result(self) -> None:
        super().render_result()
        entry = self.query_client.cache.get(HOLIDAYS_KEY)
        payload = entry.data if entry else None
        totals = holiday_totals([Holiday.from_api(doc) for doc in extract_list(payload) if isinstance(doc, dict)])
        self.query_one("#holiday-totals", Label).update(
            f"Months: {totals['count']}  •  Total holidays: {totals['total']}  •  Average per month: {totals['average']}"
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "new-holiday":
            self.action_new_holiday()
        elif button_id == "edit-holiday":
            self.action_edit_holiday()
        elif button_id == "delete-holiday":
            self.action_delete_holiday()

    def _valid(self, values: Dict[str, Any]) -> bool:
        if not MONTH_YEAR.match(values["holiday_month_year"]):
            self.toast("Month/Year must be MM/YYYY", "warning")
            return False
        if values["number_of_holidays"] < 0:
            self.toast("Number of holidays cannot be negative", "warning")
            return False
        return True

    def action_new_holiday(self) -> None:
        def handle(values: Optional[Dict[str, Any]]) -> None:
            if values is None or not self._valid(values):
                return
            self.mutate(
                self.container.holiday_service.create,
                Holiday(id=None, **values).to_api(),
                success_message="Holiday created successfully!",
                invalidate_queries=[HOLIDAYS_KEY],
            )

        self.app.push_screen(FormModal("New Holiday", HOLIDAY_FIELDS), handle)

    def action_edit_holiday(self) -> None:
        holiday: Optional[Holiday] = self.selected_item
        if holiday is None or holiday.id is None:
            self.toast("Select a holiday to edit", "warning")
            return

        def handle(values: Optional[Dict[str, Any]]) -> None:
            if values is None or not self._valid(values):
                return
            self.mutate(
                lambda body: self.container.holiday_service.update(holiday.id, body),
                Holiday(id=holiday.id, **values).to_api(),
                success_message="Holiday updated successfully!",
                invalidate_queries=[HOLIDAYS_KEY],
            )

        self.app.push_screen(FormModal("Edit Holiday", HOLIDAY_FIELDS, asdict(holiday)), handle)

    def action_delete_holiday(self) -> None:
        holiday: Optional[Holiday] = self.selected_item
        if holiday is None or holiday.id is None:
            self.toast("Select a holiday to delete", "warning")
            return
        self.confirm(
            "Delete Holiday",
            f"Delete holidays for {holiday.holiday_month_year}?",
            lambda: self.mutate(
                self.container.holiday_service.delete,
                holiday.id,
                success_message="Holiday deleted successfully!",
                invalidate_queries=[HOLIDAYS_KEY],
            ),
        )
