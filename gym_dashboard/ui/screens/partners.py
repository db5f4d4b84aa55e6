# gym_dashboard/ui/screens/partners.py
"""Business partners and their profit share."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button

from gym_dashboard.models.pagination import from_list_wrapper
from gym_dashboard.models.partner import Partner
from gym_dashboard.ui.controllers.list_state import FilterSpec, ListStateController
from gym_dashboard.ui.screens.base import ListScreen
from gym_dashboard.ui.widgets.form_modal import FormField, FormModal
from gym_dashboard.ui.widgets.record_table import Column
from gym_dashboard.utils.formatters import display, format_phone, truncate_text

PARTNERS_KEY = ("partners",)

PARTNER_FIELDS = [
    FormField("employee_id", "Member ID", kind="int", required=True),
    FormField("partner_name", "Partner Name", required=True),
    FormField("profit_share_percentage", "Profit Share %", kind="float", required=True),
    FormField("contact_no", "Contact No"),
    FormField("remarks", "Remarks"),
    FormField("is_active", "Active", kind="bool", default=True),
]


def _matches(partner: Partner, term: str) -> bool:
    return partner.matches(term)


class PartnersScreen(ListScreen):
    PATH = "/partners"
    HEADING = "Partners"
    NOUN = "Partners"
    SEARCH_PLACEHOLDER = "Search partners by name or member ID..."
    WATCH_KEYS = (PARTNERS_KEY,)

    BINDINGS = ListScreen.BINDINGS + [
        Binding("n", "new_partner", "New", show=True),
        Binding("e", "edit_partner", "Edit", show=True),
        Binding("delete", "delete_partner", "Delete", show=True),
    ]

    def build_controller(self) -> ListStateController:
        partners = self.container.partner_service

        def decode(payload: Any, s) -> Any:
            return from_list_wrapper(payload, Partner.from_api, s, "data", _matches)

        filters = [
            FilterSpec("all", "All Partners", query_key=lambda s: (*PARTNERS_KEY, "all"),
                       fetch=lambda s: partners.get_all(), decode=decode, sortable=False),
            FilterSpec("active", "Active Only", query_key=lambda s: (*PARTNERS_KEY, "active"),
                       fetch=lambda s: partners.get_active(), decode=decode, sortable=False),
        ]
        return ListStateController(
            filters,
            default_filter="all",
            page_size=self.per_page,
            search_debounce=self.debounce_delay,
            schedule=self.schedule,
            name="partners",
        )

    def columns_for(self, filter_key: Optional[str]) -> List[Column]:
        return [
            Column("employee_id", "Member ID", lambda p: display(p.employee_id), width=10),
            Column("name", "Partner", lambda p: p.partner_name),
            Column("share", "Profit Share", lambda p: f"{display(p.profit_share_percentage)}%"),
            Column("contact", "Contact", lambda p: format_phone(p.contact_no)),
            Column("remarks", "Remarks", lambda p: truncate_text(p.remarks or "-", 40)),
            Column("status", "Status", lambda p: Text("Active", style="green") if p.is_active
                   else Text("Inactive", style="red")),
        ]

    def compose_toolbar(self) -> ComposeResult:
        with Horizontal(classes="toolbar"):
            yield Button("New Partner", variant="success", id="new-partner")
            yield Button("Edit", id="edit-partner")
            yield Button("Delete", variant="error", id="delete-partner")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "new-partner":
            self.action_new_partner()
        elif button_id == "edit-partner":
            self.action_edit_partner()
        elif button_id == "delete-partner":
            self.action_delete_partner()

    def _valid(self, values: Dict[str, Any]) -> bool:
        share = values["profit_share_percentage"]
        if not 0 <= share <= 100:
            self.toast("Profit share must be between 0 and 100", "warning")
            return False
        return True

    def action_new_partner(self) -> None:
        def handle(values: Optional[Dict[str, Any]]) -> None:
            if values is None or not self._valid(values):
                return
            self.mutate(
                self.container.partner_service.create,
                Partner(id=None, **values).to_api(),
                success_message="Partner created successfully",
                invalidate_queries=[PARTNERS_KEY],
            )

        self.app.push_screen(FormModal("New Partner", PARTNER_FIELDS), handle)

    def action_edit_partner(self) -> None:
        partner: Optional[Partner] = self.selected_item
        if partner is None or partner.id is None:
            self.toast("Select a partner to edit", "warning")
            return

        def handle(values: Optional[Dict[str, Any]]) -> None:
            if values is None or not self._valid(values):
                return
            self.mutate(
                lambda body: self.container.partner_service.update(partner.id, body),
                Partner(id=partner.id, **values).to_api(),
                success_message="Partner updated successfully",
                invalidate_queries=[PARTNERS_KEY],
            )

        self.app.push_screen(FormModal("Edit Partner", PARTNER_FIELDS, asdict(partner)), handle)

    def action_delete_partner(self) -> None:
        partner: Optional[Partner] = self.selected_item
        if partner is None or partner.id is None:
            self.toast("Select a partner to delete", "warning")
            return
        self.confirm(
            "Delete Partner",
            f"Delete partner {partner.partner_name}?",
            lambda: self.mutate(
                self.container.partner_service.delete,
                partner.id,
                success_message="Partner deleted successfully",
                invalidate_queries=[PARTNERS_KEY],
            ),
        )
