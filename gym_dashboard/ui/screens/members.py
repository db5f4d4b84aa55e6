# gym_dashboard/ui/screens/members.py
"""
Members list: view tab (filters, search, sort, paging) and manage tab
(uploads plus create/edit/delete).
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Input, Label

from gym_dashboard.models.member import Member
from gym_dashboard.models.pagination import PageState, from_list_wrapper, from_spring_page
from gym_dashboard.models.payment import PAYMENT_MODES
from gym_dashboard.ui.controllers.list_state import FilterSpec, ListStateController
from gym_dashboard.ui.routing import Route
from gym_dashboard.ui.screens.base import ListScreen
from gym_dashboard.ui.widgets.filter_bar import FilterBar
from gym_dashboard.ui.widgets.form_modal import FormField, FormModal
from gym_dashboard.ui.widgets.record_table import Column
from gym_dashboard.utils.formatters import display, format_date, format_phone
from simple_logger import Slogger

MEMBERS_KEY = ("members",)

TABS = (("view", "View Members"), ("manage", "Manage Members"))
DEFAULT_TAB = "view"

MEMBER_FIELDS = [
    FormField("id", "Member ID", kind="int", required=True),
    FormField("name", "Name", required=True),
    FormField("contact_no", "Contact No", required=True, placeholder="10-digit mobile"),
    FormField("doj", "Date of Joining", kind="date", required=True),
    FormField("dob", "Date of Birth", kind="date"),
    FormField("gender", "Gender", kind="select", options=[("Male", "Male"), ("Female", "Female"), ("Other", "Other")]),
    FormField("weight", "Weight (kg)", kind="float"),
    FormField("height", "Height (cm)", kind="float"),
    FormField("blood_group", "Blood Group"),
    FormField("joining_fee", "Joining Fee", kind="float", default=1000),
    FormField("advance_in_months", "Advance (months)", kind="int"),
    FormField("expiry_from", "Expiry From", kind="date"),
    FormField("expiry_to", "Expiry To", kind="date"),
    FormField("payment_mode", "Payment Mode", kind="select", options=[(m, m) for m in PAYMENT_MODES]),
    FormField("is_admin", "Admin / staff member", kind="bool"),
]


def _matches(member: Member, term: str) -> bool:
    return member.matches(term)


class MembersScreen(ListScreen):
    PATH = "/members"
    HEADING = "Members"
    NOUN = "Members"
    SEARCH_PLACEHOLDER = "Search members by name, ID or phone..."
    WATCH_KEYS = (MEMBERS_KEY,)

    BINDINGS = ListScreen.BINDINGS + [
        Binding("n", "new_member", "New Member", show=True),
        Binding("e", "edit_member", "Edit", show=True),
        Binding("delete", "delete_member", "Delete", show=True),
    ]

    def __init__(self, container, route: Optional[Route] = None, *, id: Optional[str] = "members_screen") -> None:
        self.tab = DEFAULT_TAB
        super().__init__(container, route, id=id)

    # ------------------------------------------------------------------ #
    # controller
    # ------------------------------------------------------------------ #

    def build_controller(self) -> ListStateController:
        members = self.container.member_service

        def page_key(name: str):
            return lambda s: (*MEMBERS_KEY, name, s.page, s.size, s.sort_by, s.sort_dir, s.debounced_search_term)

        def spring(payload: Any, state: PageState):
            return from_spring_page(payload, Member.from_api, state.size)

        def listed(payload: Any, state: PageState):
            return from_list_wrapper(payload, Member.from_api, state, "list", _matches)

        filters = [
            FilterSpec(
                "all", "All",
                query_key=page_key("all"),
                fetch=lambda s: members.get_all_members(s.page, s.size, s.sort_by, s.sort_dir, False, s.debounced_search_term),
                decode=spring,
            ),
            # Unpaginated endpoints: one cached fetch, paged and searched locally
            FilterSpec(
                "paid", "Paid",
                query_key=lambda s: (*MEMBERS_KEY, "paid"),
                fetch=lambda s: members.get_paid_members(),
                decode=listed,
                sortable=False,
            ),
            FilterSpec(
                "unpaid", "Unpaid",
                query_key=lambda s: (*MEMBERS_KEY, "unpaid"),
                fetch=lambda s: members.get_unpaid_members(),
                decode=listed,
                sortable=False,
            ),
            FilterSpec(
                "unattended", "Unattended",
                query_key=page_key("unattended"),
                fetch=lambda s: members.get_unattended_members_paginated(s.page, s.size, s.sort_by, s.sort_dir),
                decode=spring,
                searchable=False,
            ),
            FilterSpec(
                "active", "Active (7 days)",
                query_key=page_key("active"),
                fetch=lambda s: members.get_active_members_paginated(s.page, s.size),
                decode=spring,
                sortable=False,
                searchable=False,
            ),
            FilterSpec(
                "admins", "Admins",
                query_key=page_key("admins"),
                fetch=lambda s: members.get_admin_members(s.page, s.size, s.sort_by, s.sort_dir, s.debounced_search_term),
                decode=spring,
            ),
        ]
        return ListStateController(
            filters,
            default_filter="all",
            page_size=self.per_page,
            search_debounce=self.debounce_delay,
            schedule=self.schedule,
            name="members",
        )

    def columns_for(self, filter_key: Optional[str]) -> List[Column]:
        columns = [
            Column("id", "ID", lambda m: display(m.id), sort_field="id", width=8),
            Column("name", "Name", lambda m: m.name, sort_field="name"),
            Column("contact", "Contact", lambda m: format_phone(m.contact_no)),
            Column("doj", "Joined", lambda m: format_date(m.doj), sort_field="doj"),
            Column("expiry", "Expiry", lambda m: format_date(m.expiry_to), sort_field="expiryTo"),
            Column("status", "Status", lambda m: m.status()),
        ]
        if filter_key in ("unattended", "active"):
            columns.append(Column("last_punch", "Last Punch", lambda m: format_date(m.last_punch_date)))
        if filter_key in ("paid", "unpaid", "active"):
            # Server-sorted columns only make sense for server-paginated filters
            columns = [Column(c.key, c.label, c.render, None, c.width) for c in columns]
        return columns

    # ------------------------------------------------------------------ #
    # compose
    # ------------------------------------------------------------------ #

    def compose_body(self) -> ComposeResult:
        yield FilterBar(TABS, active=self.tab, id="tab-bar")
        with Horizontal(id="manage-panel", classes="toolbar"):
            yield Input(placeholder="Path to members .xlsx / access file", id="upload-path")
            yield Button("Upload Members", variant="primary", id="upload-members")
            yield Button("Upload Access File", id="upload-access")
            yield Button("New Member", variant="success", id="new-member")
            yield Button("Edit", id="edit-member")
            yield Button("Delete", variant="error", id="delete-member")
        yield Label("Enter opens member details", classes="hint")
        yield from super().compose_body()

    def after_seed(self) -> None:
        tab = self.route.params.get("tab", DEFAULT_TAB)
        self.tab = tab if tab in dict(TABS) else DEFAULT_TAB
        self.query_one("#tab-bar", FilterBar).set_active(self.tab)
        self._show_tab()

    def _show_tab(self) -> None:
        self.query_one("#manage-panel").display = self.tab == "manage"

    def location_params(self) -> Dict[str, str]:
        params = {}
        if self.tab != DEFAULT_TAB:
            params["tab"] = self.tab
        params.update(self.controller.to_query_params())
        return params

    # ------------------------------------------------------------------ #
    # events
    # ------------------------------------------------------------------ #

    def on_filter_bar_selected(self, event: FilterBar.Selected) -> None:
        if event.bar.id == "tab-bar":
            self.tab = event.key
            self._show_tab()
            self.sync_location()
            return
        super().on_filter_bar_selected(event)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "upload-members":
            self._upload(self.container.member_service.upload_members, "Members uploaded successfully!")
        elif button_id == "upload-access":
            self._upload(self.container.member_service.upload_access_file, "Access file uploaded successfully!")
        elif button_id == "new-member":
            self.action_new_member()
        elif button_id == "edit-member":
            self.action_edit_member()
        elif button_id == "delete-member":
            self.action_delete_member()

    def on_row_chosen(self, item: Member) -> None:
        if item.id is not None:
            self.app.navigate(Route(f"/members/{item.id}"))

    # ------------------------------------------------------------------ #
    # manage actions
    # ------------------------------------------------------------------ #

    def _upload(self, fn, success_message: str) -> None:
        path_input = self.query_one("#upload-path", Input)
        path = path_input.value.strip()
        if not path:
            self.toast("Please select a file to upload", "warning")
            return

        Slogger.info("Uploading member file", {"path": path})
        self.mutate(
            fn,
            path,
            success_message=success_message,
            invalidate_queries=[MEMBERS_KEY],
            on_success=lambda _data, _payload: setattr(path_input, "value", ""),
        )

    def action_new_member(self) -> None:
        def handle(values: Optional[Dict[str, Any]]) -> None:
            if values is None:
                return
            member = Member(**values)
            self.mutate(
                self.container.member_service.create_member,
                member.to_api(),
                success_message="Member created successfully!",
                invalidate_queries=[MEMBERS_KEY],
            )

        self.app.push_screen(FormModal("New Member", MEMBER_FIELDS), handle)

    def action_edit_member(self) -> None:
        member: Optional[Member] = self.selected_item
        if member is None or member.id is None:
            self.toast("Select a member to edit", "warning")
            return

        def handle(values: Optional[Dict[str, Any]]) -> None:
            if values is None:
                return
            updated = Member(**{**values, "id": member.id})
            self.mutate(
                lambda body: self.container.member_service.update_member(member.id, body),
                updated.to_api(),
                success_message="Member updated successfully!",
                invalidate_queries=[MEMBERS_KEY, ("member", str(member.id))],
            )

        fields = [f for f in MEMBER_FIELDS if f.name != "id"]
        self.app.push_screen(FormModal(f"Edit Member #{member.id}", fields, asdict(member)), handle)

    def action_delete_member(self) -> None:
        member: Optional[Member] = self.selected_item
        if member is None or member.id is None:
            self.toast("Select a member to delete", "warning")
            return

        self.confirm(
            "Delete Member",
            f"Delete {member.name} (#{member.id})? This cannot be undone.",
            lambda: self.mutate(
                self.container.member_service.delete_member,
                member.id,
                success_message="Member deleted successfully!",
                invalidate_queries=[MEMBERS_KEY],
            ),
        )
