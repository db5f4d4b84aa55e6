# gym_dashboard/ui/screens/attendance.py
"""
Attendance: punch-record search, inactive members and active members.

Each tab owns a `ListStateController`; only the visible tab fetches, and
switching tabs drops the other tabs' results.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, ContentSwitcher, Input, Static

from gym_dashboard.errors import ValidationError
from gym_dashboard.models.attendance import InactiveEmployee, PunchRecord
from gym_dashboard.models.pagination import PageState, from_count_wrapper, from_spring_page
from gym_dashboard.services.attendance_service import EXPORT_FORMATS
from gym_dashboard.ui.controllers.list_state import FilterSpec, ListStateController
from gym_dashboard.ui.controllers.status_bar import StatusBarController
from gym_dashboard.ui.routing import Route
from gym_dashboard.ui.screens.base import BaseScreen
from gym_dashboard.ui.widgets.filter_bar import FilterBar
from gym_dashboard.ui.widgets.form_modal import FormField, parse_form
from gym_dashboard.ui.widgets.loading_indicator import LoadingOverlay
from gym_dashboard.ui.widgets.pagination import Pagination
from gym_dashboard.ui.widgets.record_table import Column, RecordTable
from gym_dashboard.utils.formatters import display, format_date, format_datetime, format_phone
from simple_logger import Slogger

ATTENDANCE_KEY = ("attendance",)

TABS = (("search", "Search Punches"), ("inactive", "Inactive Members"), ("active", "Active Members"))
DEFAULT_TAB = "search"

INACTIVE_FILTERS = (("7days", "7 Days"), ("15days", "15 Days"), ("30days", "30 Days"), ("60days", "60 Days"))
ACTIVE_FILTERS = (
    ("today", "Today", "today"),
    ("7days", "Last 7 Days", "last-7-days"),
    ("30days", "Last 30 Days", "last-30-days"),
    ("thismonth", "This Month", "this-month"),
)

SEARCH_FIELDS = [
    FormField("date", "Date", kind="date", placeholder="YYYY-MM-DD"),
    FormField("monthYear", "Month/Year", placeholder="MM/YYYY"),
    FormField("year", "Year", kind="int", placeholder="YYYY"),
    FormField("employeeName", "Employee Name"),
    FormField("employeeId", "Employee ID", kind="int"),
]
SEARCH_PARAMS = {spec.name: "" for spec in SEARCH_FIELDS}

PUNCH_COLUMNS = [
    Column("employee_id", "Employee ID", lambda p: display(p.employee_id), width=12),
    Column("name", "Name", lambda p: p.employee_name),
    Column("time", "Punch Time", lambda p: format_datetime(p.log_date_time)),
    Column("punch_id", "Punch ID", lambda p: display(p.punch_id)),
]

EMPLOYEE_COLUMNS = [
    Column("employee_id", "ID", lambda e: display(e.employee_id), width=8),
    Column("name", "Name", lambda e: e.employee_name),
    Column("contact", "Contact", lambda e: format_phone(e.contact_no)),
    Column("doj", "Joined", lambda e: format_date(e.doj)),
    Column("last_punch", "Last Punch", lambda e: format_datetime(e.last_punch_date)),
    Column("inactive_days", "Days Inactive", lambda e: display(e.inactive_days_since_last_punch)),
]


def has_search_criteria(state: PageState) -> bool:
    return any(state.param(name) for name in SEARCH_PARAMS)


def inactive_days(filter_key: Optional[str]) -> Optional[int]:
    """`"30days"` → 30."""
    if not filter_key or not filter_key.endswith("days"):
        return None
    try:
        return int(filter_key[: -len("days")])
    except ValueError:
        return None


@dataclass
class AttendanceTab:
    key: str
    controller: ListStateController
    columns: List[Column]
    noun: str


class AttendanceScreen(BaseScreen):
    PATH = "/attendance"
    HEADING = "Attendance"
    WATCH_KEYS = (ATTENDANCE_KEY,)

    BINDINGS = [
        ("r", "refresh", "Refresh"),
        ("left_square_bracket", "prev_page", "Prev Page"),
        ("right_square_bracket", "next_page", "Next Page"),
    ]

    def __init__(self, container, route: Optional[Route] = None, *, id: Optional[str] = "attendance_screen") -> None:
        super().__init__(container, route, id=id)
        self.tab = DEFAULT_TAB
        self.tabs: Dict[str, AttendanceTab] = {
            "search": AttendanceTab("search", self._search_controller(), PUNCH_COLUMNS, "Punch records"),
            "inactive": AttendanceTab("inactive", self._inactive_controller(), EMPLOYEE_COLUMNS, "Inactive members"),
            "active": AttendanceTab("active", self._active_controller(), EMPLOYEE_COLUMNS, "Active members"),
        }
        for key, tab in self.tabs.items():
            tab.controller.on_change = lambda _state, key=key: self._state_changed(key)

    # ------------------------------------------------------------------ #
    # controllers
    # ------------------------------------------------------------------ #

    def _search_controller(self) -> ListStateController:
        attendance = self.container.attendance_service

        def fetch(s: PageState) -> Any:
            # monthYear wins over year, which wins over the generic search
            if s.param("monthYear"):
                return attendance.get_punch_details_by_month_year_paginated(s.param("monthYear"), s.page, s.size)
            if s.param("year"):
                return attendance.get_punch_details_by_year_paginated(s.param("year"), s.page, s.size)
            return attendance.get_punch_details_paginated(
                employee_id=s.param("employeeId") or None,
                employee_name=s.param("employeeName") or None,
                date=s.param("date") or None,
                page=s.page,
                size=s.size,
                sort_by="logDateTime",
                sort_dir="desc",
            )

        spec = FilterSpec(
            "search", "Search",
            query_key=lambda s: (*ATTENDANCE_KEY, "search", s.page, s.size, *(s.param(n) for n in SEARCH_PARAMS)),
            fetch=fetch,
            decode=lambda payload, s: from_spring_page(payload, PunchRecord.from_api, s.size),
            enabled=has_search_criteria,
            sortable=False,
            searchable=False,
        )
        return ListStateController(
            [spec],
            default_filter="search",
            page_size=self.per_page,
            sort_by="logDateTime",
            sort_dir="desc",
            url_params=SEARCH_PARAMS,
            name="attendance-search",
        )

    def _inactive_controller(self) -> ListStateController:
        attendance = self.container.attendance_service
        filters = [
            FilterSpec(
                key, label,
                query_key=lambda s: (*ATTENDANCE_KEY, "inactive", s.filter, s.page, s.size),
                fetch=lambda s: attendance.get_inactive_last_days_paginated(inactive_days(s.filter), s.page, s.size),
                decode=lambda payload, s: from_count_wrapper(payload, InactiveEmployee.from_api, "employees", s.size),
                sortable=False,
                searchable=False,
            )
            for key, label in INACTIVE_FILTERS
        ]
        return ListStateController(filters, page_size=self.per_page, name="attendance-inactive")

    def _active_controller(self) -> ListStateController:
        attendance = self.container.attendance_service
        periods = {key: period for key, _label, period in ACTIVE_FILTERS}
        filters = [
            FilterSpec(
                key, label,
                query_key=lambda s: (*ATTENDANCE_KEY, "active", s.filter, s.page, s.size),
                fetch=lambda s: attendance.get_active_employees(periods[s.filter], True, s.page, s.size),
                decode=lambda payload, s: from_count_wrapper(payload, InactiveEmployee.from_api, "employees", s.size),
                sortable=False,
                searchable=False,
            )
            for key, label, _period in ACTIVE_FILTERS
        ]
        return ListStateController(filters, page_size=self.per_page, name="attendance-active")

    @property
    def current(self) -> AttendanceTab:
        return self.tabs[self.tab]

    # ------------------------------------------------------------------ #
    # compose
    # ------------------------------------------------------------------ #

    def compose_body(self) -> ComposeResult:
        yield FilterBar(TABS, active=self.tab, id="tab-bar")
        with Horizontal(classes="toolbar"):
            yield Input(placeholder="Path to punch data file (.xlsx / .csv)", id="punch-file")
            yield Button("Upload Punch Data", variant="primary", id="upload-punch")
        yield LoadingOverlay(id="loading-overlay")
        with ContentSwitcher(initial=DEFAULT_TAB, id="attendance-tabs"):
            with Vertical(id="search"):
                with Horizontal(classes="toolbar"):
                    for spec in SEARCH_FIELDS:
                        yield Input(placeholder=spec.placeholder or spec.label, id=f"search-{spec.name}")
                    yield Button("Search", variant="primary", id="run-search")
                    yield Button("Clear", id="clear-search")
                yield RecordTable(PUNCH_COLUMNS, empty_message="Choose a filter and press Search", id="search-table")
                yield Pagination(id="search-pagination")
            with Vertical(id="inactive"):
                with Horizontal(classes="toolbar"):
                    yield FilterBar(INACTIVE_FILTERS, id="inactive-filters")
                    yield Button("Export Excel", id="export-excel")
                    yield Button("Export PDF", id="export-pdf")
                yield RecordTable(EMPLOYEE_COLUMNS, empty_message="Pick an inactivity window", id="inactive-table")
                yield Pagination(id="inactive-pagination")
            with Vertical(id="active"):
                yield FilterBar([(key, label) for key, label, _ in ACTIVE_FILTERS], id="active-filters")
                yield RecordTable(EMPLOYEE_COLUMNS, empty_message="Pick a period", id="active-table")
                yield Pagination(id="active-pagination")
        yield Static(id="status-bar", markup=False)

    def on_mount(self) -> None:
        super().on_mount()
        self.status_controller = StatusBarController(self.query_one("#status-bar", Static), "Records")

        tab = self.route.params.get("tab", DEFAULT_TAB)
        self.tab = tab if tab in self.tabs else DEFAULT_TAB
        self.current.controller.apply_query_params(self.route.params)
        if self.tab == "search":
            self._fill_search_inputs()
        else:
            self.query_one(f"#{self.tab}-filters", FilterBar).set_active(self.current.controller.state.filter)

        self.query_one("#tab-bar", FilterBar).set_active(self.tab)
        self.query_one("#attendance-tabs", ContentSwitcher).current = self.tab
        self.sync_location()
        self.reload()

    def _fill_search_inputs(self) -> None:
        state = self.tabs["search"].controller.state
        for spec in SEARCH_FIELDS:
            self.query_one(f"#search-{spec.name}", Input).value = state.param(spec.name)

    def location_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.tab != DEFAULT_TAB:
            params["tab"] = self.tab
        params.update(self.current.controller.to_query_params())
        return params

    # ------------------------------------------------------------------ #
    # loading
    # ------------------------------------------------------------------ #

    def refresh_data(self) -> None:
        self.reload()

    def reload(self) -> None:
        self.run_worker(self._load(self.tab), exclusive=True, group=f"attendance-{self.tab}")

    async def _load(self, key: str) -> None:
        tab = self.tabs[key]
        if not tab.controller.is_enabled:
            self.render_tab(key)
            return
        overlay = self.query_one(LoadingOverlay)
        overlay.start(key, f"Loading {tab.noun.lower()}...")
        self.render_tab(key)
        await tab.controller.load(self.query_client)
        if tab.controller.loading:
            return
        overlay.stop(key)
        self.render_tab(key)

    def render_tab(self, key: str) -> None:
        controller = self.tabs[key].controller
        result = controller.result
        self.query_one(f"#{key}-table", RecordTable).show(result.items)
        self.query_one(f"#{key}-pagination", Pagination).update_from(result)
        if key == self.tab:
            spec = controller.active_spec
            self.status_controller.noun = self.tabs[key].noun
            self.status_controller.update({
                "total": result.total_elements,
                "pages": result.total_pages,
                "current_page": result.current_page,
                "filter": spec.label if spec and key != "search" else None,
                "loading": controller.loading,
            })

    def _state_changed(self, key: str) -> None:
        if key != self.tab:
            return
        self.sync_location()
        self.reload()

    def switch_tab(self, key: str) -> None:
        if key == self.tab or key not in self.tabs:
            return
        self.tab = key
        for other_key, other in self.tabs.items():
            if other_key != key:
                other.controller.reset()
                self.render_tab(other_key)
        self._fill_search_inputs()
        for bar_id in ("#inactive-filters", "#active-filters"):
            self.query_one(bar_id, FilterBar).set_active(None)
        self.query_one("#attendance-tabs", ContentSwitcher).current = key
        self.sync_location()
        self.render_tab(key)

    # ------------------------------------------------------------------ #
    # events
    # ------------------------------------------------------------------ #

    def on_filter_bar_selected(self, event: FilterBar.Selected) -> None:
        bar_id = event.bar.id
        if bar_id == "tab-bar":
            self.switch_tab(event.key)
        elif bar_id == "inactive-filters":
            self.tabs["inactive"].controller.set_filter(event.key)
        elif bar_id == "active-filters":
            self.tabs["active"].controller.set_filter(event.key)

    def on_pagination_page_changed(self, event: Pagination.PageChanged) -> None:
        key = (event.pagination.id or "").removesuffix("-pagination")
        if key in self.tabs:
            self.tabs[key].controller.set_page(event.page)

    def on_pagination_page_size_changed(self, event: Pagination.PageSizeChanged) -> None:
        key = (event.pagination.id or "").removesuffix("-pagination")
        if key in self.tabs:
            self.tabs[key].controller.set_page_size(event.size)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id and event.input.id.startswith("search-"):
            self.run_search()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "run-search":
            self.run_search()
        elif button_id == "clear-search":
            self.tabs["search"].controller.reset()
            self._fill_search_inputs()
        elif button_id == "upload-punch":
            self.upload_punch_data()
        elif button_id == "export-excel":
            self.export_inactive("excel")
        elif button_id == "export-pdf":
            self.export_inactive("pdf")

    # ------------------------------------------------------------------ #
    # actions
    # ------------------------------------------------------------------ #

    def run_search(self) -> None:
        raw = {spec.name: self.query_one(f"#search-{spec.name}", Input).value for spec in SEARCH_FIELDS}
        try:
            values = parse_form(SEARCH_FIELDS, raw)
        except ValidationError as e:
            self.toast(str(e), "warning")
            return
        if not any(value not in (None, "") for value in values.values()):
            self.toast("Please select at least one filter", "warning")
            return

        params = {name: "" if value is None else str(value) for name, value in values.items()}
        controller = self.tabs["search"].controller
        if params != dict(controller.state.params):
            controller.set_params(**params)
            return
        # Same criteria: search again from the first page
        self.query_client.invalidate((*ATTENDANCE_KEY, "search"))
        if controller.state.page != 0:
            controller.set_page(0)
        else:
            self.reload()

    def upload_punch_data(self) -> None:
        file_input = self.query_one("#punch-file", Input)
        path = file_input.value.strip()
        if not path:
            self.toast("Please select a file to upload", "warning")
            return
        Slogger.info("Uploading punch data", {"path": path})
        self.mutate(
            self.container.attendance_service.upload_punch_data,
            path,
            success_message="Punch data uploaded successfully!",
            invalidate_queries=[ATTENDANCE_KEY, ("members",), ("reports",)],
            on_success=lambda _data, _payload: setattr(file_input, "value", ""),
        )

    def export_inactive(self, fmt: str) -> None:
        days = inactive_days(self.tabs["inactive"].controller.state.filter)
        if days is None:
            self.toast("Select an inactivity window to export", "warning")
            return

        directory = Path(self.container.config.get("downloads", {}).get("directory", ".")).expanduser()
        dest = directory / f"inactive_members_{days}_days_{date.today().isoformat()}.{EXPORT_FORMATS[fmt]}"
        label = "Excel" if fmt == "excel" else "PDF"
        self.mutate(
            lambda f: self.container.attendance_service.export_inactive_members(days, f, dest),
            fmt,
            success_message=f"{label} file downloaded successfully!",
            on_success=lambda path, _payload: self.toast(f"Saved to {path}", "info"),
        )

    def action_refresh(self) -> None:
        controller = self.current.controller
        spec = controller.active_spec
        if spec is not None and controller.is_enabled:
            self.query_client.invalidate(spec.query_key(controller.state))
        self.reload()

    def action_next_page(self) -> None:
        result = self.current.controller.result
        if result.has_next():
            self.current.controller.set_page(result.current_page + 1)

    def action_prev_page(self) -> None:
        result = self.current.controller.result
        if result.has_prev():
            self.current.controller.set_page(result.current_page - 1)
