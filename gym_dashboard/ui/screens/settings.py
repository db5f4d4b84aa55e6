# gym_dashboard/ui/screens/settings.py
"""Dated fee settings: browse by period or key, create/edit/deactivate/delete."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Label, Select

from gym_dashboard.models.fields import first_of, parse_amount
from gym_dashboard.models.pagination import from_list_wrapper
from gym_dashboard.models.setting import SETTING_KEY_LABELS, SETTING_KEYS, Setting
from gym_dashboard.ui.controllers.list_state import FilterSpec, ListStateController
from gym_dashboard.ui.screens.base import ListScreen
from gym_dashboard.ui.widgets.form_modal import FormField, FormModal
from gym_dashboard.ui.widgets.record_table import Column
from gym_dashboard.utils.formatters import display, format_currency, format_date

SETTINGS_KEY = ("settings",)

KEY_OPTIONS = [(SETTING_KEY_LABELS[key], key) for key in SETTING_KEYS]

STATUS_STYLES = {"CURRENT": "green", "FUTURE": "cyan", "EXPIRED": "bright_black"}

SETTING_FIELDS = [
    FormField("setting_key", "Setting", kind="select", required=True, options=KEY_OPTIONS),
    FormField("setting_value", "Value", required=True),
    FormField("effective_from", "Effective From", kind="date", required=True),
    FormField("effective_to", "Effective To", kind="date"),
    FormField("description", "Description"),
    FormField("is_active", "Active", kind="bool", default=True),
]


def fee_value(payload: Any) -> Optional[float]:
    """The fee endpoints answer with a bare number or a setting object."""
    if isinstance(payload, dict):
        return parse_amount(first_of(payload, "settingValue", "value", "fee", "amount"))
    return parse_amount(payload)


def _status(setting: Setting) -> Text:
    status = setting.status or ("ACTIVE" if setting.is_active else "INACTIVE")
    return Text(status, style=STATUS_STYLES.get(status, "yellow"))


class SettingsScreen(ListScreen):
    PATH = "/settings"
    HEADING = "Settings"
    NOUN = "Settings"
    SHOW_SEARCH = False
    WATCH_KEYS = (SETTINGS_KEY,)

    BINDINGS = ListScreen.BINDINGS + [
        Binding("n", "new_setting", "New", show=True),
        Binding("e", "edit_setting", "Edit", show=True),
        Binding("x", "deactivate_setting", "Deactivate", show=True),
        Binding("delete", "delete_setting", "Delete", show=True),
    ]

    def build_controller(self) -> ListStateController:
        settings = self.container.settings_service

        def decode(payload: Any, s) -> Any:
            return from_list_wrapper(payload, Setting.from_api, s, "data")

        filters = [
            FilterSpec("all", "All Settings", query_key=lambda s: (*SETTINGS_KEY, "all"),
                       fetch=lambda s: settings.get_all(), decode=decode, sortable=False),
            FilterSpec("current", "Current", query_key=lambda s: (*SETTINGS_KEY, "current"),
                       fetch=lambda s: settings.get_current(), decode=decode, sortable=False),
            FilterSpec("future", "Future", query_key=lambda s: (*SETTINGS_KEY, "future"),
                       fetch=lambda s: settings.get_future(), decode=decode, sortable=False),
            FilterSpec("history", "History by Key", query_key=lambda s: (*SETTINGS_KEY, "key", s.param("key")),
                       fetch=lambda s: settings.get_by_key(s.param("key")), decode=decode,
                       enabled=lambda s: s.param("key") in SETTING_KEYS, sortable=False),
        ]
        return ListStateController(
            filters,
            default_filter="all",
            page_size=self.per_page,
            url_params={"key": "MONTHLY_FEE"},
            name="settings",
        )

    def columns_for(self, filter_key: Optional[str]) -> List[Column]:
        return [
            Column("key", "Setting", lambda s: s.label),
            Column("value", "Value", lambda s: display(s.setting_value)),
            Column("from", "Effective From", lambda s: format_date(s.effective_from)),
            Column("to", "Effective To", lambda s: format_date(s.effective_to) if s.effective_to else "Open"),
            Column("status", "Status", _status),
            Column("description", "Description", lambda s: display(s.description)),
        ]

    def compose_toolbar(self) -> ComposeResult:
        yield Label("", id="current-fees", classes="summary")
        with Horizontal(classes="toolbar"):
            yield Select(KEY_OPTIONS, value="MONTHLY_FEE", allow_blank=False, id="history-key")
            yield Button("New Setting", variant="success", id="new-setting")
            yield Button("Edit", id="edit-setting")
            yield Button("Deactivate", variant="warning", id="deactivate-setting")
            yield Button("Delete", variant="error", id="delete-setting")

    def after_seed(self) -> None:
        key = self.controller.state.param("key")
        select = self.query_one("#history-key", Select)
        if key in SETTING_KEYS:
            select.value = key
        select.display = self.controller.state.filter == "history"

    def refresh_data(self) -> None:
        super().refresh_data()
        self.run_worker(self._load_fees(), exclusive=True, group="current-fees")

    def on_mount(self) -> None:
        super().on_mount()
        self.run_worker(self._load_fees(), exclusive=True, group="current-fees")

    async def _load_fees(self) -> None:
        services = self.container.settings_service
        monthly = await self.fetch((*SETTINGS_KEY, "fee", "monthly"), services.get_monthly_fee, silent=True)
        admission = await self.fetch((*SETTINGS_KEY, "fee", "admission"), services.get_admission_fee, silent=True)
        self.query_one("#current-fees", Label).update(
            f"Current monthly fee: {format_currency(fee_value(monthly.data))}  •  "
            f"Current admission fee: {format_currency(fee_value(admission.data))}"
        )

    # ---------- events ----------
    def on_filter_bar_selected(self, event) -> None:
        super().on_filter_bar_selected(event)
        self.query_one("#history-key", Select).display = self.controller.state.filter == "history"

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "history-key" and event.value in SETTING_KEYS:
            self.controller.set_param("key", str(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        actions = {
            "new-setting": self.action_new_setting,
            "edit-setting": self.action_edit_setting,
            "deactivate-setting": self.action_deactivate_setting,
            "delete-setting": self.action_delete_setting,
        }
        action = actions.get(event.button.id or "")
        if action:
            action()

    # ---------- actions ----------
    def _save(self, values: Dict[str, Any], setting_id: Optional[int] = None) -> None:
        if parse_amount(values["setting_value"]) is None:
            self.toast("Value must be a number", "warning")
            return
        if values["effective_to"] and values["effective_to"] < values["effective_from"]:
            self.toast("Effective To must be after Effective From", "warning")
            return
        body = Setting(id=setting_id, status=None, **values).to_api()
        services = self.container.settings_service
        if setting_id is None:
            self.mutate(services.create, body, success_message="Setting created successfully!",
                        invalidate_queries=[SETTINGS_KEY])
        else:
            self.mutate(lambda b: services.update(setting_id, b), body,
                        success_message="Setting updated successfully!", invalidate_queries=[SETTINGS_KEY])

    def action_new_setting(self) -> None:
        def handle(values: Optional[Dict[str, Any]]) -> None:
            if values is not None:
                self._save(values)

        self.app.push_screen(FormModal("New Setting", SETTING_FIELDS), handle)

    def _selected(self, verb: str) -> Optional[Setting]:
        setting: Optional[Setting] = self.selected_item
        if setting is None or setting.id is None:
            self.toast(f"Select a setting to {verb}", "warning")
            return None
        return setting

    def action_edit_setting(self) -> None:
        setting = self._selected("edit")
        if setting is None:
            return

        def handle(values: Optional[Dict[str, Any]]) -> None:
            if values is not None:
                self._save(values, setting.id)

        self.app.push_screen(FormModal("Edit Setting", SETTING_FIELDS, asdict(setting)), handle)

    def action_deactivate_setting(self) -> None:
        setting = self._selected("deactivate")
        if setting is None:
            return
        self.confirm(
            "Deactivate Setting",
            f"Deactivate {setting.label} = {setting.setting_value}?",
            lambda: self.mutate(
                self.container.settings_service.deactivate,
                setting.id,
                success_message="Setting deactivated successfully!",
                invalidate_queries=[SETTINGS_KEY],
            ),
            label="Deactivate",
        )

    def action_delete_setting(self) -> None:
        setting = self._selected("delete")
        if setting is None:
            return
        self.confirm(
            "Delete Setting",
            f"Delete {setting.label} effective {format_date(setting.effective_from)}?",
            lambda: self.mutate(
                self.container.settings_service.delete,
                setting.id,
                success_message="Setting deleted successfully!",
                invalidate_queries=[SETTINGS_KEY],
            ),
        )
