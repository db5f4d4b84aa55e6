# gym_dashboard/ui/screens/whatsapp.py
"""Send a WhatsApp template message through the server."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Label, Select

from gym_dashboard.services.whatsapp_service import LANGUAGES, split_parameters
from gym_dashboard.ui.screens.base import BaseScreen
from gym_dashboard.ui.widgets.record_table import Column, RecordTable

PHONE = re.compile(r"^\d{10,15}$")


@dataclass(frozen=True)
class TemplateExample:
    name: str
    description: str
    parameters: str
    example: str


TEMPLATE_EXAMPLES = (
    TemplateExample("payment_reminder", "Payment reminder template",
                    "Member Name, Amount, Due Date", "John Doe, 600, 2025-11-15"),
    TemplateExample("birthday_wishes", "Birthday wishes template", "Member Name, Age", "Jane Smith, 25"),
    TemplateExample("membership_expiry", "Membership expiry notification",
                    "Member Name, Expiry Date", "Mike Johnson, 2025-12-01"),
    TemplateExample("welcome_message", "Welcome new member", "Member Name, Gym Name", "Sarah Wilson, Rock Gym"),
)

TEMPLATE_COLUMNS = [
    Column("name", "Template", lambda t: t.name),
    Column("description", "Description", lambda t: t.description),
    Column("parameters", "Parameters", lambda t: t.parameters),
    Column("example", "Example", lambda t: t.example),
]


class WhatsAppScreen(BaseScreen):
    PATH = "/whatsapp"
    HEADING = "WhatsApp Messaging"

    BINDINGS = [Binding("ctrl+s", "send", "Send", show=True)]

    def compose_body(self) -> ComposeResult:
        with Vertical(id="whatsapp-form", classes="panel"):
            yield Label("Phone number (with country code)", classes="input-label")
            yield Input(placeholder="919876543210", id="wa-to")
            yield Label("Template name", classes="input-label")
            yield Input(placeholder="payment_reminder", id="wa-template")
            yield Label("Language", classes="input-label")
            yield Select([(label, code) for code, label in LANGUAGES], value="en", allow_blank=False, id="wa-language")
            yield Label("Parameters (comma-separated)", classes="input-label")
            yield Input(placeholder="John Doe, 600, 2025-11-15", id="wa-parameters")
            with Horizontal(classes="toolbar"):
                yield Button("Send Message", variant="primary", id="wa-send")
        yield Label("Template examples (Enter to use)", classes="section-title")
        yield RecordTable(TEMPLATE_COLUMNS, id="template-examples")

    def on_mount(self) -> None:
        super().on_mount()
        self.query_one("#template-examples", RecordTable).show(TEMPLATE_EXAMPLES)
        self.sync_location()

    def on_record_table_row_chosen(self, event: RecordTable.RowChosen) -> None:
        template: TemplateExample = event.item
        self.query_one("#wa-template", Input).value = template.name
        self.query_one("#wa-parameters", Input).value = template.example
        self.query_one("#wa-to", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "wa-send":
            self.action_send()

    def _reset_form(self) -> None:
        for input_id in ("#wa-to", "#wa-template", "#wa-parameters"):
            self.query_one(input_id, Input).value = ""
        self.query_one("#wa-language", Select).value = "en"

    def action_send(self) -> None:
        to = self.query_one("#wa-to", Input).value.strip()
        template = self.query_one("#wa-template", Input).value.strip()
        language: Optional[str] = self.query_one("#wa-language", Select).value
        parameters = self.query_one("#wa-parameters", Input).value

        if not PHONE.match(to):
            self.toast("Enter the phone number with country code, digits only", "warning")
            return
        if not template:
            self.toast("Template name is required", "warning")
            return

        whatsapp = self.container.whatsapp_service
        self.mutate(
            lambda payload: whatsapp.send_message(**payload),
            {
                "to": to,
                "template_name": template,
                "language": language or "en",
                "parameters": split_parameters(parameters),
            },
            success_message="WhatsApp message sent successfully!",
            on_success=lambda _data, _payload: self._reset_form(),
        )
