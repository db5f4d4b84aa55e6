# gym_dashboard/ui/widgets/confirmation_modal.py
"""
Yes/no modal guarding destructive actions.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label


class ConfirmationModal(ModalScreen[bool]):
    """Dismisses with True when confirmed, False otherwise."""

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("enter", "confirm", "Confirm"),
    ]

    def __init__(
        self,
        title: str,
        message: str,
        *,
        confirm_label: str = "Delete",
        confirm_variant: str = "error",
        id: str | None = None,
        name: str | None = None,
        classes: str | None = None,
    ):
        super().__init__(id=id, name=name, classes=classes)
        self.title_text = title
        self.message = message
        self.confirm_label = confirm_label
        self.confirm_variant = confirm_variant

    def compose(self) -> ComposeResult:
        with Container(id="confirmation-container", classes="modal-container"):
            yield Label(self.title_text, id="confirmation-title", classes="modal-title")
            yield Label(self.message, id="confirmation-message")
            with Horizontal(id="confirmation-buttons", classes="modal-buttons"):
                yield Button("Cancel", variant="primary", id="no-button")
                yield Button(self.confirm_label, variant=self.confirm_variant, id="yes-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "yes-button")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
