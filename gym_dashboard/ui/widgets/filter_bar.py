"""
Row of mutually exclusive filter/tab buttons
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button


class FilterBar(Horizontal):
    DEFAULT_CSS = """
    FilterBar {
        height: 3;
        width: 100%;
    }

    FilterBar Button {
        margin: 0 1 0 0;
        min-width: 8;
    }
    """

    class Selected(Message):
        def __init__(self, bar: "FilterBar", key: str) -> None:
            super().__init__()
            self.bar = bar
            self.key = key

    def __init__(
        self,
        options: Sequence[Tuple[str, str]],
        active: Optional[str] = None,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.options = list(options)
        self.active = active

    def compose(self) -> ComposeResult:
        for key, label in self.options:
            yield Button(label, name=key, variant=self._variant(key), classes="filter-button")

    def _variant(self, key: str) -> str:
        return "primary" if key == self.active else "default"

    def set_active(self, key: Optional[str]) -> None:
        self.active = key
        for button in self.query(Button):
            button.variant = self._variant(button.name)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        key = event.button.name
        if key is None or key == self.active:
            return
        self.set_active(key)
        self.post_message(self.Selected(self, key))
