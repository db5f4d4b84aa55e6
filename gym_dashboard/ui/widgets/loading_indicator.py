"""
Loading indicator shown while any tracked request is in flight.
"""

from __future__ import annotations

from typing import Dict, Hashable

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import LoadingIndicator, Static


class LoadingOverlay(Static):
    """Visible while at least one key is active; shows the newest message."""

    DEFAULT_CSS = """
    LoadingOverlay {
        height: 1;
        display: none;
    }

    LoadingOverlay LoadingIndicator {
        width: 8;
        height: 1;
    }
    """

    is_loading = reactive(False)
    message = reactive("Loading...")

    def __init__(
        self,
        message: str = "Loading...",
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ):
        super().__init__(name=name, id=id, classes=classes)
        self._default_message = message
        self._active: Dict[Hashable, str] = {}
        self.message = message

    def compose(self) -> ComposeResult:
        with Horizontal(id="loading-container"):
            yield LoadingIndicator()
            yield Static(self.message, id="loading-message")

    def watch_is_loading(self, is_loading: bool) -> None:
        self.display = is_loading

    def watch_message(self, message: str) -> None:
        if self.is_mounted:
            self.query_one("#loading-message", Static).update(message)

    def start(self, key: Hashable = "default", message: str | None = None) -> None:
        self._active[key] = message or self._default_message
        self.message = self._active[key]
        self.is_loading = True

    def stop(self, key: Hashable = "default") -> None:
        self._active.pop(key, None)
        if self._active:
            self.message = next(reversed(self._active.values()))
        else:
            self.message = self._default_message
            self.is_loading = False

    def active(self, key: Hashable) -> bool:
        return key in self._active
