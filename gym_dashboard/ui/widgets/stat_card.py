"""Dashboard tile: a title, a server-provided figure, and its own loading flag."""

from __future__ import annotations

from typing import Optional

from rich.console import RenderableType
from rich.panel import Panel
from rich.text import Text
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Static


class StatCard(Static):
    value = reactive("-")
    busy = reactive(False)
    failed = reactive(False)

    class Pressed(Message):
        def __init__(self, route: str) -> None:
            super().__init__()
            self.route = route

    def __init__(
        self,
        title: str,
        route: str,
        *,
        hotkey: Optional[str] = None,
        style: str = "cyan",
        id: Optional[str] = None,
    ) -> None:
        super().__init__("", id=id, classes="stat-card")
        self.title_text = title
        self.route = route
        self.hotkey = hotkey
        self.accent = style

    def set_value(self, value: str) -> None:
        self.failed = False
        self.busy = False
        self.value = value

    def set_failed(self) -> None:
        self.busy = False
        self.failed = True
        self.value = "-"

    def on_click(self) -> None:
        self.post_message(self.Pressed(self.route))

    def render(self) -> RenderableType:
        if self.busy:
            body = Text("Loading…", style="bright_black")
        elif self.failed:
            body = Text("unavailable", style="red")
        else:
            body = Text(str(self.value), style=f"bold {self.accent}")
        title = f"[{self.hotkey}] {self.title_text}" if self.hotkey else self.title_text
        return Panel(body, title=title, border_style=self.accent, padding=(1, 2))
