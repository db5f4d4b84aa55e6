# gym_dashboard/ui/widgets/notification.py
"""Toast notifications raised by queries, mutations and form checks."""

from __future__ import annotations

import itertools
import time
from typing import Callable, Dict, List, Optional, Tuple

from rich.console import RenderableType
from rich.panel import Panel
from rich.text import Text

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static

# level → (title, style, icon)
LEVEL_STYLES = {
    "info": ("Information", "blue", "ℹ"),
    "warning": ("Warning", "yellow", "⚠"),
    "error": ("Error", "red", "✗"),
    "success": ("Success", "green", "✓"),
}

DEFAULT_TIMEOUT = 5.0
MAX_VISIBLE = 4

_toast_ids = itertools.count()


class NotificationToast(Static):
    """One message; clicking it or letting the countdown run out removes it."""

    seconds_left = reactive(DEFAULT_TIMEOUT)
    repeats = reactive(1)

    def __init__(
        self,
        message: str,
        level: str = "info",
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        on_gone: Optional[Callable[["NotificationToast"], None]] = None,
    ) -> None:
        self.level = level if level in LEVEL_STYLES else "info"
        super().__init__(
            "",
            id=f"toast_{next(_toast_ids)}",
            classes=f"notification-toast toast-{self.level}",
        )
        self.message = message
        # None keeps the toast until it is clicked
        self.timeout = timeout
        self._on_gone = on_gone
        self._deadline = 0.0
        self._gone = False
        self.restart()

    @property
    def signature(self) -> Tuple[str, str]:
        return self.level, self.message

    def on_mount(self) -> None:
        if self.timeout is not None:
            self.set_interval(0.5, self._tick)

    def on_click(self) -> None:
        self.dismiss()

    def restart(self) -> None:
        if self.timeout is not None:
            self._deadline = time.monotonic() + self.timeout
            self.seconds_left = self.timeout

    def bump(self) -> None:
        """The same message arrived again while this toast is visible."""
        self.repeats += 1
        self.restart()

    def _tick(self) -> None:
        self.seconds_left = max(0.0, self._deadline - time.monotonic())
        if self.seconds_left <= 0:
            self.dismiss()

    def dismiss(self) -> None:
        if self._gone:
            return
        self._gone = True
        if self._on_gone:
            self._on_gone(self)
        self.remove()

    def render(self) -> RenderableType:
        title, style, icon = LEVEL_STYLES[self.level]
        body = Text.assemble((f"{icon} ", style), self.message)
        if self.repeats > 1:
            body.append(f" ×{self.repeats}", style=f"bold {style}")
        if self.timeout is not None:
            body.append(f" ({round(self.seconds_left)}s)", style="bright_black")
        return Panel(body, title=title, border_style=style, padding=(0, 1))


class NotificationContainer(Widget):
    """Stack of toasts docked to the right edge of a screen."""

    DEFAULT_CSS = """
    NotificationContainer {
        dock: right;
        layer: notifications;
        width: 48;
        height: auto;
        max-height: 100%;
        background: transparent;
    }
    """

    def __init__(self) -> None:
        super().__init__(id="notification-container")
        self._visible: Dict[Tuple[str, str], NotificationToast] = {}
        self._order: List[NotificationToast] = []

    def compose(self) -> ComposeResult:
        yield Vertical(id="toast-stack")

    @property
    def toasts(self) -> List[NotificationToast]:
        return list(self._order)

    def add_notification(
        self,
        message: str,
        level: str = "info",
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> NotificationToast:
        level = level if level in LEVEL_STYLES else "info"
        existing = self._visible.get((level, message))
        if existing is not None:
            existing.bump()
            return existing

        toast = NotificationToast(message, level, timeout=timeout, on_gone=self._forget)
        self._visible[toast.signature] = toast
        self._order.append(toast)
        self.query_one("#toast-stack").mount(toast)
        while len(self._order) > MAX_VISIBLE:
            self._order[0].dismiss()
        return toast

    def _forget(self, toast: NotificationToast) -> None:
        if self._visible.get(toast.signature) is toast:
            del self._visible[toast.signature]
        if toast in self._order:
            self._order.remove(toast)

    def clear_all(self) -> None:
        for toast in self.toasts:
            toast.dismiss()
