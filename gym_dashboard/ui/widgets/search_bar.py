"""
Search box shared by the list pages
"""

from typing import Optional

from textual.binding import Binding
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, Input


class SearchBar(Horizontal):
    """
    Text input with Search and Clear buttons.

    Typing posts `Changed` for every edit; the owning list debounces those.
    Enter or the Search button posts `Submitted` so the list can skip the wait.
    Clearing posts both, so an emptied box reloads immediately.
    """

    DEFAULT_CSS = """
    SearchBar {
        height: auto;
        margin: 0 0 1 0;
    }

    SearchBar .search-input {
        width: 1fr;
    }

    SearchBar Button {
        margin-left: 1;
    }
    """

    BINDINGS = [Binding("escape", "clear", "Clear search", show=False)]

    class Changed(Message):
        def __init__(self, bar: "SearchBar", term: str) -> None:
            super().__init__()
            self.bar = bar
            self.term = term

    class Submitted(Message):
        def __init__(self, bar: "SearchBar", term: str) -> None:
            super().__init__()
            self.bar = bar
            self.term = term

    def __init__(
        self,
        placeholder: str = "Search by name, ID or phone...",
        *,
        value: str = "",
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.placeholder = placeholder
        self.term = value

    def compose(self):
        yield Input(value=self.term, placeholder=self.placeholder, classes="search-input")
        yield Button("Search", classes="search-go")
        yield Button("Clear", classes="search-clear")

    @property
    def _input(self) -> Input:
        return self.query_one(".search-input", Input)

    def focus_input(self) -> None:
        self._input.focus()

    def reset(self) -> None:
        """Empty the box without posting anything."""
        self.term = ""
        self._input.value = ""

    def action_clear(self) -> None:
        if not self._input.value and not self.term:
            return
        self._input.value = ""
        self.term = ""
        self.post_message(self.Changed(self, ""))
        self.post_message(self.Submitted(self, ""))

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        # Input.Changed also fires when the value is set programmatically
        if event.value != self.term:
            self.term = event.value
            self.post_message(self.Changed(self, self.term))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.term = event.value
        self.post_message(self.Submitted(self, self.term))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.has_class("search-clear"):
            self.action_clear()
        else:
            self.term = self._input.value
            self.post_message(self.Submitted(self, self.term))
