"""
DataTable for list screens: declarative columns, sortable headers, row → model lookup
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from rich.text import Text
from textual.message import Message
from textual.widgets import DataTable

from gym_dashboard.models.pagination import SORT_ASC


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    render: Callable[[Any], Any]
    sort_field: Optional[str] = None   # server-side sort key; None = not sortable
    width: Optional[int] = None


class RecordTable(DataTable):
    """
    Rows are models; the table keeps them so selection hands back the model.
    """

    class SortRequested(Message):
        """A sortable column header was clicked"""
        def __init__(self, field: str) -> None:
            super().__init__()
            self.field = field

    class RowChosen(Message):
        """Enter / click on a row"""
        def __init__(self, item: Any) -> None:
            super().__init__()
            self.item = item

    def __init__(
        self,
        columns: Sequence[Column] = (),
        *,
        empty_message: str = "No records found",
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.cursor_type = "row"
        self.zebra_stripes = True
        self.columns_spec: List[Column] = list(columns)
        self.items: List[Any] = []
        self.empty_message = empty_message
        self._sort_by: Optional[str] = None
        self._sort_dir = SORT_ASC

    def on_mount(self) -> None:
        self.add_class("records-table")
        self._render_columns()

    def set_columns(self, columns: Sequence[Column]) -> None:
        self.columns_spec = list(columns)
        self.items = []
        self.clear(columns=True)
        self._render_columns()

    def _header(self, column: Column) -> Text:
        label = Text(column.label, style="bold")
        if column.sort_field and column.sort_field == self._sort_by:
            label.append(" ▲" if self._sort_dir == SORT_ASC else " ▼")
        elif column.sort_field:
            label.append(" ↕", style="bright_black")
        return label

    def _render_columns(self) -> None:
        for column in self.columns_spec:
            self.add_column(self._header(column), key=column.key, width=column.width)

    def show(self, items: Sequence[Any], sort_by: Optional[str] = None, sort_dir: str = SORT_ASC) -> None:
        """Replace all rows."""
        self._sort_by = sort_by
        self._sort_dir = sort_dir
        self.clear(columns=True)
        self._render_columns()
        self.items = list(items)

        if not self.items:
            placeholder = [Text(self.empty_message, style="italic bright_black")]
            placeholder += [""] * (len(self.columns_spec) - 1)
            if self.columns_spec:
                self.add_row(*placeholder, key="__empty__")
            return

        for index, item in enumerate(self.items):
            cells = []
            for column in self.columns_spec:
                value = column.render(item)
                cells.append(value if isinstance(value, Text) else Text(str(value)))
            self.add_row(*cells, key=str(index))

    @property
    def selected_item(self) -> Optional[Any]:
        if not self.items or self.cursor_row is None:
            return None
        if 0 <= self.cursor_row < len(self.items):
            return self.items[self.cursor_row]
        return None

    def on_data_table_header_selected(self, event: DataTable.HeaderSelected) -> None:
        event.stop()
        key = event.column_key.value
        for column in self.columns_spec:
            if column.key == key and column.sort_field:
                self.post_message(self.SortRequested(column.sort_field))
                return

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        if event.row_key.value == "__empty__":
            return
        item = self.items[int(event.row_key.value)]
        self.post_message(self.RowChosen(item))
