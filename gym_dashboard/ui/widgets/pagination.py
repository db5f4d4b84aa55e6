"""
Pagination widget for navigating through server-side pages
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.message import Message
from textual.widgets import Button, Label, Select

PAGE_SIZE_OPTIONS = (5, 10, 25, 50, 100)
ELLIPSIS = "..."
WINDOW_DELTA = 2

PageLabel = Union[int, str]


def _coerce(value: Any, default: int) -> int:
    """Numeric input → int; anything non-numeric (None, NaN, bool, junk) → default."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return default if math.isnan(value) or math.isinf(value) else int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            try:
                parsed = float(value)
            except ValueError:
                return default
            return default if math.isnan(parsed) or math.isinf(parsed) else int(parsed)
    return default


def page_window(current_page: int, total_pages: int, delta: int = WINDOW_DELTA) -> List[PageLabel]:
    """
    1-based page labels to show for 0-based `current_page`.

    Always shows the first and last page plus `current_page - delta ..
    current_page + delta` clipped to the interior; each side collapses into
    a single ellipsis independently.
    """
    if total_pages <= 1:
        return [1] if total_pages == 1 else []

    middle = range(max(2, current_page - delta), min(total_pages - 1, current_page + delta) + 1)

    pages: List[PageLabel] = [1]
    if current_page - delta > 2:
        pages.append(ELLIPSIS)
    pages.extend(middle)
    if current_page + delta < total_pages - 1:
        pages.append(ELLIPSIS)
    pages.append(total_pages)
    return pages


@dataclass(frozen=True)
class PaginationView:
    current_page: int
    total_pages: int
    total_elements: int
    page_size: int
    pages: tuple

    @property
    def start(self) -> int:
        return self.current_page * self.page_size + 1

    @property
    def end(self) -> int:
        return min((self.current_page + 1) * self.page_size, self.total_elements)

    @property
    def has_prev(self) -> bool:
        return self.current_page > 0

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages - 1

    @property
    def summary(self) -> str:
        return f"Showing {self.start} to {self.end} of {self.total_elements} results"


def build_pagination_view(
    current_page: Any,
    total_pages: Any,
    total_elements: Any,
    page_size: Any,
) -> Optional[PaginationView]:
    """Validated view model, or None when there is nothing to paginate."""
    current = _coerce(current_page, 0)
    pages = _coerce(total_pages, 0)
    total = _coerce(total_elements, 0)
    size = _coerce(page_size, 10)
    if size <= 0:
        size = 10

    if pages <= 1:
        return None

    current = min(max(current, 0), pages - 1)
    return PaginationView(
        current_page=current,
        total_pages=pages,
        total_elements=max(total, 0),
        page_size=size,
        pages=tuple(page_window(current, pages)),
    )


class Pagination(Container):
    """
    Numbered pagination with prev/next buttons and a page-size selector
    """

    DEFAULT_CSS = """
    Pagination {
        layout: horizontal;
        height: 3;
        padding: 0 1;
    }

    Pagination #pagination-summary {
        width: 1fr;
        content-align: left middle;
        height: 3;
    }

    Pagination #page-buttons {
        width: auto;
        height: 3;
    }

    Pagination Button {
        min-width: 5;
        margin: 0 0;
    }

    Pagination .page-ellipsis {
        width: 5;
        height: 3;
        content-align: center middle;
    }

    Pagination #page-size {
        width: 14;
    }
    """

    class PageChanged(Message):
        """Page changed message (0-based page)"""
        def __init__(self, pagination: "Pagination", page: int) -> None:
            super().__init__()
            self.pagination = pagination
            self.page = page

        @property
        def control(self) -> "Pagination":
            return self.pagination

    class PageSizeChanged(Message):
        """Page size changed message"""
        def __init__(self, pagination: "Pagination", size: int) -> None:
            super().__init__()
            self.pagination = pagination
            self.size = size

        @property
        def control(self) -> "Pagination":
            return self.pagination

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.view: Optional[PaginationView] = None
        self.page_size = 10

    def compose(self) -> ComposeResult:
        """Create child widgets"""
        yield Label("", id="pagination-summary")
        yield Button("‹ Prev", id="prev-page")
        yield Horizontal(id="page-buttons")
        yield Button("Next ›", id="next-page")
        yield Select(
            [(f"{size} / page", size) for size in PAGE_SIZE_OPTIONS],
            value=10,
            allow_blank=False,
            id="page-size",
        )

    def on_mount(self) -> None:
        self.display = False

    @property
    def summary_text(self) -> str:
        return self.view.summary if self.view else ""

    def update_from(self, result) -> None:
        """Convenience for a `PageResult`."""
        self.update_view(result.current_page, result.total_pages, result.total_elements, result.page_size)

    def update_view(self, current_page: Any, total_pages: Any, total_elements: Any, page_size: Any) -> None:
        """
        Re-render for new page information

        Args:
            current_page: 0-based page index
            total_pages: Total pages
            total_elements: Total items across all pages
            page_size: Items per page
        """
        self.view = build_pagination_view(current_page, total_pages, total_elements, page_size)
        if self.view is None:
            self.display = False
            return

        self.display = True
        self.page_size = self.view.page_size
        self.query_one("#pagination-summary", Label).update(self.view.summary)
        self.query_one("#prev-page", Button).disabled = not self.view.has_prev
        self.query_one("#next-page", Button).disabled = not self.view.has_next

        select = self.query_one("#page-size", Select)
        if self.view.page_size in PAGE_SIZE_OPTIONS and select.value != self.view.page_size:
            select.value = self.view.page_size

        container = self.query_one("#page-buttons", Horizontal)
        container.remove_children()
        widgets = []
        for label in self.view.pages:
            if label == ELLIPSIS:
                widgets.append(Label(ELLIPSIS, classes="page-ellipsis"))
            else:
                variant = "primary" if label - 1 == self.view.current_page else "default"
                # name, not id: the old buttons may still be mounted while these arrive
                widgets.append(Button(str(label), name=f"page-{label}", variant=variant, classes="page-number"))
        container.mount(*widgets)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle pagination button presses"""
        event.stop()
        if self.view is None:
            return

        button = event.button
        new_page = self.view.current_page
        if button.id == "prev-page" and self.view.has_prev:
            new_page -= 1
        elif button.id == "next-page" and self.view.has_next:
            new_page += 1
        elif button.name and button.name.startswith("page-"):
            new_page = int(button.name.split("-", 1)[1]) - 1

        if new_page != self.view.current_page:
            self.post_message(self.PageChanged(self, new_page))

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        if event.select.id != "page-size" or event.value not in PAGE_SIZE_OPTIONS:
            return
        size = int(event.value)
        if size != self.page_size:
            self.page_size = size
            self.post_message(self.PageSizeChanged(self, size))
