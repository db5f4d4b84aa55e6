# gym_dashboard/ui/controllers/status_bar.py
"""Formats and updates the status bar."""

from __future__ import annotations

from typing import Dict, Optional

from textual.widgets import Static


class StatusBarController:
    """Builds the human-readable status text and writes it to the bar."""

    LOADING_TEXT = "Loading…"

    def __init__(self, status_bar: Static, noun: str = "Records") -> None:
        self._bar = status_bar
        self._noun = noun

    @property
    def noun(self) -> str:
        return self._noun

    @noun.setter
    def noun(self, value: str) -> None:
        self._noun = value

    def update(
        self,
        meta: Dict[str, int | str | bool | None],
        selected: Optional[str] = None,
    ) -> None:
        """
        Refresh the whole status line.

        `meta` expected keys:
            total, pages, current_page (0-based), filter, search_query, sort, loading
        """
        parts: list[str] = [f"{self._noun}: {meta.get('total', 0)}"]

        pages = meta.get("pages") or 0
        if pages:
            parts.append(f"Page: {int(meta.get('current_page') or 0) + 1}/{pages}")
        if meta.get("filter"):
            parts.append(f"Filter: {meta['filter']}")
        if meta.get("search_query"):
            parts.append(f"Search: '{meta['search_query']}'")
        if meta.get("sort"):
            parts.append(f"Sort: {meta['sort']}")
        if selected:
            parts.append(f"Selected: {selected}")
        if meta.get("loading"):
            parts.append(self.LOADING_TEXT)

        self._bar.update(" | ".join(parts))

    def message(self, text: str) -> None:
        self._bar.update(text)
