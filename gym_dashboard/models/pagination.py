"""Page-of-results container, list view state, and the decoders that build pages from API payloads."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10

SORT_ASC = "asc"
SORT_DESC = "desc"


@dataclass(frozen=True, slots=True)
class PageResult(Generic[T]):
    """A single page of items plus meta-data. Never mutated, only replaced."""

    items: Sequence[T]
    total_elements: int     # total items in the whole result set
    total_pages: int        # total number of pages
    current_page: int       # current page index (0-based)
    page_size: int          # size of each page

    # ------------- helpers -------------
    @classmethod
    def empty(cls, page_size: int = DEFAULT_PAGE_SIZE) -> "PageResult[T]":
        return cls(items=(), total_elements=0, total_pages=0, current_page=0, page_size=page_size)

    @property
    def is_empty(self) -> bool:
        return self.total_elements == 0 or not self.items

    def has_next(self) -> bool:
        return self.current_page < self.total_pages - 1

    def has_prev(self) -> bool:
        return self.current_page > 0

    def map(self, func: Callable[[T], Any]) -> "PageResult[Any]":
        return replace(self, items=tuple(func(item) for item in self.items))


@dataclass(frozen=True)
class PageState:
    """What a list view is currently asking the server for."""

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort_by: str = "id"
    sort_dir: str = SORT_ASC
    filter: Optional[str] = None
    search_term: str = ""
    debounced_search_term: str = ""
    params: Mapping[str, str] = field(default_factory=dict)

    def param(self, name: str, default: str = "") -> str:
        return self.params.get(name, default)


# --------------------------------------------------------------------------- #
# decoders
# --------------------------------------------------------------------------- #

def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _build_items(raw: Any, factory: Callable[[Dict[str, Any]], T]) -> List[T]:
    if not isinstance(raw, list):
        return []
    return [factory(doc) for doc in raw if isinstance(doc, dict)]


def _pages_for(total: int, size: int) -> int:
    if total <= 0 or size <= 0:
        return 0
    return math.ceil(total / size)


def from_spring_page(
    payload: Any,
    factory: Callable[[Dict[str, Any]], T],
    fallback_size: int = DEFAULT_PAGE_SIZE,
) -> PageResult[T]:
    """Decode `{content, totalElements, totalPages, number, size}`."""
    if not isinstance(payload, dict):
        return PageResult.empty(fallback_size)
    items = _build_items(payload.get("content"), factory)
    size = _as_int(payload.get("size"), fallback_size) or fallback_size
    total = _as_int(payload.get("totalElements"), len(items))
    pages = _as_int(payload.get("totalPages"), _pages_for(total, size))
    return PageResult(
        items=tuple(items),
        total_elements=total,
        total_pages=pages,
        current_page=_as_int(payload.get("number"), 0),
        page_size=size,
    )


def from_count_wrapper(
    payload: Any,
    factory: Callable[[Dict[str, Any]], T],
    items_field: str = "employees",
    fallback_size: int = DEFAULT_PAGE_SIZE,
) -> PageResult[T]:
    """Decode the report wrapper `{employees, count, totalPages, pageNumber}`.

    The attendance report uses `result`/`total` instead; pass `items_field="result"`.
    """
    if not isinstance(payload, dict):
        return PageResult.empty(fallback_size)
    items = _build_items(payload.get(items_field), factory)
    size = _as_int(payload.get("pageSize", payload.get("size")), fallback_size) or fallback_size
    total = _as_int(payload.get("count", payload.get("total")), len(items))
    pages = _as_int(payload.get("totalPages"), _pages_for(total, size))
    return PageResult(
        items=tuple(items),
        total_elements=total,
        total_pages=pages,
        current_page=_as_int(payload.get("pageNumber"), 0),
        page_size=size,
    )


def from_data_wrapper(
    payload: Any,
    factory: Callable[[Dict[str, Any]], T],
    fallback_size: int = DEFAULT_PAGE_SIZE,
) -> PageResult[T]:
    """Decode `{data: [...], page: {number, totalPages, totalElements, size}}`."""
    if not isinstance(payload, dict):
        return PageResult.empty(fallback_size)
    items = _build_items(payload.get("data"), factory)
    meta = payload.get("page") if isinstance(payload.get("page"), dict) else {}
    size = _as_int(meta.get("size"), fallback_size) or fallback_size
    total = _as_int(meta.get("totalElements"), len(items))
    return PageResult(
        items=tuple(items),
        total_elements=total,
        total_pages=_as_int(meta.get("totalPages"), _pages_for(total, size)),
        current_page=_as_int(meta.get("number"), 0),
        page_size=size,
    )


def paginate_locally(
    items: Sequence[T],
    page: int,
    size: int,
    predicate: Optional[Callable[[T], bool]] = None,
) -> PageResult[T]:
    """Filter then slice an unpaginated result so it looks like a server page."""
    size = size if size > 0 else DEFAULT_PAGE_SIZE
    matching = [item for item in items if predicate(item)] if predicate else list(items)
    total = len(matching)
    pages = _pages_for(total, size)
    # Clamp: a page index past the end lands on the last page
    page = min(max(page, 0), max(pages - 1, 0))
    start = page * size
    return PageResult(
        items=tuple(matching[start:start + size]),
        total_elements=total,
        total_pages=pages,
        current_page=page,
        page_size=size,
    )


def extract_list(payload: Any, field_name: str = "list") -> List[Any]:
    """Pull the item list out of a `{list: [...]}`/`{data: [...]}` wrapper or a bare list."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in (field_name, "data", "content", "employees", "result"):
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


def from_list_wrapper(
    payload: Any,
    factory: Callable[[Dict[str, Any]], T],
    state: PageState,
    field_name: str = "list",
    matches: Optional[Callable[[T, str], bool]] = None,
) -> PageResult[T]:
    """Decode an unpaginated list endpoint and page it locally using the debounced search term."""
    items = _build_items(extract_list(payload, field_name), factory)
    term = state.debounced_search_term.strip().lower()
    predicate = None
    if term and matches is not None:
        predicate = lambda item: matches(item, term)
    return paginate_locally(items, state.page, state.size, predicate)
