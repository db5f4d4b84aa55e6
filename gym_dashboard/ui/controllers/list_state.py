# gym_dashboard/ui/controllers/list_state.py
"""
State behind every filtered, paginated list screen.

One `FilterSpec` per remote query; only the active filter's query runs.
Every fetch-relevant change bumps `generation`, and a response is applied
only if the ticket it was issued under still matches, so a late reply for
an abandoned page or filter is dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Hashable, Mapping, Optional, Sequence, Tuple

from gym_dashboard.models.pagination import (
    DEFAULT_PAGE_SIZE,
    SORT_ASC,
    SORT_DESC,
    PageResult,
    PageState,
)
from gym_dashboard.query.client import QueryClient, QueryOptions
from gym_dashboard.query.debounce import Debouncer, Scheduler
from simple_logger import Slogger

DEFAULT_SEARCH_DEBOUNCE = 0.5


def _always(_state: PageState) -> bool:
    return True


@dataclass(frozen=True)
class FilterSpec:
    """How one filter value is fetched and decoded."""

    key: str
    label: str
    query_key: Callable[[PageState], Tuple[Hashable, ...]]
    fetch: Callable[[PageState], Any]
    decode: Callable[[Any, PageState], PageResult]
    enabled: Callable[[PageState], bool] = _always
    sortable: bool = True
    searchable: bool = True
    refetch_on_focus: bool = False


@dataclass(frozen=True)
class FetchTicket:
    generation: int
    filter: Optional[str]
    query_key: Tuple[Hashable, ...]


class ListStateController:
    def __init__(
        self,
        filters: Sequence[FilterSpec],
        *,
        default_filter: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        sort_by: str = "id",
        sort_dir: str = SORT_ASC,
        url_params: Optional[Mapping[str, str]] = None,
        filter_param: str = "filter",
        search_debounce: float = DEFAULT_SEARCH_DEBOUNCE,
        schedule: Optional[Scheduler] = None,
        on_change: Optional[Callable[[PageState], None]] = None,
        name: str = "list",
    ) -> None:
        self.filters: Dict[str, FilterSpec] = {spec.key: spec for spec in filters}
        if default_filter is not None and default_filter not in self.filters:
            raise ValueError(f"Unknown default filter {default_filter!r}")
        self.name = name
        self.default_filter = default_filter
        self.filter_param = filter_param
        self.url_defaults: Dict[str, str] = dict(url_params or {})
        self.on_change = on_change

        self.state = PageState(
            page=0,
            size=page_size,
            sort_by=sort_by,
            sort_dir=sort_dir,
            filter=default_filter,
            params=dict(self.url_defaults),
        )
        self._initial_sort = (sort_by, sort_dir)
        self.generation = 0
        self.loading = False
        self.last_error: Optional[Exception] = None
        self._results: Dict[str, PageResult] = {}
        self._debouncer = Debouncer(search_debounce, self._settle_search, schedule)

    # ------------------------------------------------------------------ #
    # read side
    # ------------------------------------------------------------------ #

    @property
    def active_spec(self) -> Optional[FilterSpec]:
        if self.state.filter is None:
            return None
        return self.filters.get(self.state.filter)

    @property
    def is_enabled(self) -> bool:
        spec = self.active_spec
        return spec is not None and bool(spec.enabled(self.state))

    @property
    def is_searchable(self) -> bool:
        spec = self.active_spec
        return spec is not None and spec.searchable

    @property
    def result(self) -> PageResult:
        """What the table should show right now."""
        if self.state.filter is None:
            return PageResult.empty(self.state.size)
        return self._results.get(self.state.filter) or PageResult.empty(self.state.size)

    def result_for(self, key: str) -> Optional[PageResult]:
        return self._results.get(key)

    # ------------------------------------------------------------------ #
    # state transitions
    # ------------------------------------------------------------------ #

    def _update(self, *, reset_page: bool = True, **changes: Any) -> None:
        if reset_page:
            changes["page"] = 0
        self.state = replace(self.state, **changes)
        self.generation += 1
        Slogger.debug(
            f"{self.name} state changed",
            {"generation": self.generation, "filter": self.state.filter, "page": self.state.page},
        )
        if self.on_change:
            self.on_change(self.state)

    def set_filter(self, key: Optional[str]) -> None:
        if key is not None and key not in self.filters:
            raise ValueError(f"Unknown filter {key!r}")
        if key == self.state.filter:
            return
        # Results for other filters are never shown under the new one
        self._results.clear()
        self.last_error = None
        changes: Dict[str, Any] = {"filter": key}
        if key is None or not self.filters[key].searchable:
            self._debouncer.cancel()
            changes.update(search_term="", debounced_search_term="")
        self._update(**changes)

    def toggle_sort(self, field_name: str) -> bool:
        spec = self.active_spec
        if spec is not None and not spec.sortable:
            return False
        if field_name == self.state.sort_by:
            direction = SORT_DESC if self.state.sort_dir == SORT_ASC else SORT_ASC
        else:
            direction = SORT_ASC
        self._update(sort_by=field_name, sort_dir=direction)
        return True

    def set_page(self, page: int) -> None:
        page = max(0, int(page))
        if page == self.state.page:
            return
        self._update(page=page, reset_page=False)

    def set_page_size(self, size: int) -> None:
        if size <= 0 or size == self.state.size:
            return
        self._update(size=size)

    def type_search(self, term: str) -> None:
        """Keystroke: show it immediately, query only once typing settles."""
        if not self.is_searchable:
            return
        self.state = replace(self.state, search_term=term)
        self._debouncer.trigger(term)

    def submit_search(self) -> None:
        self._debouncer.flush()

    def cancel_search(self) -> None:
        self._debouncer.cancel()

    def _settle_search(self, term: str) -> None:
        if term == self.state.debounced_search_term:
            return
        self._update(debounced_search_term=term)

    def set_param(self, name: str, value: Optional[str]) -> None:
        self.set_params(**{name: value})

    def set_params(self, **values: Optional[str]) -> None:
        params = dict(self.state.params)
        for name, value in values.items():
            params[name] = "" if value is None else str(value)
        if params == dict(self.state.params):
            return
        self._update(params=params)

    def reset(self) -> None:
        """Back to the initial view with nothing loaded."""
        self._debouncer.cancel()
        self._results.clear()
        self.last_error = None
        self.loading = False
        sort_by, sort_dir = self._initial_sort
        self._update(
            filter=self.default_filter,
            sort_by=sort_by,
            sort_dir=sort_dir,
            search_term="",
            debounced_search_term="",
            params=dict(self.url_defaults),
        )

    def clear_results(self) -> None:
        self._results.clear()
        self.generation += 1
        self.loading = False

    # ------------------------------------------------------------------ #
    # fetch lifecycle
    # ------------------------------------------------------------------ #

    def begin_fetch(self) -> Optional[FetchTicket]:
        spec = self.active_spec
        if spec is None or not spec.enabled(self.state):
            self.loading = False
            return None
        self.loading = True
        return FetchTicket(self.generation, spec.key, spec.query_key(self.state))

    def is_current(self, ticket: FetchTicket) -> bool:
        return ticket.generation == self.generation and ticket.filter == self.state.filter

    def apply(self, ticket: FetchTicket, page: PageResult) -> bool:
        if not self.is_current(ticket):
            Slogger.debug(f"{self.name}: discarding stale response", {"key": ticket.query_key})
            return False
        self._results[ticket.filter] = page
        self.loading = False
        self.last_error = None
        return True

    def fail(self, ticket: FetchTicket, error: Optional[Exception] = None) -> bool:
        if not self.is_current(ticket):
            return False
        self._results[ticket.filter] = PageResult.empty(self.state.size)
        self.loading = False
        self.last_error = error
        return True

    async def load(self, query_client: QueryClient) -> Optional[PageResult]:
        """Run the active filter's query and apply it if still current."""
        ticket = self.begin_fetch()
        if ticket is None:
            return None
        spec = self.filters[ticket.filter]
        state = self.state

        result = await query_client.query(
            ticket.query_key,
            lambda: spec.fetch(state),
            QueryOptions(refetch_on_focus=spec.refetch_on_focus),
        )
        if result.error is not None:
            self.fail(ticket, result.error)
            return None

        page = spec.decode(result.data, state)
        return page if self.apply(ticket, page) else None

    # ------------------------------------------------------------------ #
    # URL sync
    # ------------------------------------------------------------------ #

    def to_query_params(self) -> Dict[str, str]:
        """Shareable part of the state; values equal to their default are left out."""
        params: Dict[str, str] = {}
        if self.state.filter is not None and self.state.filter != self.default_filter:
            params[self.filter_param] = self.state.filter
        for name, default in self.url_defaults.items():
            value = self.state.params.get(name, default)
            if value and value != default:
                params[name] = value
        return params

    def apply_query_params(self, params: Mapping[str, str]) -> None:
        """Seed state from a route; unknown filters fall back to the default."""
        key = params.get(self.filter_param)
        if key not in self.filters:
            key = self.default_filter
        seeded = dict(self.url_defaults)
        for name in self.url_defaults:
            if params.get(name):
                seeded[name] = str(params[name])
        self._results.clear()
        self.state = replace(self.state, filter=key, params=seeded, page=0)
        self.generation += 1
