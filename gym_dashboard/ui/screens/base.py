# gym_dashboard/ui/screens/base.py
"""
Screen plumbing shared by every page: header/footer, toasts, routing,
cache-invalidation subscriptions, and the generic filtered list screen.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence, Tuple

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, Static
from textual.worker import Worker, WorkerState

from gym_dashboard.models.pagination import PageResult, PageState
from gym_dashboard.query.client import Mutation, MutationOptions, QueryClient, QueryOptions, QueryResult
from gym_dashboard.ui.controllers.list_state import ListStateController
from gym_dashboard.ui.controllers.status_bar import StatusBarController
from gym_dashboard.ui.routing import Route
from gym_dashboard.ui.widgets.confirmation_modal import ConfirmationModal
from gym_dashboard.ui.widgets.filter_bar import FilterBar
from gym_dashboard.ui.widgets.loading_indicator import LoadingOverlay
from gym_dashboard.ui.widgets.notification import NotificationContainer
from gym_dashboard.ui.widgets.pagination import Pagination
from gym_dashboard.ui.widgets.record_table import Column, RecordTable
from gym_dashboard.ui.widgets.search_bar import SearchBar
from simple_logger import Slogger

if TYPE_CHECKING:
    from gym_dashboard.di import Container as DIContainer


class BaseScreen(Screen):
    """Header, toast stack and footer around `compose_body`."""

    PATH = "/"
    HEADING = ""
    # cache key prefixes whose invalidation should reload this screen
    WATCH_KEYS: Sequence[Tuple[Any, ...]] = ()

    def __init__(self, container: "DIContainer", route: Optional[Route] = None, *, id: Optional[str] = None) -> None:
        super().__init__(id=id)
        self.container = container
        self.route = route or Route(self.PATH)
        self._unsubscribers: List[Callable[[], None]] = []
        self._stale = False

    # ------------------------------------------------------------------ #
    # compose & life-cycle
    # ------------------------------------------------------------------ #

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(classes="page"):
            if self.HEADING:
                yield Label(self.HEADING, classes="page-title")
            yield from self.compose_body()
        yield NotificationContainer()
        yield Footer()

    def compose_body(self) -> ComposeResult:
        yield from ()

    def on_mount(self) -> None:
        for prefix in self.WATCH_KEYS:
            self._unsubscribers.append(self.query_client.subscribe(prefix, self._on_invalidated))

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def on_screen_resume(self, event) -> None:
        self.sync_location()
        if self._stale:
            self._stale = False
            self.refresh_data()

    def _on_invalidated(self, _prefix) -> None:
        if self.is_current:
            self.refresh_data()
        else:
            self._stale = True

    def refresh_data(self) -> None:
        """Reload whatever this screen shows."""

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    @property
    def query_client(self) -> QueryClient:
        return self.container.query_client

    @property
    def per_page(self) -> int:
        return self.container.per_page

    @property
    def debounce_delay(self) -> float:
        return float(self.container.config.get("ui", {}).get("search_debounce", 0.5))

    def location_params(self) -> Dict[str, str]:
        return dict(self.route.params)

    def sync_location(self) -> None:
        self.route = self.route.replace_params(self.location_params())
        if hasattr(self.app, "sync_location"):
            self.app.sync_location(self.route)

    def toast(self, message: str, level: str = "info") -> None:
        self.app.toast(message, level)

    def schedule(self, delay: float, fn: Callable[[], None]):
        """Debouncer scheduler backed by Textual timers."""
        return self.set_timer(delay, fn)

    async def fetch(self, key, fn: Callable[[], Any], *, silent: bool = False) -> QueryResult:
        return await self.query_client.query(key, fn, QueryOptions(silent=silent))

    def mutate(self, fn: Callable[[Any], Any], payload: Any = None, **options: Any) -> Worker:
        """Run a mutation in a worker; options are `MutationOptions` fields."""
        mutation: Mutation = self.query_client.mutation(fn, MutationOptions(**options))
        return self.run_worker(mutation.mutate(payload), group="mutation")

    def confirm(self, title: str, message: str, on_yes: Callable[[], None], *, label: str = "Delete") -> None:
        def handle(confirmed: Optional[bool]) -> None:
            if confirmed:
                on_yes()

        self.app.push_screen(ConfirmationModal(title, message, confirm_label=label), handle)

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        """Last line of defence: a crashed worker becomes a toast, not a dead UI."""
        if event.state == WorkerState.ERROR:
            error = event.worker.error
            Slogger.exception(error, f"Worker {event.worker.name or event.worker.group} failed",
                              {"screen": type(self).__name__})
            self.toast(f"Unexpected error: {error}", "error")


class ListScreen(BaseScreen):
    """
    Filter bar + debounced search + sortable table + pagination, all driven
    by one `ListStateController`.
    """

    BINDINGS = [
        Binding("slash", "focus_search", "Search", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        Binding("left_square_bracket", "prev_page", "Prev Page", show=False),
        Binding("right_square_bracket", "next_page", "Next Page", show=False),
    ]

    NOUN = "Records"
    SEARCH_PLACEHOLDER = "Search..."
    SHOW_SEARCH = True

    def __init__(self, container: "DIContainer", route: Optional[Route] = None, *, id: Optional[str] = None) -> None:
        super().__init__(container, route, id=id)
        self.controller = self.build_controller()
        self.controller.on_change = self._state_changed

    # ---------- to override ----------
    def build_controller(self) -> ListStateController:
        raise NotImplementedError

    def columns_for(self, filter_key: Optional[str]) -> List[Column]:
        raise NotImplementedError

    def compose_toolbar(self) -> ComposeResult:
        """Extra widgets between the filters and the table."""
        yield from ()

    def on_row_chosen(self, item: Any) -> None:
        pass

    # ---------- compose ----------
    def compose_body(self) -> ComposeResult:
        options = [(spec.key, spec.label) for spec in self.controller.filters.values()]
        if len(options) > 1:
            yield FilterBar(options, active=self.controller.state.filter, id="filter-bar")
        yield from self.compose_toolbar()
        if self.SHOW_SEARCH:
            yield SearchBar(self.SEARCH_PLACEHOLDER, value=self.controller.state.search_term, id="search-bar")
        yield LoadingOverlay(id="loading-overlay")
        yield RecordTable(self.columns_for(self.controller.state.filter), id="records-table")
        yield Pagination(id="pagination")
        yield Static(id="status-bar", markup=False)

    def on_mount(self) -> None:
        super().on_mount()
        self.status_controller = StatusBarController(self.query_one("#status-bar", Static), self.NOUN)
        self.controller.apply_query_params(self.route.params)
        self.after_seed()
        self._sync_filter_bar()
        self._sync_search_bar()
        self.query_one(RecordTable).set_columns(self.columns_for(self.controller.state.filter))
        self.sync_location()
        self.reload()

    def after_seed(self) -> None:
        """Route params applied; push them into toolbar widgets."""

    def location_params(self) -> Dict[str, str]:
        return self.controller.to_query_params()

    # ---------- loading ----------
    def refresh_data(self) -> None:
        self.reload()

    def reload(self) -> None:
        self.run_worker(self._load(), exclusive=True, group="list-load")

    async def _load(self) -> None:
        overlay = self.query_one(LoadingOverlay)
        overlay.start("list", f"Loading {self.NOUN.lower()}...")
        # a filter switch dropped the old rows; clear them before waiting
        self.render_result()
        await self.controller.load(self.query_client)
        # A newer fetch is still running: it will render when it lands
        if self.controller.loading:
            return
        overlay.stop("list")
        self.render_result()

    def render_result(self) -> None:
        result: PageResult = self.controller.result
        state = self.controller.state
        self.query_one(RecordTable).show(result.items, state.sort_by, state.sort_dir)
        self.query_one(Pagination).update_from(result)
        self._update_status()

    def _update_status(self) -> None:
        result = self.controller.result
        state = self.controller.state
        spec = self.controller.active_spec
        self.status_controller.update({
            "total": result.total_elements,
            "pages": result.total_pages,
            "current_page": result.current_page,
            "filter": spec.label if spec else None,
            "search_query": state.debounced_search_term,
            "sort": f"{state.sort_by} {state.sort_dir}",
            "loading": self.controller.loading,
        })

    def _state_changed(self, state: PageState) -> None:
        self._sync_search_bar()
        self.sync_location()
        self.reload()

    def _sync_search_bar(self) -> None:
        bars = self.query("#search-bar")
        if not bars:
            return
        bar = bars.first(SearchBar)
        bar.display = self.controller.is_searchable
        if not bar.display:
            bar.reset()

    def _sync_filter_bar(self) -> None:
        bars = self.query("#filter-bar")
        if bars:
            bars.first(FilterBar).set_active(self.controller.state.filter)

    # ---------- events ----------
    def on_filter_bar_selected(self, event: FilterBar.Selected) -> None:
        if event.bar.id != "filter-bar":
            return
        self.query_one(RecordTable).set_columns(self.columns_for(event.key))
        self.controller.set_filter(event.key)

    def on_search_bar_changed(self, event: SearchBar.Changed) -> None:
        self.controller.type_search(event.term)

    def on_search_bar_submitted(self, event: SearchBar.Submitted) -> None:
        self.controller.type_search(event.term)
        self.controller.submit_search()

    def on_record_table_sort_requested(self, event: RecordTable.SortRequested) -> None:
        self.controller.toggle_sort(event.field)

    def on_record_table_row_chosen(self, event: RecordTable.RowChosen) -> None:
        self.on_row_chosen(event.item)

    def on_pagination_page_changed(self, event: Pagination.PageChanged) -> None:
        self.controller.set_page(event.page)

    def on_pagination_page_size_changed(self, event: Pagination.PageSizeChanged) -> None:
        self.controller.set_page_size(event.size)

    # ---------- actions ----------
    def action_focus_search(self) -> None:
        bars = self.query(SearchBar)
        if bars:
            bars.first().focus_input()

    def action_refresh(self) -> None:
        spec = self.controller.active_spec
        if spec is not None:
            self.query_client.invalidate(spec.query_key(self.controller.state))
        self.reload()

    def action_next_page(self) -> None:
        result = self.controller.result
        if result.has_next():
            self.controller.set_page(result.current_page + 1)

    def action_prev_page(self) -> None:
        result = self.controller.result
        if result.has_prev():
            self.controller.set_page(result.current_page - 1)

    @property
    def selected_item(self) -> Any:
        return self.query_one(RecordTable).selected_item
