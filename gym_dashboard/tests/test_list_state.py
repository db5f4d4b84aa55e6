import asyncio
import unittest
from unittest.mock import Mock

from gym_dashboard.models.pagination import PageResult, PageState, paginate_locally
from gym_dashboard.query.client import QueryResult
from gym_dashboard.query.debounce import Debouncer
from gym_dashboard.ui.controllers.list_state import FilterSpec, ListStateController


class FakeTimer:
    def __init__(self, delay, fn):
        self.delay = delay
        self.fn = fn
        self.stopped = False

    def stop(self):
        self.stopped = True


class FakeScheduler:
    """Collects timers; `settle()` fires whichever are still armed."""

    def __init__(self):
        self.timers = []

    def __call__(self, delay, fn):
        timer = FakeTimer(delay, fn)
        self.timers.append(timer)
        return timer

    def settle(self):
        for timer in list(self.timers):
            if not timer.stopped:
                timer.stopped = True
                timer.fn()


class TestDebouncer(unittest.TestCase):
    def setUp(self):
        self.scheduler = FakeScheduler()
        self.callback = Mock()
        self.debouncer = Debouncer(0.5, self.callback, self.scheduler)

    def test_burst_fires_once_with_last_value(self):
        for term in ("r", "ra", "rav", "ravi"):
            self.debouncer.trigger(term)

        self.assertEqual(len(self.scheduler.timers), 4)
        self.assertEqual(sum(not t.stopped for t in self.scheduler.timers), 1)

        self.scheduler.settle()

        self.callback.assert_called_once_with("ravi")
        self.assertFalse(self.debouncer.pending)

    def test_flush_fires_immediately(self):
        self.debouncer.trigger("asha")
        self.debouncer.flush()
        self.callback.assert_called_once_with("asha")
        self.scheduler.settle()
        self.callback.assert_called_once()

    def test_cancel(self):
        self.debouncer.trigger("asha")
        self.debouncer.cancel()
        self.scheduler.settle()
        self.callback.assert_not_called()


def _page(items, state):
    return paginate_locally(list(items), state.page, state.size)


def make_controller(scheduler=None, **kwargs):
    specs = [
        FilterSpec("all", "All", query_key=lambda s: ("members", "all", s.page, s.size, s.sort_by, s.sort_dir),
                   fetch=lambda s: ["a"] * 30, decode=_page),
        FilterSpec("unpaid", "Unpaid", query_key=lambda s: ("members", "unpaid"),
                   fetch=lambda s: ["u"] * 3, decode=_page, sortable=False),
        FilterSpec("by-date", "By Date", query_key=lambda s: ("payments", s.param("date")),
                   fetch=lambda s: ["p"], decode=_page, enabled=lambda s: bool(s.param("date"))),
    ]
    return ListStateController(
        specs,
        default_filter="all",
        page_size=10,
        schedule=scheduler or FakeScheduler(),
        **kwargs,
    )


class TestStateTransitions(unittest.TestCase):
    def setUp(self):
        self.scheduler = FakeScheduler()
        self.on_change = Mock()
        self.controller = make_controller(self.scheduler, on_change=self.on_change, url_params={"date": ""})

    def test_page_resets_on_every_fetch_relevant_change(self):
        changes = (
            lambda: self.controller.set_filter("unpaid"),
            lambda: self.controller.set_page_size(25),
            lambda: self.controller.toggle_sort("name"),
            lambda: self.controller.set_param("date", "2025-01-01"),
        )
        for change in changes:
            self.controller.set_filter("all")
            self.controller.set_page(3)
            self.assertEqual(self.controller.state.page, 3)
            change()
            self.assertEqual(self.controller.state.page, 0)

    def test_set_page_keeps_requested_page(self):
        self.controller.set_page(2)
        self.assertEqual(self.controller.state.page, 2)
        self.on_change.assert_called_once()

    def test_sort_toggle(self):
        self.assertTrue(self.controller.toggle_sort("name"))
        self.assertEqual((self.controller.state.sort_by, self.controller.state.sort_dir), ("name", "asc"))
        self.controller.toggle_sort("name")
        self.assertEqual(self.controller.state.sort_dir, "desc")
        self.controller.toggle_sort("name")
        self.assertEqual(self.controller.state.sort_dir, "asc")
        self.controller.toggle_sort("doj")
        self.assertEqual((self.controller.state.sort_by, self.controller.state.sort_dir), ("doj", "asc"))

    def test_unsortable_filter_ignores_sort(self):
        self.controller.set_filter("unpaid")
        self.on_change.reset_mock()
        self.assertFalse(self.controller.toggle_sort("name"))
        self.on_change.assert_not_called()

    def test_search_is_debounced(self):
        self.controller.set_page(4)
        self.on_change.reset_mock()

        for term in ("a", "as", "ash", "asha"):
            self.controller.type_search(term)

        self.assertEqual(self.controller.state.search_term, "asha")
        self.assertEqual(self.controller.state.debounced_search_term, "")
        self.on_change.assert_not_called()

        self.scheduler.settle()

        self.on_change.assert_called_once()
        self.assertEqual(self.controller.state.debounced_search_term, "asha")
        self.assertEqual(self.controller.state.page, 0)

    def test_submit_search_flushes(self):
        self.controller.type_search("ravi")
        self.controller.submit_search()
        self.assertEqual(self.controller.state.debounced_search_term, "ravi")

    def test_unknown_filter_rejected(self):
        with self.assertRaises(ValueError):
            self.controller.set_filter("nope")

    def test_enabled_depends_on_params(self):
        self.controller.set_filter("by-date")
        self.assertFalse(self.controller.is_enabled)
        self.assertIsNone(self.controller.begin_fetch())
        self.controller.set_param("date", "2025-03-01")
        self.assertTrue(self.controller.is_enabled)

    def test_none_filter_is_idle(self):
        self.controller.set_filter(None)
        self.assertIsNone(self.controller.begin_fetch())
        self.assertEqual(self.controller.result, PageResult.empty(10))

    def test_reset_restores_initial_view(self):
        self.controller.set_filter("unpaid")
        self.controller.set_param("date", "2025-03-01")
        self.controller.type_search("x")
        self.controller.reset()
        state = self.controller.state
        self.assertEqual(state.filter, "all")
        self.assertEqual(state.params, {"date": ""})
        self.assertEqual(state.search_term, "")
        self.scheduler.settle()
        self.assertEqual(self.controller.state.debounced_search_term, "")


class TestUnsearchableFilter(unittest.TestCase):
    def setUp(self):
        self.scheduler = FakeScheduler()
        self.on_change = Mock()
        specs = [
            FilterSpec("all", "All", query_key=lambda s: ("members", "all", s.debounced_search_term),
                       fetch=lambda s: [], decode=_page),
            FilterSpec("unattended", "Unattended", query_key=lambda s: ("members", "unattended", s.page),
                       fetch=lambda s: [], decode=_page, searchable=False),
        ]
        self.controller = ListStateController(
            specs, default_filter="all", schedule=self.scheduler, on_change=self.on_change
        )

    def test_typing_is_ignored(self):
        self.controller.set_filter("unattended")
        self.on_change.reset_mock()
        self.assertFalse(self.controller.is_searchable)

        self.controller.type_search("asha")
        self.scheduler.settle()

        self.assertEqual(self.controller.state.search_term, "")
        self.on_change.assert_not_called()

    def test_switching_drops_pending_search(self):
        self.assertTrue(self.controller.is_searchable)
        self.controller.type_search("asha")
        self.controller.set_filter("unattended")
        self.scheduler.settle()

        state = self.controller.state
        self.assertEqual((state.search_term, state.debounced_search_term), ("", ""))
        self.assertEqual(self.on_change.call_count, 1)


class TestUrlSync(unittest.TestCase):
    def setUp(self):
        self.controller = make_controller(url_params={"date": "", "monthYear": "01/2025"})

    def test_defaults_are_left_out(self):
        self.assertEqual(self.controller.to_query_params(), {})

    def test_changed_values_are_written(self):
        self.controller.set_filter("unpaid")
        self.controller.set_params(date="2025-02-01", monthYear="02/2025")
        self.assertEqual(
            self.controller.to_query_params(),
            {"filter": "unpaid", "date": "2025-02-01", "monthYear": "02/2025"},
        )

    def test_apply_query_params_seeds_state(self):
        self.controller.apply_query_params({"filter": "unpaid", "date": "2025-02-01", "junk": "1"})
        self.assertEqual(self.controller.state.filter, "unpaid")
        self.assertEqual(self.controller.state.param("date"), "2025-02-01")
        self.assertEqual(self.controller.state.param("monthYear"), "01/2025")
        self.assertNotIn("junk", self.controller.state.params)

    def test_unknown_filter_in_url_falls_back(self):
        self.controller.apply_query_params({"filter": "bogus"})
        self.assertEqual(self.controller.state.filter, "all")

    def test_custom_filter_param(self):
        controller = make_controller(filter_param="type")
        controller.set_filter("unpaid")
        self.assertEqual(controller.to_query_params(), {"type": "unpaid"})


class TestTickets(unittest.TestCase):
    def setUp(self):
        self.controller = make_controller()

    def test_late_response_for_old_filter_is_dropped(self):
        ticket = self.controller.begin_fetch()
        self.controller.set_filter("unpaid")

        applied = self.controller.apply(ticket, paginate_locally(["a"] * 10, 0, 10))

        self.assertFalse(applied)
        self.assertEqual(self.controller.result.items, ())

    def test_late_response_for_old_page_is_dropped(self):
        ticket = self.controller.begin_fetch()
        self.controller.set_page(1)
        self.assertFalse(self.controller.apply(ticket, paginate_locally(["a"], 0, 10)))

    def test_current_response_is_applied(self):
        ticket = self.controller.begin_fetch()
        self.assertTrue(self.controller.loading)
        self.assertTrue(self.controller.apply(ticket, paginate_locally(["a"] * 3, 0, 10)))
        self.assertFalse(self.controller.loading)
        self.assertEqual(self.controller.result.total_elements, 3)

    def test_fail_empties_current_result(self):
        ticket = self.controller.begin_fetch()
        self.controller.apply(ticket, paginate_locally(["a"] * 3, 0, 10))
        ticket = self.controller.begin_fetch()
        error = RuntimeError("boom")

        self.assertTrue(self.controller.fail(ticket, error))

        self.assertTrue(self.controller.result.is_empty)
        self.assertIs(self.controller.last_error, error)

    def test_switching_filter_clears_old_results(self):
        ticket = self.controller.begin_fetch()
        self.controller.apply(ticket, paginate_locally(["a"] * 3, 0, 10))
        self.controller.set_filter("unpaid")
        self.controller.set_filter("all")
        self.assertIsNone(self.controller.result_for("all"))


class GatedQueryClient:
    """Query client whose responses are released by the test."""

    def __init__(self):
        self.gates = {}
        self.calls = []

    async def query(self, key, fetch_fn, options=None):
        self.calls.append(key)
        gate = self.gates.setdefault(key, asyncio.Event())
        await gate.wait()
        return QueryResult(data=fetch_fn())


class TestLoad(unittest.IsolatedAsyncioTestCase):
    async def test_in_flight_all_does_not_populate_unpaid(self):
        client = GatedQueryClient()
        controller = make_controller()

        slow_all = asyncio.ensure_future(controller.load(client))
        await asyncio.sleep(0)
        controller.set_filter("unpaid")
        fast_unpaid = asyncio.ensure_future(controller.load(client))
        await asyncio.sleep(0)

        client.gates[("members", "unpaid")].set()
        unpaid_page = await fast_unpaid
        client.gates[("members", "all", 0, 10, "id", "asc")].set()
        late = await slow_all

        self.assertIsNone(late)
        self.assertEqual(unpaid_page.total_elements, 3)
        self.assertEqual(controller.result.items, ("u", "u", "u"))

    async def test_error_result_fails_ticket(self):
        client = Mock()

        async def failing_query(key, fetch_fn, options=None):
            return QueryResult(error=RuntimeError("down"))

        client.query = failing_query
        controller = make_controller()

        self.assertIsNone(await controller.load(client))
        self.assertFalse(controller.loading)
        self.assertIsInstance(controller.last_error, RuntimeError)

    async def test_decode_receives_state_snapshot(self):
        seen = []

        def decode(payload, state: PageState):
            seen.append((payload, state.page))
            return paginate_locally(payload, state.page, state.size)

        spec = FilterSpec("only", "Only", query_key=lambda s: ("x", s.page), fetch=lambda s: list(range(25)),
                          decode=decode)
        controller = ListStateController([spec], default_filter="only", schedule=FakeScheduler())
        controller.set_page(2)

        async def inline_query(key, fetch_fn, options=None):
            return QueryResult(data=fetch_fn())

        client = Mock()
        client.query = inline_query
        page = await controller.load(client)

        self.assertEqual(seen[0][1], 2)
        self.assertEqual(page.items, (20, 21, 22, 23, 24))
