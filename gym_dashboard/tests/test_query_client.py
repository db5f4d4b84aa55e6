import asyncio
import unittest
from unittest.mock import Mock

from gym_dashboard.errors import NetworkError, ServerError, describe_error
from gym_dashboard.query.cache import QueryCache, as_key
from gym_dashboard.query.client import MutationOptions, QueryClient, QueryOptions


async def run_inline(fn, *args):
    return fn(*args)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestQueryCache(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.cache = QueryCache(clock=self.clock)

    def test_key_normalisation(self):
        self.assertEqual(as_key("holidays"), ("holidays",))
        self.assertEqual(as_key(["members", "paid"]), ("members", "paid"))
        self.assertEqual(as_key(("member", "7")), ("member", "7"))

    def test_freshness_follows_stale_time(self):
        self.cache.set(("holidays",), [1])
        self.assertTrue(self.cache.is_fresh("holidays", 30))
        self.clock.now = 31
        self.assertFalse(self.cache.is_fresh("holidays", 30))

    def test_invalidate_marks_prefix_stale(self):
        self.cache.set(("members", "paid"), 1)
        self.cache.set(("members", "all", 0), 2)
        self.cache.set(("payments", "pending", "2025-01-01"), 3)

        matched = self.cache.invalidate(("members",))

        self.assertEqual(sorted(matched), [("members", "all", 0), ("members", "paid")])
        self.assertFalse(self.cache.is_fresh(("members", "paid"), 30))
        self.assertTrue(self.cache.is_fresh(("payments", "pending", "2025-01-01"), 30))
        # stale entries keep their data for display
        self.assertEqual(self.cache.get(("members", "paid")).data, 1)

    def test_subscribers_with_overlapping_prefix_are_called(self):
        broad, narrow, other = Mock(), Mock(), Mock()
        self.cache.subscribe(("members",), broad)
        self.cache.subscribe(("members", "paid", 0), narrow)
        self.cache.subscribe(("expenses",), other)

        self.cache.invalidate(("members", "paid"))

        broad.assert_called_once_with(("members", "paid"))
        narrow.assert_called_once_with(("members", "paid"))
        other.assert_not_called()

    def test_unsubscribe(self):
        callback = Mock()
        unsubscribe = self.cache.subscribe("holidays", callback)
        unsubscribe()
        self.cache.invalidate("holidays")
        callback.assert_not_called()


class TestQueries(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.notifier = Mock()
        self.client = QueryClient(QueryCache(), self.notifier, retry=1, retry_delay=0, runner=run_inline)

    async def test_success_is_cached(self):
        fetch = Mock(return_value={"content": []})

        first = await self.client.query(("members", "all"), fetch)
        second = await self.client.query(("members", "all"), fetch)

        self.assertTrue(first.ok)
        self.assertEqual(second.data, {"content": []})
        fetch.assert_called_once()

    async def test_invalidated_entry_is_refetched(self):
        fetch = Mock(side_effect=[1, 2])
        await self.client.query("holidays", fetch)
        self.client.invalidate("holidays")
        result = await self.client.query("holidays", fetch)
        self.assertEqual(result.data, 2)

    async def test_one_retry_then_success(self):
        fetch = Mock(side_effect=[NetworkError("connection reset"), {"ok": True}])

        result = await self.client.query("settings", fetch)

        self.assertEqual(result.data, {"ok": True})
        self.assertEqual(fetch.call_count, 2)
        self.notifier.assert_not_called()

    async def test_final_failure_is_reported_once(self):
        error = ServerError("boom", status=500, payload={"message": "Database unavailable"})
        fetch = Mock(side_effect=error)

        result = await self.client.query("settings", fetch)

        self.assertIs(result.error, error)
        self.assertIsNone(result.data)
        self.assertEqual(fetch.call_count, 2)
        self.notifier.assert_called_once_with("Database unavailable", "error")
        self.assertNotIn(("settings",), self.client.cache)

    async def test_silent_query_does_not_notify(self):
        fetch = Mock(side_effect=NetworkError("offline"))
        result = await self.client.query("settings", fetch, QueryOptions(silent=True, retry=0))
        self.assertFalse(result.ok)
        fetch.assert_called_once()
        self.notifier.assert_not_called()

    async def test_concurrent_callers_share_one_request(self):
        fetch = Mock(return_value=[1, 2, 3])

        first, second = await asyncio.gather(
            self.client.query(("members", "paid"), fetch),
            self.client.query(("members", "paid"), fetch),
        )

        self.assertEqual(first.data, second.data)
        fetch.assert_called_once()

    async def test_refetch_on_focus_only_for_registered_keys(self):
        await self.client.query("birthdays", Mock(return_value=1), QueryOptions(refetch_on_focus=True))
        await self.client.query("holidays", Mock(return_value=2))

        refreshed = self.client.on_focus()

        self.assertEqual(refreshed, [("birthdays",)])
        self.assertTrue(self.client.cache.is_fresh("holidays", 30))


class TestMutations(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.notifier = Mock()
        self.client = QueryClient(QueryCache(), self.notifier, retry_delay=0, runner=run_inline)

    async def test_server_message_is_shown_verbatim(self):
        upload = Mock(side_effect=ServerError("Request failed with status code 400", status=400,
                                              payload={"message": "Invalid file format"}))
        on_error = Mock()

        result = await self.client.mutation(upload, MutationOptions(on_error=on_error)).mutate("members.xlsx")

        self.assertFalse(result.ok)
        upload.assert_called_once_with("members.xlsx")
        self.notifier.assert_called_once_with("Invalid file format", "error")
        on_error.assert_called_once_with(result.error, "members.xlsx")

    async def test_error_message_overrides_server_text(self):
        failing = Mock(side_effect=NetworkError("timeout"))
        await self.client.mutation(failing, MutationOptions(error_message="Failed to save member")).mutate({})
        self.notifier.assert_called_once_with("Failed to save member", "error")

    async def test_success_toasts_invalidates_then_calls_back(self):
        seen = []
        self.client.cache.set(("members", "paid"), [])
        self.client.subscribe(("members",), lambda prefix: seen.append(("invalidated", prefix)))

        save = Mock(return_value={"id": 9})
        options = MutationOptions(
            success_message="Member created successfully!",
            invalidate_queries=[("members",)],
            on_success=lambda data, payload: seen.append(("success", data["id"], payload)),
        )
        mutation = self.client.mutation(save, options)

        result = await mutation.mutate({"name": "Asha"})

        self.assertEqual(result.data, {"id": 9})
        self.assertFalse(mutation.is_loading)
        self.notifier.assert_called_once_with("Member created successfully!", "success")
        self.assertEqual(seen, [("invalidated", ("members",)), ("success", 9, {"name": "Asha"})])
        self.assertFalse(self.client.cache.is_fresh(("members", "paid"), 30))

    async def test_mutations_are_not_retried(self):
        failing = Mock(side_effect=NetworkError("offline"))
        await self.client.mutation(failing).mutate()
        failing.assert_called_once()


class TestDescribeError(unittest.TestCase):
    def test_priority(self):
        self.assertEqual(describe_error(ServerError("x", payload={"message": "Member not found"})), "Member not found")
        self.assertEqual(describe_error(ServerError("x", payload="Plain failure")), "Plain failure")
        self.assertEqual(describe_error(ServerError("Request failed", payload={})), "Request failed")
        self.assertEqual(describe_error(ValueError("")), "An error occurred")
