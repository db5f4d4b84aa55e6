# gym_dashboard/query/client.py
"""
Policy layer around every remote call.

Queries: cached, de-duplicated, retried, and reported through the notifier
when they finally fail. Mutations: never retried, report success/failure and
invalidate the cache prefixes they declare.

Neither `query` nor `mutate` raises on a failed request; the error comes back
in the result object.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Set

from gym_dashboard.errors import describe_error
from gym_dashboard.query.cache import KeyLike, QueryCache, QueryKey, as_key
from simple_logger import Slogger

Notifier = Callable[[str, str], None]
Runner = Callable[..., Awaitable[Any]]

DEFAULT_RETRY = 1
DEFAULT_STALE_TIME = 30.0
DEFAULT_RETRY_DELAY = 1.0


@dataclass
class QueryOptions:
    silent: bool = False
    retry: Optional[int] = None
    refetch_on_focus: bool = False
    stale_time: Optional[float] = None
    on_success: Optional[Callable[[Any], None]] = None
    on_error: Optional[Callable[[Exception], None]] = None


@dataclass(frozen=True)
class QueryResult:
    data: Any = None
    error: Optional[Exception] = None
    is_loading: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class MutationOptions:
    success_message: Optional[str] = None
    error_message: Optional[str] = None
    invalidate_queries: Sequence[KeyLike] = field(default_factory=tuple)
    on_success: Optional[Callable[[Any, Any], None]] = None
    on_error: Optional[Callable[[Exception, Any], None]] = None
    silent: bool = False


@dataclass(frozen=True)
class MutationResult:
    data: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Mutation:
    """A bound mutation; call `mutate(payload)` as often as needed."""

    def __init__(self, client: "QueryClient", fn: Callable[[Any], Any], options: MutationOptions) -> None:
        self._client = client
        self._fn = fn
        self.options = options
        self.is_loading = False

    async def mutate(self, payload: Any = None) -> MutationResult:
        options = self.options
        name = getattr(self._fn, "__name__", "mutation")
        Slogger.info(f"Running mutation {name}")

        self.is_loading = True
        error: Optional[Exception] = None
        data: Any = None
        try:
            data = await self._client.run(self._fn, payload)
        except Exception as e:
            error = e
        finally:
            self.is_loading = False

        if error is not None:
            Slogger.warning(f"Mutation {name} failed: {error}", {"type": type(error).__name__})
            if not options.silent:
                self._client.notify(options.error_message or describe_error(error), "error")
            if options.on_error:
                options.on_error(error, payload)
            return MutationResult(error=error)

        if options.success_message and not options.silent:
            self._client.notify(options.success_message, "success")
        for prefix in options.invalidate_queries:
            self._client.invalidate(prefix)
        if options.on_success:
            options.on_success(data, payload)
        return MutationResult(data=data)


class QueryClient:
    def __init__(
        self,
        cache: Optional[QueryCache] = None,
        notifier: Optional[Notifier] = None,
        *,
        retry: int = DEFAULT_RETRY,
        stale_time: float = DEFAULT_STALE_TIME,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        runner: Optional[Runner] = None,
    ) -> None:
        self.cache = cache or QueryCache()
        self.notifier = notifier
        self.retry = retry
        self.stale_time = stale_time
        self.retry_delay = retry_delay
        self._runner = runner or asyncio.to_thread
        self._in_flight: Dict[QueryKey, asyncio.Future] = {}
        self._focus_keys: Set[QueryKey] = set()

    # ------------------------------------------------------------------ #
    # plumbing
    # ------------------------------------------------------------------ #

    async def run(self, fn: Callable[..., Any], *args: Any) -> Any:
        """Run a blocking call off the event loop."""
        return await self._runner(fn, *args)

    def notify(self, message: str, level: str = "info") -> None:
        if self.notifier is None:
            Slogger.info(f"[{level}] {message}")
            return
        self.notifier(message, level)

    def is_fetching(self, key: KeyLike) -> bool:
        return as_key(key) in self._in_flight

    def invalidate(self, prefix: KeyLike) -> List[QueryKey]:
        return self.cache.invalidate(prefix)

    def subscribe(self, prefix: KeyLike, callback: Callable[[QueryKey], None]) -> Callable[[], None]:
        return self.cache.subscribe(prefix, callback)

    def on_focus(self) -> List[QueryKey]:
        """The app regained focus: refresh only the queries that asked for it."""
        refreshed: List[QueryKey] = []
        for key in sorted(self._focus_keys, key=repr):
            refreshed.extend(self.cache.invalidate(key))
        return refreshed

    # ------------------------------------------------------------------ #
    # queries
    # ------------------------------------------------------------------ #

    async def query(
        self,
        key: KeyLike,
        fetch_fn: Callable[[], Any],
        options: Optional[QueryOptions] = None,
    ) -> QueryResult:
        options = options or QueryOptions()
        key = as_key(key)
        if options.refetch_on_focus:
            self._focus_keys.add(key)
        else:
            self._focus_keys.discard(key)

        stale_time = self.stale_time if options.stale_time is None else options.stale_time
        entry = self.cache.get(key)
        if entry is not None and self.cache.is_fresh(key, stale_time):
            Slogger.debug("Cache hit", {"key": key})
            return QueryResult(data=entry.data)

        retries = self.retry if options.retry is None else options.retry

        future = self._in_flight.get(key)
        if future is None:
            future = asyncio.ensure_future(self._fetch(key, fetch_fn, retries))
            self._in_flight[key] = future
            future.add_done_callback(lambda _f, k=key: self._forget(k, _f))
        else:
            Slogger.debug("Joining in-flight query", {"key": key})

        try:
            # shield: a cancelled caller must not cancel the shared request
            data = await asyncio.shield(future)
        except Exception as e:
            Slogger.error(f"Query failed: {e}", {"key": key, "type": type(e).__name__})
            if not options.silent:
                self.notify(describe_error(e), "error")
            if options.on_error:
                options.on_error(e)
            return QueryResult(error=e)

        if options.on_success:
            options.on_success(data)
        return QueryResult(data=data)

    def _forget(self, key: QueryKey, future: asyncio.Future) -> None:
        if self._in_flight.get(key) is future:
            del self._in_flight[key]
        # Retrieve the exception so an unawaited failure is not reported as unhandled
        if not future.cancelled():
            future.exception()

    async def _fetch(self, key: QueryKey, fetch_fn: Callable[[], Any], retries: int) -> Any:
        attempt = 0
        while True:
            try:
                data = await self.run(fetch_fn)
            except Exception as e:
                if attempt >= retries:
                    self.cache.discard(key)
                    raise
                attempt += 1
                Slogger.info(f"Retrying query ({attempt}/{retries}) after: {e}", {"key": key})
                if self.retry_delay:
                    await asyncio.sleep(self.retry_delay)
                continue
            self.cache.set(key, data)
            return data

    # ------------------------------------------------------------------ #
    # mutations
    # ------------------------------------------------------------------ #

    def mutation(self, fn: Callable[[Any], Any], options: Optional[MutationOptions] = None) -> Mutation:
        return Mutation(self, fn, options or MutationOptions())
