# gym_dashboard/query/cache.py
"""
Process-wide cache of query results.

Keys are tuples; invalidation works on key prefixes so that `("members",)`
marks every members query stale in one call.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Tuple, Union

from simple_logger import Slogger

QueryKey = Tuple[Hashable, ...]
KeyLike = Union[QueryKey, Hashable]


def as_key(key: KeyLike) -> QueryKey:
    """Normalise a bare string/int/list into a tuple key."""
    if isinstance(key, tuple):
        return key
    if isinstance(key, list):
        return tuple(key)
    return (key,)


def _overlaps(a: QueryKey, b: QueryKey) -> bool:
    n = min(len(a), len(b))
    return a[:n] == b[:n]


@dataclass
class CacheEntry:
    data: Any
    updated_at: float
    stale: bool = False


class QueryCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[QueryKey, CacheEntry] = {}
        self._subscribers: List[Tuple[QueryKey, Callable[[QueryKey], None]]] = []

    def __contains__(self, key: KeyLike) -> bool:
        return as_key(key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> Iterable[QueryKey]:
        return list(self._entries)

    def get(self, key: KeyLike) -> Optional[CacheEntry]:
        return self._entries.get(as_key(key))

    def set(self, key: KeyLike, data: Any) -> None:
        self._entries[as_key(key)] = CacheEntry(data=data, updated_at=self._clock())

    def discard(self, key: KeyLike) -> None:
        self._entries.pop(as_key(key), None)

    def is_fresh(self, key: KeyLike, stale_time: float) -> bool:
        entry = self._entries.get(as_key(key))
        if entry is None or entry.stale:
            return False
        return (self._clock() - entry.updated_at) < stale_time

    def invalidate(self, prefix: KeyLike) -> List[QueryKey]:
        """Mark every key under `prefix` stale and notify overlapping subscribers."""
        prefix = as_key(prefix)
        matched = [key for key in self._entries if key[:len(prefix)] == prefix]
        for key in matched:
            self._entries[key].stale = True

        Slogger.info(f"Invalidated {len(matched)} cached queries", {"prefix": prefix})

        # Copy: a callback may unsubscribe itself
        for sub_prefix, callback in list(self._subscribers):
            if _overlaps(sub_prefix, prefix):
                callback(prefix)
        return matched

    def subscribe(self, prefix: KeyLike, callback: Callable[[QueryKey], None]) -> Callable[[], None]:
        """Call `callback(prefix)` whenever an overlapping prefix is invalidated."""
        entry = (as_key(prefix), callback)
        self._subscribers.append(entry)

        def unsubscribe() -> None:
            if entry in self._subscribers:
                self._subscribers.remove(entry)

        return unsubscribe

    def clear(self) -> None:
        self._entries.clear()
