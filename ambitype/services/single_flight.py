"""Memoizing cache with single-flight fetch semantics."""

import logging
import threading
from collections.abc import Callable, Hashable
from concurrent.futures import Future
from typing import Any

logger = logging.getLogger(__name__)

_MISSING = object()


class SingleFlightCache:
    """Cache whose concurrent misses for the same key share one fetch.

    The first caller for a key runs ``fetch`` in its own thread; callers
    arriving while it runs block on the same future. Successful values stay
    cached until ``discard`` or ``clear``. Failed fetches are removed before
    the error is delivered, so the next caller retries.

    Thread Safety:
        The check-then-insert step is guarded by a lock; fetches themselves
        run outside the lock.
    """

    def __init__(self, name: str = "cache"):
        self._name = name
        self._entries: dict[Hashable, Future] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the cached value for a completed, successful key, else ``default``."""
        with self._lock:
            future = self._entries.get(key)
        if future is None or not future.done() or future.exception() is not None:
            return default
        return future.result()

    def put(self, key: Hashable, value: Any) -> None:
        """Store a value directly, replacing any cached or in-flight entry."""
        future: Future = Future()
        future.set_result(value)
        with self._lock:
            self._entries[key] = future

    def get_or_fetch(self, key: Hashable, fetch: Callable[[], Any]) -> Any:
        """Return the value for ``key``, running ``fetch`` at most once concurrently.

        Args:
            key: Cache key
            fetch: Zero-argument callable producing the value

        Returns:
            Cached or freshly fetched value

        Raises:
            Exception: Whatever ``fetch`` raised, for every caller sharing the flight
        """
        with self._lock:
            future = self._entries.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._entries[key] = future

        if not owner:
            if not future.done():
                logger.debug(f"{self._name}: joining flight for {key!r}")
            return future.result()

        try:
            value = fetch()
        except BaseException as e:
            with self._lock:
                if self._entries.get(key) is future:
                    del self._entries[key]
            future.set_exception(e)
            raise

        future.set_result(value)
        return value

    def discard(self, key: Hashable) -> None:
        """Forget a key; in-flight callers still receive their result."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Forget every key."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        with self._lock:
            return sum(
                1 for f in self._entries.values() if f.done() and f.exception() is None
            )
