#!/usr/bin/env python3

"""Process-lifetime memo table for compiled accessors."""

import threading
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

from ....infrastructure.config import get_config
from ....infrastructure.logging import get_logger

logger = get_logger(__name__)

V = TypeVar("V")


class AccessorCache:
    """Concurrency-safe, grow-only cache of compiled accessors.

    Reads never take the lock. On a miss the compile function runs outside the
    lock, so two threads can compile the same key at once; the first insert
    wins and every caller gets that stored value back. Entries are never
    evicted or invalidated.
    """

    def __init__(self, enabled: bool | None = None):
        """Initialize an empty cache.

        Args:
            enabled: Store compiled values; defaults to ENABLE_ACCESSOR_CACHE
        """
        if enabled is None:
            enabled = bool(get_config()["ENABLE_ACCESSOR_CACHE"])
        self.enabled = enabled
        self._entries: dict[Hashable, Any] = {}
        self._lock = threading.Lock()
        # Counters are bumped without the lock on the hit path; treat as approximate
        self.hits = 0
        self.misses = 0
        self.compilations = 0
        self.discarded = 0

    def get_or_compile(self, key: Hashable, compile_fn: Callable[[], V]) -> V:
        """Get the stored value for key, compiling and storing it on a miss.

        Args:
            key: Structural cache key
            compile_fn: Pure factory for the value; may run more than once per key

        Returns:
            The canonical stored value (or a fresh one when caching is disabled)
        """
        value = self._entries.get(key)
        if value is not None:
            self.hits += 1
            return value

        self.misses += 1
        compiled = compile_fn()

        if not self.enabled:
            return compiled

        with self._lock:
            self.compilations += 1
            stored = self._entries.setdefault(key, compiled)
            if stored is not compiled:
                self.discarded += 1

        if stored is compiled:
            logger.debug(f"Cached accessor for {key}")
        else:
            logger.debug(f"Discarded duplicate compilation for {key}")
        return stored

    def get(self, key: Hashable) -> Any | None:
        """Get a stored value without compiling."""
        return self._entries.get(key)

    def clear(self) -> None:
        """Drop every entry and reset statistics."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
            self.compilations = 0
            self.discarded = 0

    def stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache performance metrics
        """
        total_requests = self.hits + self.misses
        hit_rate = (self.hits / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "size": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
            "compilations": self.compilations,
            "discarded": self.discarded,
            "hit_rate": f"{hit_rate:.1f}%",
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries
