"""
Snapshot Cache - in-memory TTL store for BrightData results.

Avoids paying for the same scrape twice within a session. Keys are built
from the SORTED list of requested inputs, so the same set of URLs hits the
same entry regardless of request order.

Eviction is lazy: an expired entry is dropped the next time it is read.
There is no capacity bound - the number of distinct request sets is small
(one per category and page of static names), but this grows without limit
if callers start sending arbitrary URL sets.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

# 30 minutes
CACHE_TTL_SECONDS = 30 * 60


@dataclass
class CacheEntry:
    """A cached payload and when it was stored."""
    payload: Any
    inserted_at: float


class SnapshotCache:
    """Time-expiring cache keyed by canonical input lists."""

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    @staticmethod
    def make_key(inputs: Iterable[str], namespace: Optional[str] = None) -> str:
        """
        Build the canonical cache key for a list of inputs.

        Args:
            inputs: Requested URLs (any order)
            namespace: Optional prefix, e.g. "companies"

        Returns:
            "namespace:a,b,c" or "a,b,c"
        """
        key = ",".join(sorted(inputs))
        return f"{namespace}:{key}" if namespace else key

    def get(self, key: str) -> Optional[Any]:
        """Return the payload for key, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        age = self._clock() - entry.inserted_at
        if age < self.ttl_seconds:
            print(f"[Cache] HIT - {key[:80]} ({age:.0f}s old)", flush=True)
            return entry.payload

        print(f"[Cache] STALE - {key[:80]} ({age:.0f}s > {self.ttl_seconds:.0f}s TTL)", flush=True)
        del self._entries[key]
        return None

    def put(self, key: str, payload: Any) -> None:
        """Store payload under key, replacing any previous entry."""
        self._entries[key] = CacheEntry(payload=payload, inserted_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
