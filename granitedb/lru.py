"""A least-recently-used cache with hit statistics."""

from __future__ import annotations

from collections import OrderedDict
from typing import Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LruCache(Generic[K, V]):
    """Bounded mapping that evicts the least recently used entry."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self.capacity = capacity
        self._entries: OrderedDict[K, V] = OrderedDict()
        self._hits = 0
        self._misses = 0

    def get(self, key: K) -> Optional[V]:
        """Return the cached value and mark it as recently used, or None."""
        if key in self._entries:
            self._hits += 1
            self._entries.move_to_end(key, last=False)
            return self._entries[key]
        self._misses += 1
        return None

    def put(self, key: K, value: V) -> Optional[V]:
        """Insert or update a value; return the previous value for the key, if any."""
        if key in self._entries:
            old = self._entries[key]
            self._entries[key] = value
            self._entries.move_to_end(key, last=False)
            return old
        if self._entries and len(self._entries) >= self.capacity:
            self._entries.popitem(last=True)
        self._entries[key] = value
        self._entries.move_to_end(key, last=False)
        return None

    def remove(self, key: K) -> Optional[V]:
        """Remove a key, returning its value if it was present."""
        return self._entries.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        """Whether the cache holds no entries."""
        return not self._entries

    def hit_rate(self) -> float:
        """Fraction of lookups that were hits; 0.0 before any lookup."""
        total = self._hits + self._misses
        return self._hits / total if total else 0.0

    def stats(self) -> tuple[int, int]:
        """Return (hits, misses)."""
        return self._hits, self._misses