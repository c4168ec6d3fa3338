"""Bloom filter for fast negative membership lookups."""

from __future__ import annotations

import hashlib
import math

_MASK64 = (1 << 64) - 1


class BloomFilter:
    """Probabilistic set: false positives are possible, false negatives are not."""

    def __init__(self, expected_items: int, false_positive_rate: float) -> None:
        if expected_items <= 0:
            raise ValueError("expected_items must be positive")
        if not 0.0 < false_positive_rate < 1.0:
            raise ValueError("false_positive_rate must be between 0 and 1")
        size = self._optimal_size(expected_items, false_positive_rate)
        self._init(size, self._optimal_hashes(size, expected_items))

    @classmethod
    def with_params(cls, size: int, num_hashes: int) -> BloomFilter:
        """Create a filter with an explicit bit count and hash count."""
        if size <= 0:
            raise ValueError("size must be positive")
        if num_hashes < 0:
            raise ValueError("num_hashes must be non-negative")
        bloom = cls.__new__(cls)
        bloom._init(size, num_hashes)
        return bloom

    def _init(self, size: int, num_hashes: int) -> None:
        self._bits = bytearray(size)
        self._size = size
        self._num_hashes = num_hashes
        self._count = 0

    @staticmethod
    def _optimal_size(n: int, p: float) -> int:
        # m = -(n * ln p) / (ln 2)^2
        return math.ceil(-(n * math.log(p)) / (math.log(2) ** 2))

    @staticmethod
    def _optimal_hashes(m: int, n: int) -> int:
        # k = (m / n) * ln 2
        return max(math.ceil((m / n) * math.log(2)), 1)

    def _positions(self, key: bytes) -> list[int]:
        h1 = int.from_bytes(hashlib.blake2b(key, digest_size=8).digest(), "little")
        h2 = int.from_bytes(hashlib.sha256(key).digest()[:8], "big")
        return [((h1 + i * h2) & _MASK64) % self._size for i in range(self._num_hashes)]

    def insert(self, key: bytes) -> None:
        """Add a byte key to the filter."""
        for pos in self._positions(bytes(key)):
            self._bits[pos] = 1
        self._count += 1

    def insert_str(self, key: str) -> None:
        """Add a string key to the filter."""
        self.insert(key.encode("utf-8"))

    def might_contain(self, key: bytes) -> bool:
        """False means the key is definitely absent; True means it may be present."""
        return all(self._bits[pos] for pos in self._positions(bytes(key)))

    def might_contain_str(self, key: str) -> bool:
        """String form of might_contain."""
        return self.might_contain(key.encode("utf-8"))

    def count(self) -> int:
        """Number of insertions made."""
        return self._count

    def false_positive_rate(self) -> float:
        """Estimated false positive rate at the current fill level."""
        fill_ratio = self._bits.count(1) / self._size
        return fill_ratio ** self._num_hashes

    def clear(self) -> None:
        """Reset the filter to empty."""
        self._bits = bytearray(self._size)
        self._count = 0

    def memory_bytes(self) -> int:
        """Bytes used by the bit array (one byte per bit)."""
        return self._size