"""Batched iteration over query results."""

from __future__ import annotations

import uuid
from typing import Any, Iterable


class Cursor:
    """A cursor handing out query results in batches."""

    def __init__(self, documents: Iterable[Any], batch_size: int) -> None:
        if batch_size < 0:
            raise ValueError("batch_size must be non-negative")
        self.id = str(uuid.uuid4())
        self._documents = list(documents)
        self._position = 0
        self._batch_size = batch_size
        self._exhausted = False

    def next_batch(self) -> list[Any]:
        """Return the next batch of documents, or an empty list when exhausted."""
        if self._exhausted:
            return []
        end = min(self._position + self._batch_size, len(self._documents))
        batch = self._documents[self._position:end]
        self._position = end
        if self._position >= len(self._documents):
            self._exhausted = True
        return batch

    def has_next(self) -> bool:
        """Whether more results may be fetched."""
        return not self._exhausted

    def total(self) -> int:
        """Total number of documents held by the cursor."""
        return len(self._documents)

    def remaining(self) -> int:
        """Number of documents not yet handed out."""
        return max(len(self._documents) - self._position, 0)

    def rewind(self) -> None:
        """Reset the cursor to the beginning."""
        self._position = 0
        self._exhausted = False

    def collect_all(self) -> list[Any]:
        """Return every remaining document and exhaust the cursor."""
        rest = self._documents[self._position:]
        self._position = len(self._documents)
        self._exhausted = True
        return rest