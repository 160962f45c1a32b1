"""Eviction policies for the chunk cache held by a store."""

from __future__ import annotations

import operator
from collections import OrderedDict
from typing import Protocol


class EvictionPolicy(Protocol):
    """Decides which cached chunks a store drops after an insert."""

    def record_access(self, index: int) -> None: ...

    def record_insert(self, index: int) -> list[int]: ...

    def clear(self) -> None: ...


class NoEviction:
    """Keep every chunk ever fetched for the lifetime of the store."""

    def record_access(self, index: int) -> None:
        return None

    def record_insert(self, index: int) -> list[int]:
        return []

    def clear(self) -> None:
        return None

    def __repr__(self) -> str:
        return "NoEviction()"


class LRUEviction:
    """Keep at most ``max_chunks`` chunks, dropping the least recently used."""

    def __init__(self, max_chunks: int) -> None:
        if isinstance(max_chunks, bool):
            raise TypeError("max_chunks must be an integer")
        max_chunks = operator.index(max_chunks)
        if max_chunks <= 0:
            raise ValueError("max_chunks must be > 0")
        self.max_chunks = max_chunks
        self._order: OrderedDict[int, None] = OrderedDict()

    def record_access(self, index: int) -> None:
        if index in self._order:
            self._order.move_to_end(index)

    def record_insert(self, index: int) -> list[int]:
        self._order[index] = None
        self._order.move_to_end(index)
        evicted: list[int] = []
        while len(self._order) > self.max_chunks:
            oldest, _ = self._order.popitem(last=False)
            evicted.append(oldest)
        return evicted

    def clear(self) -> None:
        self._order.clear()

    def __repr__(self) -> str:
        return f"LRUEviction(max_chunks={self.max_chunks})"
