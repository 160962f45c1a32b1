"""Lazy bounded view over one chunk of a store."""

from __future__ import annotations

import dataclasses
import operator
from typing import Any, Callable, Iterator, Union

from .errors import BoundsViolation, require, require_index
from .store import Chunk, ChunkStore


@dataclasses.dataclass(frozen=True)
class Unfetched:
    pass


@dataclasses.dataclass(frozen=True)
class Fetched:
    data: Chunk


ChunkData = Union[Unfetched, Fetched]

UNFETCHED = Unfetched()


class ChunkView:
    """Window ``[begin, end)`` over a single chunk.

    The chunk is read from the store the first time an element is needed,
    not when the view is built. Slicing shares the (possibly still
    unfetched) data and only moves the bounds.
    """

    def __init__(
        self,
        store: ChunkStore,
        chunk_index: int,
        data: ChunkData = UNFETCHED,
        begin: int = 0,
        end: int | None = None,
    ) -> None:
        if end is None:
            end = store.chunk_size
        if isinstance(data, Fetched):
            end = min(end, len(data.data))
        require(chunk_index >= 0, f"chunk index must be >= 0, got {chunk_index}")
        require(begin <= end, f"begin {begin} > end {end}")
        require(
            chunk_index * store.chunk_size + begin <= store.file_size,
            f"chunk {chunk_index} begin {begin} is past the end of the file",
        )
        self.store = store
        self._index = chunk_index
        self._data: ChunkData = data
        self.begin = begin
        self.end = end

    @classmethod
    def with_bounds(
        cls,
        store: ChunkStore,
        chunk_index: int,
        data: ChunkData,
        begin: int,
        end: int,
    ) -> "ChunkView":
        return cls(store, chunk_index, data, begin, end)

    @property
    def index(self) -> int:
        return self._index

    @property
    def materialized(self) -> bool:
        return isinstance(self._data, Fetched)

    def ensure_materialized(self) -> Chunk:
        self.store.ensure_open()
        data = self._data
        if isinstance(data, Fetched):
            return data.data
        if self.begin == self.end:
            return ()
        chunk = self.store.fetch_chunk(self._index)
        self._data = Fetched(chunk)
        self.end = min(self.end, len(chunk))
        self.begin = min(self.begin, self.end)
        return chunk

    def at(self, i: int) -> Any:
        chunk = self.ensure_materialized()
        require_index(i, self.end - self.begin)
        return chunk[self.begin + i]

    def front(self) -> Any:
        chunk = self.ensure_materialized()
        require(self.begin < self.end, "front() on an empty chunk view")
        return chunk[self.begin]

    def back(self) -> Any:
        chunk = self.ensure_materialized()
        require(self.begin < self.end, "back() on an empty chunk view")
        return chunk[self.end - 1]

    def pop_front(self) -> None:
        require(self.begin < self.end, "pop_front() on an empty chunk view")
        self.begin += 1

    def pop_back(self) -> None:
        require(self.begin < self.end, "pop_back() on an empty chunk view")
        self.end -= 1

    def is_empty(self) -> bool:
        return self.begin == self.end

    def length(self) -> int:
        return self.end - self.begin

    def slice(self, begin: int, end: int) -> "ChunkView":
        require(begin <= end, f"slice begin {begin} > end {end}")
        require(
            0 <= begin and self.begin + end <= self.end,
            f"slice [{begin}, {end}) outside view of length {self.length()}",
        )
        return ChunkView.with_bounds(
            self.store, self._index, self._data, self.begin + begin, self.begin + end
        )

    def copy(self) -> "ChunkView":
        return ChunkView.with_bounds(
            self.store, self._index, self._data, self.begin, self.end
        )

    def for_each_indexed(self, callback: Callable[[int, Any], Any]) -> Any:
        """Call ``callback(i, element)`` over the window in order.

        Stops at the first truthy return value and returns it; returns
        ``None`` when every element was visited.
        """
        chunk = self.ensure_materialized()
        for position in range(self.begin, self.end):
            result = callback(position - self.begin, chunk[position])
            if result:
                return result
        return None

    def __len__(self) -> int:
        self.ensure_materialized()
        return self.length()

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __getitem__(self, key: int | slice) -> Any:
        self.ensure_materialized()
        if isinstance(key, slice):
            start, stop, step = key.indices(self.length())
            if step != 1:
                raise ValueError("chunk views only support slices with step 1")
            return self.slice(start, max(start, stop))
        try:
            key = operator.index(key)
        except TypeError:
            raise TypeError("indices must be integers or slices") from None
        if key < 0:
            key += self.length()
        if key < 0:
            raise BoundsViolation(f"index out of range for length {self.length()}")
        return self.at(key)

    def __iter__(self) -> Iterator[Any]:
        chunk = self.ensure_materialized()
        for position in range(self.begin, self.end):
            yield chunk[position]

    def __repr__(self) -> str:
        state = "fetched" if self.materialized else "unfetched"
        return f"ChunkView(chunk={self._index}, [{self.begin}, {self.end}), {state})"
