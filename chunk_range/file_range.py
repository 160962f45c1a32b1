"""Random-access range over the elements of a file."""

from __future__ import annotations

import operator
from pathlib import Path
from typing import Any, Iterator

from .elements import DEFAULT_FORMAT
from .errors import BoundsViolation, require, require_index
from .eviction import EvictionPolicy
from .store import ChunkStore, StoreStats
from .view import ChunkView


class FileRange:
    """Lazy random-access window ``[offset, end)`` over a file.

    Elements are read a chunk at a time through a shared :class:`ChunkStore`
    and cached there. Each range also remembers the last chunk view it
    touched, so sequential access does not go back to the store for every
    element.

    Ranges produced by :meth:`slice` and :meth:`copy` share the store with
    their parent; closing any of them closes the file for all.

    Example:
        >>> with open_range("data.bin") as r:
        ...     first, last = r.front(), r.back()
        ...     middle = r[10:20]
    """

    def __init__(
        self,
        store: ChunkStore,
        offset: int = 0,
        end: int | None = None,
    ) -> None:
        if end is None:
            end = store.file_size
        require(0 <= offset <= end, f"invalid window [{offset}, {end})")
        require(
            end <= store.file_size,
            f"window end {end} past file size {store.file_size}",
        )
        self.store = store
        self._offset = offset
        self._end = end
        self._last_view: ChunkView | None = None
        self._chunk_offset = 0

    @classmethod
    def open(
        cls,
        filename: str | Path,
        chunk_size: int | None = None,
        *,
        mode: str = "rb",
        element_format: str = DEFAULT_FORMAT,
        eviction: EvictionPolicy | None = None,
        verbose: int = 0,
    ) -> "FileRange":
        store = ChunkStore(
            filename,
            mode,
            chunk_size,
            element_format=element_format,
            eviction=eviction,
            verbose=verbose,
        )
        return cls(store)

    @property
    def file_size(self) -> int:
        return self.store.file_size

    @property
    def chunk_size(self) -> int:
        return self.store.chunk_size

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def end(self) -> int:
        return self._end

    @property
    def stats(self) -> StoreStats:
        return self.store.stats

    def close(self) -> None:
        """Close the underlying file for every range sharing this store."""
        self.store.close()

    def _seek(self, position: int) -> ChunkView:
        chunk_index, chunk_offset = divmod(position, self.store.chunk_size)
        view = self._last_view
        if view is None or view.index != chunk_index:
            view = ChunkView(self.store, chunk_index)
            self._last_view = view
        self._chunk_offset = chunk_offset
        return view

    def _element(self, position: int) -> Any:
        view = self._seek(position)
        return view.at(self._chunk_offset)

    def front(self) -> Any:
        require(self._offset != self._end, "front() on an empty range")
        return self._element(self._offset)

    def back(self) -> Any:
        require(self._offset != self._end, "back() on an empty range")
        return self._element(self._end - 1)

    def pop_front(self) -> None:
        require(self._offset != self._end, "pop_front() on an empty range")
        self._offset += 1

    def pop_back(self) -> None:
        require(self._offset != self._end, "pop_back() on an empty range")
        self._end -= 1

    def is_empty(self) -> bool:
        return self._offset == self._end

    def length(self) -> int:
        return self._end - self._offset

    def at(self, i: int) -> Any:
        require_index(i, self.length())
        return self._element(self._offset + i)

    def slice(self, begin: int, end: int) -> "FileRange":
        require(begin <= end, f"slice begin {begin} > end {end}")
        require(
            0 <= begin and self._offset + end <= self._end,
            f"slice [{begin}, {end}) outside range of length {self.length()}",
        )
        return FileRange(self.store, self._offset + begin, self._offset + end)

    def copy(self) -> "FileRange":
        return FileRange(self.store, self._offset, self._end)

    save = copy

    def tolist(self) -> list[Any]:
        return list(self)

    def __len__(self) -> int:
        return self.length()

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __getitem__(self, key: int | slice) -> Any:
        if isinstance(key, slice):
            start, stop, step = key.indices(self.length())
            if step != 1:
                raise ValueError("file ranges only support slices with step 1")
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
        position = self._offset
        end = self._end
        chunk_size = self.store.chunk_size
        while position < end:
            chunk_index, begin = divmod(position, chunk_size)
            stop = min(chunk_size, begin + (end - position))
            view = ChunkView(self.store, chunk_index).slice(begin, stop)
            yield from view
            position += stop - begin

    def __reversed__(self) -> Iterator[Any]:
        position = self._end
        while position > self._offset:
            position -= 1
            yield self._element(position)

    def __enter__(self) -> "FileRange":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"FileRange({self.store.path!r}, [{self._offset}, {self._end}), "
            f"chunk_size={self.store.chunk_size})"
        )


def open_range(
    filename: str | Path,
    chunk_size: int | None = None,
    **kwargs: Any,
) -> FileRange:
    """Open ``filename`` and return a range over the whole file."""
    return FileRange.open(filename, chunk_size, **kwargs)
