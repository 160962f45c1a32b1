from __future__ import annotations

import dataclasses
import operator
import os
from pathlib import Path
from typing import Any, BinaryIO, Tuple

from ._format import (
    build_summary_lines,
    format_evict,
    format_fetch,
    format_open,
    format_stats,
)
from .elements import DEFAULT_FORMAT, ElementCodec
from .errors import StoreClosedError, require
from .eviction import EvictionPolicy, NoEviction

Chunk = Tuple[Any, ...]


@dataclasses.dataclass
class StoreStats:
    """Cache counters for a single store."""

    fetches: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    bytes_read: int = 0


def _normalize_mode(mode: str) -> str:
    if "r" not in mode or any(flag in mode for flag in "wax+"):
        raise ValueError(f"mode must be a read-only mode, got {mode!r}")
    if "b" not in mode:
        mode += "b"
    return mode


class ChunkStore:
    """Open file plus a cache of decoded chunks keyed by chunk index.

    The element count is fixed when the file is opened; the file is assumed
    not to change underneath the store. Every range and view built on a
    store shares it, so closing the store invalidates all of them.
    """

    def __init__(
        self,
        path: str | Path,
        mode: str = "rb",
        chunk_size: int | None = None,
        *,
        element_format: str = DEFAULT_FORMAT,
        eviction: EvictionPolicy | None = None,
        verbose: int = 0,
    ) -> None:
        """Initialize a ChunkStore.

        Args:
            path: File to read.
            mode: Read-only open mode; ``"b"`` is added when missing.
            chunk_size: Elements per chunk. Defaults to 4 KiB worth of
                elements.
            element_format: ``struct`` format of one element.
            eviction: Cache eviction policy (defaults to ``NoEviction``).
            verbose: 0 silent, 1 open/close summaries, 2 per-fetch lines.
        """
        self.codec = ElementCodec(element_format)
        if chunk_size is None:
            chunk_size = self.codec.default_chunk_size()
        if isinstance(chunk_size, bool):
            raise TypeError("chunk size must be an integer")
        chunk_size = operator.index(chunk_size)
        if chunk_size <= 0:
            raise ValueError("chunk size must be > 0")
        self.path = os.fspath(path)
        self.verbose = verbose
        self.eviction: EvictionPolicy = (
            eviction if eviction is not None else NoEviction()
        )
        self.stats = StoreStats()
        self._chunk_size = chunk_size
        self._chunks: dict[int, Chunk] = {}
        self._file: BinaryIO | None = open(self.path, _normalize_mode(mode))
        try:
            byte_size = os.fstat(self._file.fileno()).st_size
        except OSError:
            self._file.close()
            raise
        self._total_elements = byte_size // self.codec.size
        if self.verbose >= 1:
            print(
                format_open(
                    self.path, self._total_elements, self._chunk_size, self.codec.format
                )
            )

    @classmethod
    def open(
        cls,
        path: str | Path,
        mode: str = "rb",
        chunk_size: int | None = None,
        **kwargs: Any,
    ) -> "ChunkStore":
        return cls(path, mode, chunk_size, **kwargs)

    @property
    def file_size(self) -> int:
        """Size of the file in elements."""
        return self._total_elements

    @property
    def chunk_size(self) -> int:
        """Number of elements per chunk."""
        return self._chunk_size

    @property
    def element_size(self) -> int:
        return self.codec.size

    @property
    def closed(self) -> bool:
        return self._file is None

    def ensure_open(self) -> None:
        if self._file is None:
            raise StoreClosedError(f"file {self.path!r} is closed")

    def close(self) -> None:
        if self._file is None:
            return
        handle, self._file = self._file, None
        handle.close()
        self._chunks.clear()
        self.eviction.clear()
        if self.verbose >= 1:
            print(format_stats(self.stats))

    def is_cached(self, index: int) -> bool:
        return index in self._chunks

    def cached_chunks(self) -> list[int]:
        return sorted(self._chunks)

    def fetch_chunk(self, index: int) -> Chunk:
        """Return the decoded chunk ``index``, reading it on first use.

        The last chunk of the file may hold fewer than ``chunk_size``
        elements; chunks past the end are empty.
        """
        require(index >= 0, f"chunk index must be >= 0, got {index}")
        self.ensure_open()
        self.stats.fetches += 1
        cached = self._chunks.get(index)
        if cached is not None:
            self.stats.hits += 1
            self.eviction.record_access(index)
            return cached
        self.stats.misses += 1
        chunk = self._read_chunk(index)
        self._chunks[index] = chunk
        evicted = [old for old in self.eviction.record_insert(index) if old != index]
        for old in evicted:
            self._chunks.pop(old, None)
        if evicted:
            self.stats.evictions += len(evicted)
            if self.verbose >= 2:
                print(format_evict(evicted))
        return chunk

    def _read_chunk(self, index: int) -> Chunk:
        assert self._file is not None
        chunk_bytes = self._chunk_size * self.codec.size
        offset = index * chunk_bytes
        self._file.seek(offset)
        parts: list[bytes] = []
        remaining = chunk_bytes
        while remaining > 0:
            data = self._file.read(remaining)
            if not data:
                break
            parts.append(data)
            remaining -= len(data)
        raw = b"".join(parts)
        self.stats.bytes_read += len(raw)
        if self.verbose >= 2:
            print(format_fetch(index, offset, len(raw)))
        return self.codec.decode(raw)

    def summary(self) -> list[str]:
        return build_summary_lines(
            self.path,
            self._total_elements,
            self._chunk_size,
            self.cached_chunks(),
            self.stats,
        )

    def __enter__(self) -> "ChunkStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        handle = getattr(self, "_file", None)
        if handle is not None:
            handle.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return (
            f"ChunkStore({self.path!r}, elements={self._total_elements}, "
            f"chunk_size={self._chunk_size}, {state})"
        )
