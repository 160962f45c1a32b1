from importlib.metadata import PackageNotFoundError, version

from .elements import DEFAULT_CHUNK_BYTES, ElementCodec
from .errors import BoundsViolation, ContractViolation, StoreClosedError
from .eviction import EvictionPolicy, LRUEviction, NoEviction
from .file_range import FileRange, open_range
from .store import ChunkStore, StoreStats
from .view import ChunkView, Fetched, Unfetched


try:
    __version__ = version("chunk-range")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "BoundsViolation",
    "ChunkStore",
    "ChunkView",
    "ContractViolation",
    "DEFAULT_CHUNK_BYTES",
    "ElementCodec",
    "EvictionPolicy",
    "Fetched",
    "FileRange",
    "LRUEviction",
    "NoEviction",
    "StoreClosedError",
    "StoreStats",
    "Unfetched",
    "__version__",
    "open_range",
]
