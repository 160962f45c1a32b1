import struct
from typing import Any, Tuple

DEFAULT_FORMAT = "B"
DEFAULT_CHUNK_BYTES = 4096


class ElementCodec:
    """Decode raw chunk bytes into fixed-width elements.

    The element type is described by a ``struct`` format string. Formats
    with a single field decode to scalars, wider formats (``"<hh"``) to
    tuples. A trailing partial element is dropped.
    """

    def __init__(self, element_format: str = DEFAULT_FORMAT) -> None:
        try:
            self._struct = struct.Struct(element_format)
        except struct.error as exc:
            raise ValueError(f"invalid element format {element_format!r}") from exc
        if self._struct.size <= 0:
            raise ValueError(f"element format {element_format!r} has zero width")
        fields = len(self._struct.unpack(bytes(self._struct.size)))
        if fields == 0:
            raise ValueError(f"element format {element_format!r} has no fields")
        self.format = element_format
        self.size = self._struct.size
        self._single = fields == 1

    def default_chunk_size(self) -> int:
        return max(1, DEFAULT_CHUNK_BYTES // self.size)

    def decode(self, data: bytes) -> Tuple[Any, ...]:
        usable = len(data) - len(data) % self.size
        if usable == 0:
            return ()
        if self.format == "B":
            return tuple(data[:usable])
        values = self._struct.iter_unpack(memoryview(data)[:usable])
        if self._single:
            return tuple(value for (value,) in values)
        return tuple(values)

    def __repr__(self) -> str:
        return f"ElementCodec({self.format!r})"
