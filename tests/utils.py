import struct
from pathlib import Path
from typing import Sequence


def pattern_bytes(size: int) -> bytes:
    return bytes(i % 251 for i in range(size))


def write_file(directory: str | Path, name: str, data: bytes) -> Path:
    path = Path(directory) / name
    path.write_bytes(data)
    return path


def write_pattern_file(directory: str | Path, size: int, name: str = "data.bin") -> Path:
    return write_file(directory, name, pattern_bytes(size))


def pack_values(fmt: str, values: Sequence[int]) -> bytes:
    return b"".join(struct.pack(fmt, value) for value in values)
