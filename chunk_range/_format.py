from typing import Any, Sequence

PREFIX = "[ChunkStore]"


def format_indices(values: Sequence[Any]) -> str:
    if len(values) <= 4:
        inner = ", ".join(repr(value) for value in values)
        return f"[{inner}]"
    head = ", ".join(repr(value) for value in values[:2])
    tail = ", ".join(repr(value) for value in values[-2:])
    return f"[{head}, ..., {tail}]"


def format_size(num_bytes: int) -> str:
    size = float(num_bytes)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if size < 1024 or unit == "GiB":
            if unit == "B":
                return f"{int(size)}{unit}"
            return f"{size:0.1f}{unit}"
        size /= 1024
    return f"{num_bytes}B"


def format_open(
    path: str, total_elements: int, chunk_size: int, element_format: str
) -> str:
    return (
        f"{PREFIX} open {path} elements={total_elements} "
        f"chunk_size={chunk_size} format={element_format!r}"
    )


def format_fetch(index: int, offset: int, num_bytes: int) -> str:
    return (
        f"{PREFIX} fetch chunk={index} offset={offset} "
        f"read={format_size(num_bytes)}"
    )


def format_evict(indices: Sequence[int]) -> str:
    return f"{PREFIX} evict chunks={format_indices(list(indices))}"


def format_stats(stats: Any) -> str:
    return (
        f"{PREFIX} summary "
        f"fetches={stats.fetches} "
        f"hits={stats.hits} "
        f"misses={stats.misses} "
        f"evictions={stats.evictions} "
        f"read={format_size(stats.bytes_read)}"
    )


def build_summary_lines(
    path: str,
    total_elements: int,
    chunk_size: int,
    cached: Sequence[int],
    stats: Any,
) -> list[str]:
    lines = [f"{PREFIX} file: {path}"]
    lines.append(f"  elements={total_elements} chunk_size={chunk_size}")
    lines.append(f"  cached={format_indices(list(cached))}")
    lines.append(format_stats(stats))
    return lines
