import os
import random
import statistics
import tempfile
import time
from pathlib import Path

from chunk_range import LRUEviction, open_range


def make_file(root, size):
    path = Path(root) / "bench.bin"
    path.write_bytes(os.urandom(size))
    return path


def run_sequential(path, *, chunk_size, repeats):
    run_times = []
    for _ in range(repeats):
        start = time.perf_counter()
        with open_range(path, chunk_size) as r:
            for i in range(r.length()):
                r.at(i)
        run_times.append(time.perf_counter() - start)
    return run_times


def run_random(path, *, chunk_size, n_reads, repeats, eviction=None):
    rng = random.Random(0)
    run_times = []
    for _ in range(repeats):
        start = time.perf_counter()
        with open_range(path, chunk_size, eviction=eviction) as r:
            n = r.length()
            for _ in range(n_reads):
                r.at(rng.randrange(n))
        run_times.append(time.perf_counter() - start)
    return run_times


def summarize(run_times):
    return {
        "min": min(run_times),
        "mean": statistics.mean(run_times),
        "max": max(run_times),
    }


def main():
    file_size = 1 << 20
    n_reads = 200000
    repeats = 3
    chunk_sizes = [64, 512, 4096, 32768]

    print("Chunk range access benchmark")
    print(f"file_size={file_size}, n_reads={n_reads}, repeats={repeats}")
    with tempfile.TemporaryDirectory() as temp_dir:
        path = make_file(temp_dir, file_size)
        print("chunk_size  mode        min_s    mean_s   max_s")
        for chunk_size in chunk_sizes:
            seq = summarize(run_sequential(path, chunk_size=chunk_size, repeats=repeats))
            rnd = summarize(
                run_random(path, chunk_size=chunk_size, n_reads=n_reads, repeats=repeats)
            )
            lru = summarize(
                run_random(
                    path,
                    chunk_size=chunk_size,
                    n_reads=n_reads,
                    repeats=repeats,
                    eviction=LRUEviction(16),
                )
            )
            for label, stats in (("sequential", seq), ("random", rnd), ("random-lru", lru)):
                print(
                    f"{chunk_size:10d}  {label:10s}  {stats['min']:6.4f}  {stats['mean']:6.4f}  {stats['max']:6.4f}"
                )


if __name__ == "__main__":
    main()
