import tempfile
from pathlib import Path

from chunk_range import LRUEviction, open_range


def main():
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "sample.bin"
        path.write_bytes(bytes(i % 256 for i in range(10000)))

        with open_range(path, verbose=1) as r:
            print("Length:", r.length())
            print("Front/back:", r.front(), r.back())
            print("Element 4096:", r.at(4096))

            window = r.slice(4090, 4100)
            print("Window across chunk boundary:", window.tolist())

            cursor = window.copy()
            cursor.pop_front()
            print("Original front after popping the copy:", window.front())
            print("Copy front:", cursor.front())

            for line in r.store.summary():
                print(line)

        with open_range(path, 512, element_format="<H", eviction=LRUEviction(2)) as words:
            print("16-bit elements:", words.length())
            print("Last word:", words.back())
            total = sum(words)
            print("Sum of words:", total)
            print("Cached chunks:", words.store.cached_chunks())
            print("Stats:", words.stats)


if __name__ == "__main__":
    main()
