"""A fixed-capacity ring cache that can spill its contents to JSON files."""

import json
import re
import threading
from collections import deque
from pathlib import Path
from typing import Any, Callable, Deque, Generic, List, Optional, Tuple, TypeVar, Union

from grimoire import uid
from grimoire.stamps import numerical_timestamp

T = TypeVar("T")

KB = 1 << 10
MB = 1 << 20
GB = 1 << 30

DEFAULT_SIZE = MB
MIN_LEN = 10
DEFAULT_LEN = 1000
MAX_LEN = 10000
CURRENT_LEN = DEFAULT_LEN

LOG_SUFFIX = ".log"

# Flushed files are named DATE__NAME__RUNID__INDEX.log
_FILE_PATTERN = re.compile(r"__([^_]+)__([^_]+)__")


def _flush_order(path: Path) -> Tuple[str, int, str]:
    date = path.name.split("__", 1)[0]
    index = path.stem.rpartition("__")[2]
    return date, int(index) if index.isdigit() else -1, path.name


class Cache(Generic[T]):
    """Keeps the most recent ``capacity`` items in memory and flushes them to disk."""

    def __init__(
        self,
        name: str,
        run_id: Optional[str] = None,
        *,
        capacity: int = CURRENT_LEN,
        directory: Union[str, Path] = ".",
        encode: Optional[Callable[[T], Any]] = None,
        decode: Optional[Callable[[Any], T]] = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError("cache capacity must be positive")
        self.app_name = name
        self.run_id = run_id if run_id is not None else uid.new()
        self.capacity = capacity
        self.directory = Path(directory)
        self._encode = encode
        self._decode = decode
        self._lock = threading.RLock()
        self._buffer: Deque[T] = deque(maxlen=capacity)
        self._size = 0
        self._flush_total = 0

    def _to_record(self, item: T) -> Any:
        return item if self._encode is None else self._encode(item)

    def _from_record(self, record: Any) -> T:
        return record if self._decode is None else self._decode(record)

    def size(self) -> int:
        """Return the total JSON size in bytes of the items written since the last clear."""
        with self._lock:
            return self._size

    def length(self) -> int:
        """Return how many items are held in memory."""
        with self._lock:
            return len(self._buffer)

    def is_full(self) -> bool:
        """Return True once the in-memory buffer holds ``capacity`` items."""
        with self._lock:
            return len(self._buffer) == self.capacity

    def write(self, item: T) -> None:
        """Append ``item``, dropping the oldest one when the buffer is full."""
        encoded = json.dumps(self._to_record(item), default=str)
        with self._lock:
            self._size += len(encoded.encode("utf-8"))
            self._buffer.append(item)

    def flush_len(self) -> int:
        """Return how many times the cache has been flushed to disk."""
        with self._lock:
            return self._flush_total

    def read_all(self, run_name: str) -> List[T]:
        """Return the in-memory items, followed by flushed ones for ``run_name``."""
        with self._lock:
            items = list(self._buffer)
            if self._flush_total > 0 and len(self._buffer) < self.capacity:
                items.extend(self._from_files(run_name))
            return items

    def flush(self) -> Optional[Path]:
        """Write the buffered items to a new file and empty the buffer."""
        with self._lock:
            if not self._buffer:
                return None
            filename = (
                f"{numerical_timestamp()}__{self.app_name}__{self.run_id}"
                f"__{self._flush_total}{LOG_SUFFIX}"
            )
            self.directory.mkdir(parents=True, exist_ok=True)
            path = self.directory / filename
            payload = json.dumps([self._to_record(item) for item in self._buffer], default=str)
            with path.open("a", encoding="utf-8") as handle:
                handle.write(payload + "\n")
            self._flush_total += 1
            self.clear()
            return path

    def clear(self) -> None:
        """Empty the in-memory buffer and reset the size counter."""
        with self._lock:
            self._buffer.clear()
            self._size = 0

    def _log_files(self, run_name: str) -> List[Path]:
        found = []
        for path in self.directory.rglob("*" + LOG_SUFFIX):
            if not path.is_file():
                continue
            match = _FILE_PATTERN.search(path.name)
            if match and match.groups() == (run_name, self.run_id):
                found.append(path)
        return sorted(found, key=_flush_order)

    def _from_files(self, run_name: str) -> List[T]:
        decoder = json.JSONDecoder()
        items: List[T] = []
        try:
            for path in self._log_files(run_name):
                text = path.read_text(encoding="utf-8").lstrip()
                records, _ = decoder.raw_decode(text)
                items.extend(self._from_record(record) for record in records)
        except (OSError, ValueError):
            return []
        return items