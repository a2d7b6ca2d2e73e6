"""A thread-safe key/value repository."""

import threading
from typing import Any, Callable, Dict, Generic, Hashable, List, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class Repo(Generic[K, V]):
    """A dictionary guarded by a lock, where keys are only added once."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._items: Dict[K, V] = {}

    def add(self, key: K, value: V) -> None:
        """Store ``value`` under ``key`` unless the key is already present."""
        with self._lock:
            self._items.setdefault(key, value)

    def has(self, key: K) -> bool:
        """Return True if ``key`` is present."""
        with self._lock:
            return key in self._items

    def get(self, key: K) -> Optional[V]:
        """Return the value for ``key``, or None when absent."""
        with self._lock:
            return self._items.get(key)

    def all(self) -> Dict[K, V]:
        """Return a snapshot of all entries."""
        with self._lock:
            return dict(self._items)

    def slice(self) -> List[V]:
        """Return all values as a list."""
        with self._lock:
            return list(self._items.values())

    def use(self, key: K, handler: Callable[[Optional[V]], Any]) -> Any:
        """Call ``handler`` with the value for ``key`` and return its result."""
        return handler(self.get(key))

    def iterate(self, handler: Callable[[K, V], Any]) -> None:
        """Call ``handler`` for each entry; the repo may be modified meanwhile."""
        with self._lock:
            snapshot = list(self._items.items())
        for key, value in snapshot:
            handler(key, value)

    def delete(self, key: K) -> None:
        """Remove ``key`` if present."""
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._items = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items