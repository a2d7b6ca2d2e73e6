"""A key/value cache split over lock-guarded shards."""

import threading
from typing import Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

_FNV32_OFFSET = 0x811C9DC5
_FNV32_PRIME = 0x01000193


def _fnv32(data: bytes) -> int:
    """32-bit FNV-1 hash."""
    h = _FNV32_OFFSET
    for byte in data:
        h = (h * _FNV32_PRIME) & 0xFFFFFFFF
        h ^= byte
    return h


class Shard(Generic[T]):
    """One partition of a ShardCache."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.items: Dict[str, T] = {}

    def _set(self, key: str, value: T) -> None:
        with self._lock:
            self.items[key] = value

    def _get(self, key: str) -> Optional[T]:
        with self._lock:
            return self.items.get(key)

    def _has(self, key: str) -> bool:
        with self._lock:
            return key in self.items

    def _delete(self, key: str) -> None:
        with self._lock:
            self.items.pop(key, None)


class ShardCache(Generic[T]):
    """String-keyed cache that spreads keys over shards by FNV-1 hash."""

    def __init__(self, shard_count: int) -> None:
        if shard_count <= 0:
            raise ValueError("shard count must be positive")
        self._shards: List[Shard[T]] = [Shard() for _ in range(shard_count)]

    def _shard(self, key: str) -> Shard[T]:
        return self._shards[_fnv32(key.encode("utf-8")) % len(self._shards)]

    def set(self, key: str, value: T) -> None:
        """Store ``value`` under ``key``, replacing any earlier value."""
        self._shard(key)._set(key, value)

    def get(self, key: str) -> Optional[T]:
        """Return the value for ``key``, or None when absent."""
        return self._shard(key)._get(key)

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        self._shard(key)._delete(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._shard(key)._has(key)

    def __len__(self) -> int:
        return sum(len(shard.items) for shard in self._shards)