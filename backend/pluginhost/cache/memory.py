from __future__ import annotations

import math
import threading
from typing import Dict, Generic, Optional, TypeVar

import cachetools

K = TypeVar('K')
V = TypeVar('V')


class LruMemoryCache(Generic[K, V]):
    """In-process LRU cache with hit/miss accounting.

    Backed by ``cachetools.LRUCache``; ``max_size <= 0`` disables eviction.
    """

    def __init__(self, max_size: int = 0, name: str = 'default'):
        self.name = name
        self.max_size = max_size
        self._data: cachetools.LRUCache = cachetools.LRUCache(maxsize=max_size if max_size > 0 else math.inf)
        self._lock = threading.RLock()
        self.hit_count = 0
        self.miss_count = 0
        self.put_count = 0

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            try:
                value = self._data[key]
            except KeyError:
                self.miss_count += 1
                return None
            self.hit_count += 1
            return value

    def put(self, key: K, value: V) -> None:
        with self._lock:
            self._data[key] = value
            self.put_count += 1

    def remove(self, key: K) -> None:
        with self._lock:
            self._data.pop(key, None)

    def remove_all(self) -> None:
        with self._lock:
            self._data.clear()

    def contains(self, key: K) -> bool:
        with self._lock:
            return key in self._data

    @property
    def cached_count(self) -> int:
        return len(self._data)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                'cached': len(self._data),
                'hits': self.hit_count,
                'misses': self.miss_count,
                'puts': self.put_count,
            }

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"LruMemoryCache(name={self.name!r}, size={len(self._data)}, max_size={self.max_size})"
