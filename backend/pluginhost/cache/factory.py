from __future__ import annotations

import threading
from typing import Dict

from .memory import LruMemoryCache

_CACHES: Dict[str, LruMemoryCache] = {}
_lock = threading.Lock()


def get_cache(name: str, max_size: int = 0) -> LruMemoryCache:
    """Return the process-wide cache registered under ``name``, creating it on first use.

    ``max_size`` only applies when the cache is created.
    """
    if not name:
        raise ValueError("cache name is required")
    with _lock:
        cache = _CACHES.get(name)
        if cache is None:
            cache = LruMemoryCache(max_size=max_size, name=name)
            _CACHES[name] = cache
        return cache


def clear_caches() -> None:
    with _lock:
        for cache in _CACHES.values():
            cache.remove_all()
        _CACHES.clear()
