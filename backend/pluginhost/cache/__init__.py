from .base import Cache
from .memory import LruMemoryCache
from .factory import get_cache, clear_caches

__all__ = ['Cache', 'LruMemoryCache', 'get_cache', 'clear_caches']
