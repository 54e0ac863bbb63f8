from __future__ import annotations

from typing import Optional, Protocol, TypeVar, runtime_checkable

K = TypeVar('K')
V = TypeVar('V')


@runtime_checkable
class Cache(Protocol[K, V]):
    """Key/value cache contract consumed by the plugin manager.

    Implementations may evict at any time; callers treat ``get`` returning
    ``None`` as a miss and rebuild whatever they stored.
    """

    def get(self, key: K) -> Optional[V]: ...

    def put(self, key: K, value: V) -> None: ...

    def remove(self, key: K) -> None: ...

    def remove_all(self) -> None: ...

    def contains(self, key: K) -> bool: ...
