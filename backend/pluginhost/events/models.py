from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar('T')


@dataclass
class Event(Generic[T]):
    type: str
    data: T


class EventListener(ABC):
    """Handles events of a single type."""

    @property
    @abstractmethod
    def event_type(self) -> str:
        ...

    @abstractmethod
    def action(self, event: Event[Any]) -> None:
        ...


class SingletonEventListener(EventListener):
    """Listener exposing the ``get_instance()`` accessor plugin descriptors rely on.

    Each concrete subclass keeps its own instance.
    """

    _instance: Optional["SingletonEventListener"] = None

    @classmethod
    def get_instance(cls):
        inst = cls.__dict__.get('_instance')
        if inst is None:
            inst = cls()
            cls._instance = inst
        return inst
