from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from pluginhost.core.exceptions import EventException
from .models import Event, EventListener

_log = logging.getLogger(__name__)


def _listener_key(listener: EventListener) -> Tuple[str, str]:
    cls = type(listener)
    return cls.__module__, cls.__qualname__


class EventManager:
    """Synchronous in-process event bus.

    Listeners are kept per event type in registration order. Registering a
    listener whose class is already registered replaces the older instance, so
    plugin reloads do not stack duplicate handlers.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, Dict[Tuple[str, str], EventListener]] = {}

    def register_listener(self, listener: EventListener) -> None:
        event_type = listener.event_type
        if not event_type:
            raise ValueError("listener event type is required")
        key = _listener_key(listener)
        for registered in self._listeners.values():
            registered.pop(key, None)
        self._listeners.setdefault(event_type, {})[key] = listener
        _log.debug("registered listener %s.%s for event %s", key[0], key[1], event_type)

    def unregister_listener(self, listener: EventListener) -> None:
        key = _listener_key(listener)
        for registered in self._listeners.values():
            registered.pop(key, None)

    def listeners(self, event_type: str) -> List[EventListener]:
        return list(self._listeners.get(event_type, {}).values())

    def fire_event_synchronously(self, event: Event) -> None:
        """Deliver ``event`` to every matching listener before returning.

        The first listener failure stops delivery and is raised as
        :class:`EventException`.
        """
        for listener in self.listeners(event.type):
            try:
                listener.action(event)
            except EventException:
                raise
            except Exception as exc:
                raise EventException(event.type, f"listener {type(listener).__name__} failed: {exc}") from exc
