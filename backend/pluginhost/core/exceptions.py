"""Error taxonomy for plugin discovery, loading and lookup.

Per-unit errors (descriptor, capability type, class loading) are contained by
the manager: the unit is logged and skipped. Registry state and event
publication errors propagate to the caller.
"""
from __future__ import annotations

from pathlib import Path


class PluginError(Exception):
    """Base class for all plugin host errors."""


class MissingDescriptor(PluginError):
    def __init__(self, plugin_dir: Path, reason: str = 'descriptor not found'):
        self.plugin_dir = Path(plugin_dir)
        self.reason = reason
        super().__init__(f"{reason}: {self.plugin_dir}")


class MalformedSettings(PluginError):
    """The optional settings document could not be used. Never fatal to a unit."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"malformed settings {self.path}: {reason}")


class UnknownCapabilityType(PluginError):
    def __init__(self, type_name: str, plugin_dir: Path | None = None):
        self.type_name = type_name
        self.plugin_dir = plugin_dir
        super().__init__(f"unknown plugin type {type_name!r}")


class PluginLoadError(PluginError):
    def __init__(self, type_name: str, message: str):
        self.type_name = type_name
        super().__init__(message)


class ClassLoadError(PluginLoadError):
    def __init__(self, type_name: str, reason: str = 'not found'):
        self.reason = reason
        super().__init__(type_name, f"cannot load {type_name!r}: {reason}")


class InstantiationError(PluginLoadError):
    def __init__(self, type_name: str, reason: str):
        self.reason = reason
        super().__init__(type_name, f"cannot instantiate {type_name!r}: {reason}")


class RegistryStateError(PluginError):
    """The cached holder is unusable even after a forced reload."""


class EventException(Exception):
    """A listener failed while handling an event."""

    def __init__(self, event_type: str, message: str):
        self.event_type = event_type
        super().__init__(message)


class EventPublishError(PluginError):
    """Publishing the plugins-loaded event failed."""
