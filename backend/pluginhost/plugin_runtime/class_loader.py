"""Dynamic loading of plugin entry points and event listeners.

Each plugin directory gets a :class:`PluginClassLoader`: a synthetic namespace
package ``pluginhost_plugins.<unit>_<digest>`` whose ``__path__`` is the plugin's code
locations. Type names in descriptors are dotted ``module.Attr`` paths relative
to those locations, so plugins may import their own sibling modules (relative
imports included) without leaking into each other or into ``sys.path``.
Names that are not found inside the plugin fall back to a normal import, which
is how built-in types such as ``NotInteractivePlugin`` resolve.
"""
from __future__ import annotations

import hashlib
import importlib
import logging
import pathlib
import re
import sys
import types
from typing import Any, Callable, Dict, Protocol, Sequence, Tuple

from pluginhost.core.exceptions import ClassLoadError, InstantiationError
from pluginhost.events.models import EventListener
from pluginhost.models.plugin import DEFAULT_PLUGIN_CLASS, NotInteractivePlugin, Plugin

_log = logging.getLogger(__name__)

NAMESPACE_ROOT = 'pluginhost_plugins'


def _namespace_segment(name: str) -> str:
    """Importable, collision-free package name for a unit directory.

    Sanitizing alone maps ``my-plugin`` and ``my.plugin`` to the same name, so
    a short digest of the raw directory name is appended.
    """
    segment = re.sub(r'\W', '_', name) or '_'
    if segment[0].isdigit():
        segment = f'_{segment}'
    digest = hashlib.sha1(name.encode('utf-8')).hexdigest()[:8]
    return f'{segment}_{digest}'


def _ensure_namespace_root() -> types.ModuleType:
    root = sys.modules.get(NAMESPACE_ROOT)
    if root is None:
        root = types.ModuleType(NAMESPACE_ROOT)
        root.__path__ = []  # children are installed explicitly, never searched
        sys.modules[NAMESPACE_ROOT] = root
    return root


class PluginClassLoader:
    """Import context bound to one plugin's code locations."""

    def __init__(self, locations: Sequence[pathlib.Path], name: str):
        self.name = name
        self.locations: Tuple[pathlib.Path, ...] = tuple(pathlib.Path(p) for p in locations)
        self.namespace = f"{NAMESPACE_ROOT}.{_namespace_segment(name)}"
        self._install()

    def _install(self) -> None:
        root = _ensure_namespace_root()
        # A new loader for the same unit replaces the previous one wholesale.
        self.purge()
        module = types.ModuleType(self.namespace)
        module.__path__ = [str(p) for p in self.locations]
        module.__package__ = self.namespace
        sys.modules[self.namespace] = module
        setattr(root, self.namespace.rsplit('.', 1)[1], module)
        importlib.invalidate_caches()

    def purge(self) -> None:
        """Forget every module previously imported through this namespace."""
        prefix = self.namespace + '.'
        for key in [k for k in sys.modules if k == self.namespace or k.startswith(prefix)]:
            sys.modules.pop(key, None)

    def _import(self, module_name: str) -> types.ModuleType:
        qualified = f"{self.namespace}.{module_name}"
        try:
            return importlib.import_module(qualified)
        except ModuleNotFoundError as exc:
            missing = exc.name or ''
            # Only fall back when the plugin itself lacks the module; a missing
            # dependency *inside* plugin code is a load failure.
            lacks_module = missing.startswith(self.namespace) and (
                qualified == missing or qualified.startswith(missing + '.')
            )
            if not lacks_module:
                raise ClassLoadError(module_name, f"import failed: {exc}") from exc
        except Exception as exc:
            raise ClassLoadError(module_name, f"import failed: {exc}") from exc
        try:
            return importlib.import_module(module_name)
        except ImportError as exc:
            raise ClassLoadError(module_name, f"module not found in {[str(p) for p in self.locations]}") from exc
        except Exception as exc:
            raise ClassLoadError(module_name, f"import failed: {exc}") from exc

    def load_class(self, type_name: str) -> Any:
        """Resolve ``package.module.Attr`` to the attribute object."""
        if not type_name or not type_name.strip():
            raise ClassLoadError(type_name or '', 'empty type name')
        module_name, _, attr = type_name.strip().rpartition('.')
        if not module_name or not attr:
            raise ClassLoadError(type_name, "expected a dotted 'module.Attr' name")
        module = self._import(module_name)
        try:
            return getattr(module, attr)
        except AttributeError:
            raise ClassLoadError(type_name, f"module {module_name!r} has no attribute {attr!r}") from None

    def __repr__(self) -> str:
        return f"PluginClassLoader(namespace={self.namespace!r}, locations={[str(p) for p in self.locations]})"


class Loader(Protocol):
    """Turns type names into live plugin and listener objects."""

    def resolve(self, class_loader: PluginClassLoader, type_name: str) -> Plugin: ...

    def resolve_event_listener(self, class_loader: PluginClassLoader, type_name: str) -> EventListener: ...


def _instantiate_plugin(type_name: str, factory: Any) -> Plugin:
    if not callable(factory):
        raise InstantiationError(type_name, 'not callable')
    try:
        instance = factory()
    except Exception as exc:
        raise InstantiationError(type_name, str(exc) or type(exc).__name__) from exc
    if not isinstance(instance, Plugin):
        raise InstantiationError(type_name, f"{type(instance).__name__} is not a Plugin")
    return instance


def _obtain_listener(type_name: str, target: Any) -> EventListener:
    accessor = getattr(target, 'get_instance', None)
    factory = accessor if callable(accessor) else target
    if not callable(factory):
        raise InstantiationError(type_name, 'no get_instance() accessor and not callable')
    try:
        listener = factory()
    except Exception as exc:
        raise InstantiationError(type_name, str(exc) or type(exc).__name__) from exc
    if not isinstance(listener, EventListener):
        raise InstantiationError(type_name, f"{type(listener).__name__} is not an EventListener")
    return listener


class ImportlibLoader:
    """Default loader: imports plugin code from the class loader's locations."""

    def resolve(self, class_loader: PluginClassLoader, type_name: str) -> Plugin:
        _log.debug("loading plugin class[name=%s]", type_name)
        return _instantiate_plugin(type_name, class_loader.load_class(type_name))

    def resolve_event_listener(self, class_loader: PluginClassLoader, type_name: str) -> EventListener:
        return _obtain_listener(type_name, class_loader.load_class(type_name))


class RegistryLoader:
    """Loader backed by an explicit name -> factory table; loads no code at runtime."""

    def __init__(self) -> None:
        self._plugin_types: Dict[str, Callable[[], Plugin]] = {DEFAULT_PLUGIN_CLASS: NotInteractivePlugin}
        self._listeners: Dict[str, Callable[[], EventListener]] = {}

    def register_plugin_type(self, name: str, factory: Callable[[], Plugin]) -> None:
        if not name:
            raise ValueError("plugin type name is required")
        self._plugin_types[name] = factory

    def register_listener(self, name: str, factory: Callable[[], EventListener]) -> None:
        if not name:
            raise ValueError("listener name is required")
        self._listeners[name] = factory

    def resolve(self, class_loader: PluginClassLoader, type_name: str) -> Plugin:
        factory = self._plugin_types.get(type_name)
        if factory is None:
            raise ClassLoadError(type_name, 'no registered plugin type')
        return _instantiate_plugin(type_name, factory)

    def resolve_event_listener(self, class_loader: PluginClassLoader, type_name: str) -> EventListener:
        factory = self._listeners.get(type_name)
        if factory is None:
            raise ClassLoadError(type_name, 'no registered listener')
        return _obtain_listener(type_name, factory)
