"""Plugin manager: discovery pass plus cache-backed lookups.

Plugins live one per directory under ``<web root>/plugins``. A load pass walks
those directories, builds each plugin from its descriptor, binds it under its
renderer ids in the holder (``{renderer id: {plugins}}``), stores the holder in
the plugin cache and publishes ``pluginLoadedEvt`` with the plugins loaded by
that pass. Lookups read the holder through the cache and trigger a full load
on a miss.

No locking is done around the read-modify-write of the cached holder;
administrative callers are expected to serialize ``load``/``update``.
"""
from __future__ import annotations

import logging
import os
import pathlib
import stat
import time
from typing import List, Optional, Set, Tuple

from pluginhost.cache.base import Cache
from pluginhost.core.exceptions import EventException, EventPublishError, RegistryStateError
from pluginhost.events.manager import EventManager
from pluginhost.events.models import Event
from pluginhost.models.plugin import DEFAULT_PLUGIN_CLASS, Plugin
from pluginhost.plugin_runtime import registry
from pluginhost.plugin_runtime.class_loader import ImportlibLoader, Loader, PluginClassLoader
from pluginhost.plugin_runtime.descriptor import PluginDescriptor, code_locations, parse_descriptor
from pluginhost.plugin_runtime.registry import Holder
from pluginhost.utils.string_utils import is_blank

_log = logging.getLogger(__name__)

PLUGIN_LOADED_EVENT = 'pluginLoadedEvt'
PLUGIN_CACHE_NAME = 'pluginCache'
PLUGINS = 'plugins'


def _is_hidden(path: pathlib.Path) -> bool:
    if path.name.startswith('.'):
        return True
    try:
        attrs = getattr(path.stat(), 'st_file_attributes', 0)
    except OSError:
        return False
    return bool(attrs & getattr(stat, 'FILE_ATTRIBUTE_HIDDEN', 0))


class PluginManager:
    def __init__(
        self,
        web_root: os.PathLike | str,
        cache: Cache,
        event_manager: EventManager,
        loader: Optional[Loader] = None,
        *,
        plugin_root: os.PathLike | str | None = None,
        cache_key: str = PLUGIN_CACHE_NAME,
    ) -> None:
        self.web_root = pathlib.Path(web_root)
        self.plugin_root = pathlib.Path(plugin_root) if plugin_root is not None else self.web_root / PLUGINS
        self.cache_key = cache_key
        self._cache = cache
        self._event_manager = event_manager
        self._loader: Loader = loader if loader is not None else ImportlibLoader()
        self._class_loaders: List[PluginClassLoader] = []

    @property
    def class_loaders(self) -> Tuple[PluginClassLoader, ...]:
        """Class loaders created by the most recent load pass."""
        return tuple(self._class_loaders)

    # ------------------------------------------------------------------ queries

    def _holder(self) -> Holder:
        holder = self._cache.get(self.cache_key)
        if holder is None:
            _log.info("plugin cache miss, reload")
            self.load()
            holder = self._cache.get(self.cache_key)
            if holder is None:
                raise RegistryStateError("plugin cache state error: holder missing after reload")
        return holder

    def get_plugins(self) -> List[Plugin]:
        """Every registered plugin; one entry per renderer binding."""
        return registry.flatten(self._holder())

    def get_view_plugins(self, view_name: str) -> Set[Plugin]:
        """Plugins bound to ``view_name``; empty when the view is unknown."""
        return set(self._holder().get(view_name, ()))

    def find_plugin(self, plugin_id: str) -> Plugin | None:
        return registry.find(self._holder(), plugin_id)

    def update(self, plugin: Plugin) -> None:
        """Replace the stored entry for ``plugin`` and toggle its status."""
        holder = self._holder()
        if not registry.refresh(plugin, holder):
            raise RegistryStateError(
                f"plugin[id={plugin.id}] is not registered for renderer {plugin.renderer_ids[:1]}"
            )
        plugin.change_status()
        self._cache.put(self.cache_key, holder)
        _log.info("updated plugin[id=%s] status=%s", plugin.id, plugin.status.value)

    # -------------------------------------------------------------------- load

    def _plugin_dirs(self) -> List[pathlib.Path]:
        if not self.plugin_root.is_dir():
            _log.warning("plugin root %s does not exist, no plugins to load", self.plugin_root)
            return []
        return sorted(self.plugin_root.iterdir(), key=lambda p: p.name)

    def load(self) -> List[Plugin]:
        """Discover plugins under the plugin root and merge them into the cached holder.

        Failures of individual plugin directories are logged and skipped.
        Returns the plugins loaded by this pass, which is also the payload of
        the published ``pluginLoadedEvt``.
        """
        started = time.perf_counter()
        self._class_loaders.clear()

        plugins: List[Plugin] = []
        holder: Holder | None = self._cache.get(self.cache_key)
        if holder is None:
            _log.info("creating an empty plugin holder")
            holder = {}

        for plugin_dir in self._plugin_dirs():
            if not plugin_dir.is_dir() or _is_hidden(plugin_dir):
                _log.warning("[%s] is not a plugin directory under %s, ignored", plugin_dir.name, self.plugin_root)
                continue
            try:
                _log.info("loading plugin under directory[%s]", plugin_dir.name)
                plugin = self._load_plugin(plugin_dir, holder)
                if plugin is not None:
                    plugins.append(plugin)
            except Exception:
                _log.warning("load plugin under directory[%s] failed", plugin_dir.name, exc_info=True)

        self._cache.put(self.cache_key, holder)

        try:
            self._event_manager.fire_event_synchronously(Event(PLUGIN_LOADED_EVENT, list(plugins)))
        except EventException as exc:
            raise EventPublishError("plugin load error") from exc

        _log.info(
            "loaded %d plugin(s) from %s in %.1f ms",
            len(plugins), self.plugin_root, (time.perf_counter() - started) * 1000,
        )
        return plugins

    def _load_plugin(self, plugin_dir: pathlib.Path, holder: Holder) -> Plugin | None:
        descriptor = parse_descriptor(plugin_dir)

        class_loader = PluginClassLoader(code_locations(descriptor, self.web_root), plugin_dir.name)
        self._class_loaders.append(class_loader)

        plugin_class = descriptor.plugin_class
        if is_blank(plugin_class):
            plugin_class = DEFAULT_PLUGIN_CLASS

        if not descriptor.has_renderer:
            _log.warning("no renderer defined by plugin[%s], this plugin will be ignored", plugin_dir.name)
            return None

        plugin = self._loader.resolve(class_loader, plugin_class)
        self._bind_properties(plugin, descriptor, class_loader)
        self._register_event_listeners(descriptor, class_loader, plugin)
        registry.register(plugin, holder)
        plugin.change_status()
        return plugin

    @staticmethod
    def _bind_properties(plugin: Plugin, descriptor: PluginDescriptor, class_loader: PluginClassLoader) -> None:
        plugin.author = descriptor.author
        plugin.name = descriptor.name
        plugin.version = descriptor.version
        plugin.id = descriptor.plugin_id
        plugin.renderer_id = descriptor.renderer_id
        plugin.dir = descriptor.plugin_dir
        plugin.class_loader = class_loader
        plugin.read_langs()
        plugin.setting = descriptor.settings
        for plugin_type in descriptor.types:
            plugin.add_type(plugin_type)

    def _register_event_listeners(
        self, descriptor: PluginDescriptor, class_loader: PluginClassLoader, plugin: Plugin
    ) -> None:
        names = descriptor.listener_class_names
        if not names:
            _log.info("no event listener to load for plugin[name=%s]", plugin.name)
            return
        for class_name in names:
            # A blank entry ends listener binding for this plugin.
            if is_blank(class_name):
                _log.info("no event listener to load for plugin[name=%s]", plugin.name)
                return
            _log.debug("loading event listener[className=%s]", class_name)
            listener = self._loader.resolve_event_listener(class_loader, class_name)
            self._event_manager.register_listener(listener)
            _log.debug(
                "registered event listener[class=%s, eventType=%s] for plugin[name=%s]",
                type(listener).__name__, listener.event_type, plugin.name,
            )
