"""Plugin descriptor parsing.

Every plugin directory carries a flat ``plugin.yml`` mapping and optionally a
``config.json`` settings document next to it. Keys accept the snake_case
spelling as well as the camelCase names of older descriptors.
"""
from __future__ import annotations

import json
import logging
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

import yaml

from pluginhost.core.exceptions import MalformedSettings, MissingDescriptor, UnknownCapabilityType
from pluginhost.models.plugin import RENDERER_ID_SEPARATOR, PluginType
from pluginhost.utils.string_utils import is_blank, split_list

_log = logging.getLogger(__name__)

DESCRIPTOR_FILE = 'plugin.yml'
SETTINGS_FILE = 'config.json'
CLASSES_DIR = 'classes'

LIST_SEPARATOR = ','

# Plain YAML null spellings, which BaseLoader hands back as text.
_YAML_NULLS = frozenset({'~', 'null', 'Null', 'NULL'})


@dataclass
class PluginDescriptor:
    plugin_dir: pathlib.Path
    name: Optional[str] = None
    author: Optional[str] = None
    version: Optional[str] = None
    renderer_id: Optional[str] = None
    types: Set[PluginType] = field(default_factory=set)
    plugin_class: Optional[str] = None
    event_listener_classes: Optional[str] = None
    classes_dir_path: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None

    @property
    def plugin_id(self) -> str:
        return f"{self.name}_{self.version}"

    @property
    def renderer_ids(self) -> List[str]:
        return split_list(self.renderer_id, RENDERER_ID_SEPARATOR)

    @property
    def listener_class_names(self) -> List[str]:
        return split_list(self.event_listener_classes, LIST_SEPARATOR)

    @property
    def has_renderer(self) -> bool:
        return not is_blank(self.renderer_id) and bool(self.renderer_ids)


def _text(data: Dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = data.get(key)
        if value is None or (isinstance(value, str) and value in _YAML_NULLS):
            continue
        return str(value)
    return None


def parse_types(raw: Optional[str], plugin_dir: pathlib.Path | None = None) -> Set[PluginType]:
    resolved: Set[PluginType] = set()
    for token in split_list(raw, LIST_SEPARATOR):
        try:
            resolved.add(PluginType[token])
        except KeyError:
            raise UnknownCapabilityType(token, plugin_dir) from None
    return resolved


def read_settings(plugin_dir: pathlib.Path) -> Optional[Dict[str, Any]]:
    """Return the parsed ``config.json`` of a plugin, or ``None`` when absent."""
    path = pathlib.Path(plugin_dir) / SETTINGS_FILE
    if not path.exists():
        return None
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedSettings(path, f"unreadable: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedSettings(path, f"invalid json: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedSettings(path, f"expected a JSON object, got {type(data).__name__}")
    return data


def _load_descriptor_mapping(plugin_dir: pathlib.Path) -> Dict[str, Any]:
    path = plugin_dir / DESCRIPTOR_FILE
    if not path.is_file():
        raise MissingDescriptor(plugin_dir)
    try:
        # BaseLoader keeps every scalar as written; `version: 1.10` must not become 1.1
        data = yaml.load(path.read_text(encoding='utf-8'), Loader=yaml.BaseLoader)
    except (OSError, UnicodeDecodeError) as exc:
        raise MissingDescriptor(plugin_dir, f"descriptor unreadable ({exc})") from exc
    except yaml.YAMLError as exc:
        raise MissingDescriptor(plugin_dir, f"descriptor is not valid YAML ({exc})") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MissingDescriptor(plugin_dir, "descriptor is not a key/value mapping")
    return data


def parse_descriptor(plugin_dir: pathlib.Path) -> PluginDescriptor:
    """Read the descriptor (and settings document) of one plugin directory.

    Raises :class:`MissingDescriptor` and :class:`UnknownCapabilityType`.
    A broken settings document is logged and the plugin continues without settings.
    """
    plugin_dir = pathlib.Path(plugin_dir)
    data = _load_descriptor_mapping(plugin_dir)

    descriptor = PluginDescriptor(
        plugin_dir=plugin_dir,
        name=_text(data, 'name'),
        author=_text(data, 'author'),
        version=_text(data, 'version'),
        renderer_id=_text(data, 'renderer_id', 'rendererId'),
        types=parse_types(_text(data, 'types'), plugin_dir),
        plugin_class=_text(data, 'plugin_class', 'pluginClass'),
        event_listener_classes=_text(data, 'event_listener_classes', 'eventListenerClasses'),
        classes_dir_path=_text(data, 'classes_dir_path', 'classesDirPath'),
    )
    _log.debug(
        "plugin descriptor[name=%s, author=%s, version=%s, types=%s]",
        descriptor.name, descriptor.author, descriptor.version, _text(data, 'types'),
    )

    try:
        descriptor.settings = read_settings(plugin_dir)
    except MalformedSettings as exc:
        _log.error("reading the config of the plugin[%s] failed: %s", descriptor.name, exc)
        descriptor.settings = None
    return descriptor


def code_locations(descriptor: PluginDescriptor, web_root: pathlib.Path) -> List[pathlib.Path]:
    """Directories searched for a plugin's code.

    The unit-local ``classes`` directory comes first. The second location is the
    web root path (up to, not including, its trailing separator) joined with the
    descriptor's ``classes_dir_path`` by plain concatenation, so the declared
    path normally starts with a separator, e.g. ``/WEB-INF/classes``.
    """
    locations = [descriptor.plugin_dir / CLASSES_DIR]
    if descriptor.classes_dir_path:
        base = str(pathlib.Path(web_root)).rstrip("/\\")
        locations.append(pathlib.Path(base + descriptor.classes_dir_path))
    return locations
