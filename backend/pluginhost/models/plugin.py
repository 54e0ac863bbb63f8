from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import yaml

from pluginhost.utils.string_utils import split_list

_log = logging.getLogger(__name__)

LANG_FILE_PREFIX = 'lang_'
LANG_FILE_SUFFIX = '.yml'
RENDERER_ID_SEPARATOR = ';'


class PluginType(str, Enum):
    """Closed set of capability types a descriptor may declare."""
    ADMIN = 'ADMIN'
    PUBLIC = 'PUBLIC'


class PluginStatus(str, Enum):
    UNINITIALIZED = 'uninitialized'
    REGISTERED = 'registered'
    ENABLED = 'enabled'
    DISABLED = 'disabled'


class Plugin:
    """Base class for plugin entry points.

    Identity is ``id`` (``<name>_<version>``); two instances with the same id
    are interchangeable inside registry sets, which is what gives ``update``
    its replace semantics.
    """

    def __init__(self) -> None:
        self.id: Optional[str] = None
        self.name: Optional[str] = None
        self.version: Optional[str] = None
        self.author: Optional[str] = None
        self.renderer_id: Optional[str] = None
        self.dir: Optional[Path] = None
        self.types: Set[PluginType] = set()
        self.setting: Optional[Dict[str, Any]] = None
        self.langs: Dict[str, Dict[str, str]] = {}
        self.status: PluginStatus = PluginStatus.UNINITIALIZED
        self.class_loader = None

    @property
    def renderer_ids(self) -> List[str]:
        """Renderer identifiers this plugin binds to, in declaration order."""
        return split_list(self.renderer_id, RENDERER_ID_SEPARATOR)

    def add_type(self, plugin_type: PluginType) -> None:
        self.types.add(plugin_type)

    def mark_registered(self) -> None:
        if self.status is PluginStatus.UNINITIALIZED:
            self.status = PluginStatus.REGISTERED

    def change_status(self) -> PluginStatus:
        """Toggle between enabled and disabled; a fresh plugin becomes enabled."""
        if self.status is PluginStatus.ENABLED:
            self.status = PluginStatus.DISABLED
        else:
            self.status = PluginStatus.ENABLED
        return self.status

    @property
    def enabled(self) -> bool:
        return self.status is PluginStatus.ENABLED

    def read_langs(self) -> None:
        """Load ``lang_<locale>.yml`` string tables from the plugin directory."""
        self.langs = {}
        if self.dir is None or not Path(self.dir).is_dir():
            return
        for lang_file in sorted(Path(self.dir).glob(f'{LANG_FILE_PREFIX}*{LANG_FILE_SUFFIX}')):
            locale = lang_file.name[len(LANG_FILE_PREFIX):-len(LANG_FILE_SUFFIX)]
            if not locale:
                continue
            try:
                data = yaml.safe_load(lang_file.read_text(encoding='utf-8')) or {}
            except (OSError, yaml.YAMLError) as exc:
                _log.warning("skipping language file %s of plugin[name=%s]: %s", lang_file.name, self.name, exc)
                continue
            if not isinstance(data, dict):
                _log.warning("language file %s of plugin[name=%s] is not a mapping", lang_file.name, self.name)
                continue
            self.langs[locale] = {str(k): '' if v is None else str(v) for k, v in data.items()}

    def get_lang(self, locale: str, key: str) -> Optional[str]:
        return self.langs.get(locale, {}).get(key)

    def prepare(self, data_model: Dict[str, Any]) -> Dict[str, Any]:
        """Hook for the rendering layer; plugins fill ``data_model`` for their view."""
        return data_model

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'version': self.version,
            'author': self.author,
            'renderer_id': self.renderer_id,
            'renderer_ids': list(self.renderer_ids),
            'types': sorted(t.value for t in self.types),
            'status': self.status.value,
            'dir': str(self.dir) if self.dir is not None else None,
            'setting': self.setting,
            'langs': sorted(self.langs),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plugin):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, status={self.status.value})"


class NotInteractivePlugin(Plugin):
    """Entry point used when a descriptor does not name one; renders nothing of its own."""


DEFAULT_PLUGIN_CLASS = f"{NotInteractivePlugin.__module__}.{NotInteractivePlugin.__qualname__}"
