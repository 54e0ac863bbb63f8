from __future__ import annotations

import logging
from typing import Dict, List, Set

from pluginhost.models.plugin import Plugin

_log = logging.getLogger(__name__)

# renderer id -> plugins bound to it; the one value kept in the plugin cache
Holder = Dict[str, Set[Plugin]]


def _replace(bucket: Set[Plugin], plugin: Plugin) -> None:
    # set.add keeps an equal element that is already present
    bucket.discard(plugin)
    bucket.add(plugin)


def register(plugin: Plugin, holder: Holder) -> None:
    """Bind ``plugin`` under each of its renderer ids, replacing same-id entries."""
    for renderer_id in plugin.renderer_ids:
        _replace(holder.setdefault(renderer_id, set()), plugin)
    plugin.mark_registered()
    _log.debug(
        "registered plugin[name=%s, version=%s] for rendererId[name=%s], [%d] renderers totally",
        plugin.name, plugin.version, plugin.renderer_id, len(holder),
    )


def refresh(plugin: Plugin, holder: Holder) -> bool:
    """Swap the stored entry for ``plugin`` in every bound set.

    Returns ``False`` when the primary renderer id has no set in ``holder``;
    nothing is modified in that case.
    """
    renderer_ids = plugin.renderer_ids
    if not renderer_ids or renderer_ids[0] not in holder:
        return False
    for renderer_id in renderer_ids:
        bucket = holder.get(renderer_id)
        if bucket is not None:
            _replace(bucket, plugin)
    return True


def flatten(holder: Holder) -> List[Plugin]:
    """All plugins across renderer sets; a plugin bound twice appears twice."""
    ret: List[Plugin] = []
    for plugins in holder.values():
        ret.extend(plugins)
    return ret


def find(holder: Holder, plugin_id: str) -> Plugin | None:
    for plugins in holder.values():
        for plugin in plugins:
            if plugin.id == plugin_id:
                return plugin
    return None
