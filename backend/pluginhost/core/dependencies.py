"""
Dependency wiring for the plugin host.
Provides the shared event manager and plugin manager, plus FastAPI dependencies.
"""

from functools import lru_cache
from typing import Annotated, Optional
from fastapi import Depends

from pluginhost.cache import get_cache
from pluginhost.core.config import settings
from pluginhost.events import EventManager
from pluginhost.plugin_runtime.manager import PluginManager

# Global variable to allow test isolation
_test_plugin_manager_override: Optional[PluginManager] = None


@lru_cache()
def get_event_manager() -> EventManager:
    """Get the process-wide EventManager (singleton)."""
    return EventManager()


@lru_cache()
def get_plugin_manager() -> PluginManager:
    """Get the PluginManager instance (singleton)."""
    # Allow test override for isolation
    if _test_plugin_manager_override is not None:
        return _test_plugin_manager_override
    return PluginManager(
        settings.web_root,
        get_cache(settings.plugin_cache_name, settings.plugin_cache_max_size),
        get_event_manager(),
        plugin_root=settings.plugin_root,
        cache_key=settings.plugin_cache_name,
    )


def set_test_plugin_manager_override(manager: Optional[PluginManager]) -> None:
    """Set a test override for the plugin manager (for test isolation)."""
    global _test_plugin_manager_override
    _test_plugin_manager_override = manager
    # Clear the lru_cache to ensure the override takes effect
    get_plugin_manager.cache_clear()


# FastAPI dependency type annotations
PluginManagerDep = Annotated[PluginManager, Depends(get_plugin_manager)]
