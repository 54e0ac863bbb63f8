"""Test plugin units for isolated plugin host testing.

Available test plugins:
- demo_plugin: custom entry point, relative imports, settings, language files
  and a singleton listener for the plugins-loaded event
- plain_plugin: no entry point declared, falls back to NotInteractivePlugin
- no_renderer_plugin: blank renderer id, skipped by the manager
- broken_settings_plugin: unparsable config.json, loads without settings
- unknown_type_plugin: declares a capability type outside the closed set
- missing_class_plugin: names an entry point that does not exist
- missing_descriptor_plugin: directory without plugin.yml
- listener_gap_plugin: listener list with a blank entry in the middle

Key utilities:
- plugin_loader_override: plugin directory override and isolation utilities
- isolated_test_plugins: context manager yielding a temporary web root
"""

from .plugin_loader_override import (
    TestPluginLoader,
    test_plugin_loader,
    isolated_test_plugins,
)

__all__ = [
    'TestPluginLoader',
    'test_plugin_loader',
    'isolated_test_plugins',
]
