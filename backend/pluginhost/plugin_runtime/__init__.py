from .descriptor import PluginDescriptor, parse_descriptor, read_settings
from .class_loader import ImportlibLoader, Loader, PluginClassLoader, RegistryLoader
from .manager import PLUGIN_CACHE_NAME, PLUGIN_LOADED_EVENT, PluginManager

__all__ = [
    'PluginDescriptor',
    'parse_descriptor',
    'read_settings',
    'ImportlibLoader',
    'Loader',
    'PluginClassLoader',
    'RegistryLoader',
    'PLUGIN_CACHE_NAME',
    'PLUGIN_LOADED_EVENT',
    'PluginManager',
]
