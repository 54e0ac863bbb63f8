import sys
import json
import pathlib
import pytest
import yaml

# Ensure backend root (containing the 'pluginhost' package) is on sys.path
BACKEND_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from pluginhost.cache import LruMemoryCache, clear_caches
from pluginhost.events import EventManager
from pluginhost.plugin_runtime.class_loader import NAMESPACE_ROOT
from pluginhost.plugin_runtime.manager import PLUGIN_CACHE_NAME, PluginManager
from tests.listeners import RecordingListener
from tests.test_plugins import test_plugin_loader


@pytest.fixture(autouse=True)
def _purge_plugin_modules():
    """Drop modules imported through plugin namespaces between tests."""
    yield
    for key in [k for k in sys.modules if k == NAMESPACE_ROOT or k.startswith(NAMESPACE_ROOT + '.')]:
        sys.modules.pop(key, None)
    clear_caches()


@pytest.fixture
def web_root(tmp_path):
    root = tmp_path / 'webapp'
    (root / 'plugins').mkdir(parents=True)
    return root


@pytest.fixture
def plugin_root(web_root):
    return web_root / 'plugins'


@pytest.fixture
def cache():
    return LruMemoryCache(name=PLUGIN_CACHE_NAME)


@pytest.fixture
def event_manager():
    return EventManager()


@pytest.fixture
def recorder(event_manager):
    listener = RecordingListener()
    event_manager.register_listener(listener)
    return listener


@pytest.fixture
def manager(web_root, cache, event_manager):
    return PluginManager(web_root, cache, event_manager)


@pytest.fixture
def write_plugin(plugin_root):
    """Create a plugin unit under the plugin root.

    ``descriptor`` is dumped to plugin.yml (skipped when ``None``), ``settings``
    to config.json, and ``files`` maps relative paths to text content.
    """
    def _write(dir_name, descriptor=None, settings=None, files=None):
        unit = plugin_root / dir_name
        unit.mkdir(parents=True, exist_ok=True)
        if descriptor is not None:
            (unit / 'plugin.yml').write_text(yaml.safe_dump(descriptor), encoding='utf-8')
        if settings is not None:
            (unit / 'config.json').write_text(json.dumps(settings), encoding='utf-8')
        for rel_path, content in (files or {}).items():
            target = unit / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding='utf-8')
        return unit
    return _write


@pytest.fixture
def install_test_plugins(plugin_root):
    """Copy units from tests/test_plugins into the temporary plugin root."""
    def _install(*names):
        return [test_plugin_loader.copy_test_plugin_to_temp(name, plugin_root) for name in names]
    return _install
