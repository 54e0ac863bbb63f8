"""Basic infrastructure validation: settings, logging setup and test plugin isolation."""

import logging
import os
from pathlib import Path

import pytest

from pluginhost import __version__
from pluginhost.core import exceptions
from pluginhost.core.config import Settings, settings
from pluginhost.core.logging_config import PLUGIN_CODE_LOGGER, configure_logging
from pluginhost.plugin_runtime import class_loader, descriptor, manager
from tests.test_plugins import isolated_test_plugins, test_plugin_loader


class TestSettings:
    def test_defaults(self):
        assert settings.plugin_cache_name == os.getenv('PLUGINHOST_CACHE_NAME', 'pluginCache')
        assert settings.api_v1_prefix.startswith('/')
        assert settings.version == __version__
        assert isinstance(settings.plugin_root, Path)

    def test_plugin_root_defaults_under_web_root(self):
        if os.getenv('PLUGINHOST_PLUGINS_DIR'):
            pytest.skip('plugin root overridden by environment')
        assert settings.plugin_root == settings.web_root / 'plugins'

    def test_explicit_values(self, tmp_path):
        custom = Settings(web_root=tmp_path, plugin_root=tmp_path / 'ext', plugin_cache_max_size=8)

        assert custom.web_root == tmp_path
        assert custom.plugin_root == tmp_path / 'ext'
        assert custom.plugin_cache_max_size == 8


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        root = logging.getLogger()
        level, handlers = root.level, list(root.handlers)
        yield
        root.setLevel(level)
        root.handlers[:] = handlers

    def test_sets_level(self):
        configure_logging('debug')
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        configure_logging('chatty')
        assert logging.getLogger().level == logging.INFO

    def test_handler_added_once(self):
        root = logging.getLogger()
        configure_logging('INFO')
        count = len(root.handlers)

        configure_logging('INFO')

        assert len(root.handlers) == count
        assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)

    def test_plugin_code_level(self):
        configure_logging('INFO', 'debug')
        assert logging.getLogger(PLUGIN_CODE_LOGGER).level == logging.DEBUG

        configure_logging('INFO')
        assert logging.getLogger(PLUGIN_CODE_LOGGER).level == logging.NOTSET

    def test_quiets_noisy_loggers(self):
        logging.getLogger('httpx').setLevel(logging.DEBUG)

        configure_logging('DEBUG')

        assert logging.getLogger('httpx').level == logging.WARNING


class TestTestPlugins:
    def test_test_plugin_directory_contents(self):
        assert test_plugin_loader.get_available_test_plugins() == [
            'broken_settings_plugin',
            'demo_plugin',
            'listener_gap_plugin',
            'missing_class_plugin',
            'missing_descriptor_plugin',
            'no_renderer_plugin',
            'plain_plugin',
            'unknown_type_plugin',
        ]

    def test_isolated_environment(self):
        original_root = settings.plugin_root

        with isolated_test_plugins(['demo_plugin']) as web_root:
            plugin_root = web_root / 'plugins'
            assert [d.name for d in plugin_root.iterdir()] == ['demo_plugin']
            assert (plugin_root / 'demo_plugin' / 'plugin.yml').exists()
            assert settings.plugin_root == plugin_root
            assert os.environ['PLUGINHOST_PLUGINS_DIR'] == str(plugin_root)

        assert not web_root.exists()
        assert settings.plugin_root == original_root

    def test_unknown_test_plugin(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            test_plugin_loader.copy_test_plugin_to_temp('does_not_exist', tmp_path)


@pytest.mark.parametrize('module, summary', [
    (descriptor, 'Plugin descriptor parsing.'),
    (class_loader, 'Dynamic loading of plugin entry points'),
    (manager, 'Plugin manager: discovery pass'),
    (exceptions, 'Error taxonomy for plugin discovery'),
])
def test_module_docstrings(module, summary):
    assert module.__doc__ is not None
    assert module.__doc__.startswith(summary)
