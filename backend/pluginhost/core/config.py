from pathlib import Path
from pydantic import BaseModel
import os
from dotenv import load_dotenv
from pluginhost import __version__
# Optionally load a config.env file for local development so the web root and
# log level can be kept out of shell profiles.
cfg_override = os.getenv('PLUGINHOST_CONFIG_FILE')
candidates = []
if cfg_override:
    candidates.append(Path(cfg_override))

# Prefer the working directory (where the host process is started)
candidates.append(Path.cwd() / 'config.env')
candidates.append(Path.cwd() / 'backend' / 'config.env')

for p in candidates:
    if p.exists():
        load_dotenv(str(p))
        break

"""Central configuration.

Env vars:
  PLUGINHOST_WEB_ROOT        - web root; plugins live under <web root>/plugins
  PLUGINHOST_PLUGINS_DIR     - explicit plugin root (overrides the web root default)
  PLUGINHOST_CACHE_NAME      - name of the cache holding the plugin registry
  PLUGINHOST_CACHE_MAX_SIZE  - LRU bound for that cache (0 = unbounded)
  PLUGINHOST_LOG_LEVEL       - DEBUG, INFO, WARNING, ERROR, CRITICAL
  PLUGINHOST_PLUGIN_LOG_LEVEL - level for code loaded from plugin directories (inherits when unset)
  PLUGINHOST_API_PREFIX      - prefix for the admin router
"""

def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


web_root = Path(os.getenv('PLUGINHOST_WEB_ROOT') or Path.cwd() / 'webapp')

env_plugins = os.getenv('PLUGINHOST_PLUGINS_DIR')
if env_plugins:
    plugin_root = Path(env_plugins)
else:
    plugin_root = web_root / 'plugins'


class Settings(BaseModel):
    app_name: str = 'Plugin Host'
    api_v1_prefix: str = os.getenv('PLUGINHOST_API_PREFIX', '/api/v1')
    version: str = __version__
    web_root: Path = web_root
    plugin_root: Path = plugin_root
    plugin_cache_name: str = os.getenv('PLUGINHOST_CACHE_NAME', 'pluginCache')
    plugin_cache_max_size: int = _env_int('PLUGINHOST_CACHE_MAX_SIZE', 0)
    # Logging level for the host (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = os.getenv('PLUGINHOST_LOG_LEVEL', 'INFO')
    plugin_log_level: str | None = os.getenv('PLUGINHOST_PLUGIN_LOG_LEVEL') or None

settings = Settings()
