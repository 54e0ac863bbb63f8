from __future__ import annotations
import os
from pluginhost.core.config import settings


def main():
    reload = os.getenv('PLUGINHOST_RELOAD', '0') == '1'
    print(
        f"[entrypoint] starting version={settings.version} web_root={settings.web_root} "
        f"plugins={settings.plugin_root} reload={reload}",
        flush=True,
    )
    import uvicorn
    host = os.getenv('PLUGINHOST_HOST', '0.0.0.0')
    port = int(os.getenv('PLUGINHOST_PORT', '8000'))
    uvicorn.run('pluginhost.main:app', host=host, port=port, reload=reload)


if __name__ == '__main__':  # pragma: no cover
    main()
