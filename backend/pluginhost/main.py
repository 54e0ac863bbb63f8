from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging

from pluginhost.api import plugins as plugins_router
from pluginhost.core.config import settings
from pluginhost.core.dependencies import get_plugin_manager
from pluginhost.core.logging_config import configure_logging

_log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and run the initial plugin discovery pass."""
    configure_logging(settings.log_level, settings.plugin_log_level)
    try:
        get_plugin_manager().load()
    except Exception:  # keep startup going; lookups reload on the next cache miss
        _log.exception("initial plugin load failed")
    yield


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)
    app.include_router(plugins_router.router, prefix=settings.api_v1_prefix)

    @app.get('/')
    async def root():
        return {'status': 'ok', 'app': settings.app_name}

    return app


app = create_app()
