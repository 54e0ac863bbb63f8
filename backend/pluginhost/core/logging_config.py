from __future__ import annotations

import logging

# Modules imported from plugin directories log under this prefix.
PLUGIN_CODE_LOGGER = "pluginhost_plugins"

_NOISY_LOGGERS: tuple[str, ...] = (
    "httpx",
    "httpcore",
    "urllib3",
    "urllib3.connectionpool",
    "asyncio",
)


def _resolve_level(level_name: str | None, default: int = logging.INFO) -> int:
    lvl = getattr(logging, (level_name or '').upper(), None)
    return lvl if isinstance(lvl, int) else default


def _ensure_stream_handler(logger: logging.Logger) -> None:
    handler_exists = any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    if handler_exists:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
    logger.addHandler(handler)


def configure_logging(level_name: str | None = None, plugin_level_name: str | None = None) -> None:
    """Configure the root logger and quiet chatty third-party loggers.

    ``plugin_level_name`` sets the level for code loaded from plugin
    directories; it inherits the root level when unset.
    """

    lvl = _resolve_level(level_name)

    root_logger = logging.getLogger()
    root_logger.setLevel(lvl)
    _ensure_stream_handler(root_logger)

    plugin_logger = logging.getLogger(PLUGIN_CODE_LOGGER)
    plugin_logger.setLevel(_resolve_level(plugin_level_name, logging.NOTSET))

    for noisy_name in _NOISY_LOGGERS:
        logger = logging.getLogger(noisy_name)
        if logger.level < logging.WARNING:
            logger.setLevel(logging.WARNING)
