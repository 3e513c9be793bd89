"""Per-category log levels for the tracker.

The root level comes from ``LOG_LEVEL``; SQL, HTTP client, server and
attachment-storage loggers each get their own ``LOG_LEVEL_*`` setting.
"""

import logging
import sys

from app.config import Settings, get_settings

# Settings field → loggers it controls
_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": ["sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite"],
    "log_level_http": ["httpx", "httpcore"],
    "log_level_uvicorn": ["uvicorn", "uvicorn.access", "uvicorn.error"],
    "log_level_storage": [
        "app.infrastructure.storage",
        "app.application.services.object_service",
    ],
}

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(settings: Settings | None = None) -> None:
    """Apply the configured levels; called from the application lifespan."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        # uvicorn installs its own handlers; tests and scripts do not
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    levels = {}
    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field))
        levels[settings_field] = logging.getLevelName(level)
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        settings.log_level,
        " ".join(f"{k.removeprefix('log_level_')}={v}" for k, v in levels.items()),
    )


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names fall back to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO
