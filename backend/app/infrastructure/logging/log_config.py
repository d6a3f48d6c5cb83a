"""Logging setup for the CMS.

``setup_logging()`` runs once from the application lifespan (and from the
maintenance scripts). It sets the root level and then the level of each
logger group named in ``_LOGGER_GROUPS``.
"""

import logging
import sys

from app.config import get_settings

# Settings field -> loggers whose level it controls
_LOGGER_GROUPS: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_storage": (
        "MediaPipeline",
        "app.infrastructure.storage",
        "app.infrastructure.imaging",
    ),
}

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging() -> None:
    settings = get_settings()

    root = logging.getLogger()
    root.setLevel(_level(settings.log_level))
    # uvicorn installs its own handlers; scripts and tests start bare
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    for field_name, names in _LOGGER_GROUPS.items():
        level = _level(getattr(settings, field_name))
        for name in names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Log levels: root=%s sql=%s uvicorn=%s storage=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_uvicorn,
        settings.log_level_storage,
    )


def _level(name: str) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give INFO."""
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else logging.INFO
