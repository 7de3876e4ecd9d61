"""Logging setup for the customer registry.

Three groups of loggers are tuned independently from Settings:

* ``log_level_customers`` — the registry's own record lifecycle: the
  customer service (creates, updates, deletes, rejected writes), the
  repository (store conflicts and failures) and the HTTP error handlers.
* ``log_level_sql`` / ``log_level_http`` / ``log_level_uvicorn`` — third-party
  noise (SQL echo, outbound httpx calls from the API client, access logs).

Everything else follows ``log_level`` on the root logger.
"""

import logging
import sys

from app.config import Settings, get_settings

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_customers": [
        "app.application.services.customer_service",
        "app.infrastructure.database.repositories",
        "app.presentation.api",
    ],
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
        "asyncpg",
    ],
    "log_level_http": [
        "httpx",
        "httpcore",
        "app.infrastructure.client",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
}

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"


def setup_logging(settings: Settings | None = None) -> None:
    """Apply root and per-category levels; add a stderr handler if none exists."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    levels = {
        settings_field: _parse_level(getattr(settings, settings_field, "INFO"))
        for settings_field in _CATEGORY_MAP
    }
    for settings_field, logger_names in _CATEGORY_MAP.items():
        for name in logger_names:
            logging.getLogger(name).setLevel(levels[settings_field])

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, %s",
        settings.log_level,
        ", ".join(
            f"{field.removeprefix('log_level_')}={logging.getLevelName(level)}"
            for field, level in levels.items()
        ),
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
