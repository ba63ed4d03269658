"""
Logging configuration for the Sweet Moment pricing service.

Everything the service logs sits under the "sweet_moment" logger. Two rules
apply on top of the configured level:

- Diagnostics events (absorbed catalog/price/cart degradations) are emitted
  at WARNING and stay visible even when LOG_LEVEL is ERROR or CRITICAL, so a
  quiet production config never hides that prices were computed from
  fallback data.
- The libraries this service drives (urllib3 under requests for product
  fetches, SQLAlchemy for cart storage, uvicorn's access log) are held at
  WARNING unless LOG_LEVEL is DEBUG.

Usage:
    from sweet_moment.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)
"""
import logging
import os
import sys

PACKAGE_LOGGER = "sweet_moment"
DIAGNOSTICS_LOGGER = "sweet_moment.services.diagnostics"

# Loggers of libraries this service calls into
LIBRARY_LOGGERS = ("urllib3", "sqlalchemy.engine", "sqlalchemy.pool", "uvicorn.access")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: str = None) -> int:
    """Map a level name (or LOG_LEVEL) to a logging level; unknown names mean INFO."""
    name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        return logging.INFO
    return numeric


def setup_logging(level: str = None) -> int:
    """
    Configure logging for the service.

    Args:
        level: Level name. If not provided, reads LOG_LEVEL.

    Returns:
        The numeric level applied to the "sweet_moment" logger
    """
    numeric_level = resolve_level(level)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    logging.getLogger(PACKAGE_LOGGER).setLevel(numeric_level)
    logging.getLogger(DIAGNOSTICS_LOGGER).setLevel(min(numeric_level, logging.WARNING))

    library_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(numeric_level))
    return numeric_level
