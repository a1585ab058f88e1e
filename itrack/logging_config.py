"""Logging setup for the ``itrack`` logger hierarchy."""
import logging
import sys
import threading
from itrack.config import settings

_LOGGER_PREFIX = "itrack"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False
_lock = threading.Lock()


def configure_logging(level: str | None = None) -> None:
    """Configure once; later calls are no-ops."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    # Records still propagate to root, so only attach a handler when root has none.
    if not logging.getLogger().handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
