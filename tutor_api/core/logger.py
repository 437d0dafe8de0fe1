"""
tutor_api/core/logger.py

Process-wide logging setup for the tutor API.

Modules never configure logging themselves; they ask for a named logger:

    from tutor_api.core.logger import get_logger
    logger = get_logger(__name__)

Output goes to stdout as ``time | LEVEL | logger | message``. DEBUG is
enabled with ``DEBUG=true``.
"""

import logging
import sys

from tutor_api.core.config import settings

# Libraries that log every HTTP round-trip at INFO.
_NOISY_LOGGERS = ("uvicorn.access", "httpx", "openai")

_LINE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level() -> int:
    return logging.DEBUG if settings.debug else logging.INFO


def _stdout_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_level())
    handler.setFormatter(logging.Formatter(fmt=_LINE_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def _configure() -> None:
    """Attach the stdout handler to the root logger, once."""
    root = logging.getLogger()
    if root.handlers:
        # pytest or uvicorn got here first.
        return

    root.setLevel(_level())
    root.addHandler(_stdout_handler())

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure()


def get_logger(name: str) -> logging.Logger:
    """Named logger under the configured root, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)
