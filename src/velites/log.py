from __future__ import annotations

import logging
import sys

LOG_FORMAT = "[velites] %(levelname)s %(name)s: %(message)s"

_handler: logging.StreamHandler | None = None


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach one stream handler to the package logger (idempotent).

    Repeated calls reuse the handler and point it at the current ``sys.stderr``.
    """

    global _handler
    logger = logging.getLogger("velites")
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)
    else:
        _handler.setStream(sys.stderr)
    return logger
