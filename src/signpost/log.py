"""Logging setup for signpost."""

import logging
from pathlib import Path

from textual.logging import TextualHandler

from .config import RouterConfig

LOGGER_NAME = "signpost"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Handler installed by the last configure_logging() call
_handler: logging.Handler | None = None


def configure_logging(config: RouterConfig) -> logging.Logger:
    """Attach a handler to the package logger according to ``config``.

    A terminal UI owns stdout, so records go either to ``log_file`` or to
    the Textual devtools console. Calling this again replaces the handler.
    """
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    level = getattr(logging, config.log_level.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    if _handler is not None:
        logger.removeHandler(_handler)
        _handler.close()
        _handler = None

    if config.log_file:
        log_path = Path(config.log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    else:
        handler = TextualHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    _handler = handler
    return logger
