import logging
from typing import Optional, TextIO

from quark_signal.settings import settings

LOGGER_NAME = "quark_signal"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: Optional[str] = None,
    stream: Optional[TextIO] = None,
    propagate: bool = False,
) -> logging.Logger:
    """Attach a handler to the ``quark_signal`` logger tree.

    Only the library's own loggers are touched, so embedding applications
    keep their root configuration. Calling it again replaces the handler.
    """
    log_level = level or settings.log_level
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_quark_signal", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._quark_signal = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    logger.propagate = propagate
    return logger
