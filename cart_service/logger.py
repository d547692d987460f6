# cart_service/logger.py
import logging

from rich.logging import RichHandler

from . import config

LOGGER_NAME = "cart_service"


def setup_logger(level: str = config.LOG_LEVEL) -> logging.Logger:
    """
    Configure the service logger.

    - One named logger shared by the HTTP layer
    - Console output rendered by rich
    - Safe to call more than once (handlers are only added the first time)
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = RichHandler(rich_tracebacks=True, show_path=False, log_time_format="[%Y-%m-%d %H:%M:%S]")
    handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("Logger initialized")
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
