# tests/test_logger.py
from rich.logging import RichHandler

from cart_service.logger import LOGGER_NAME, get_logger, setup_logger


def test_setup_logger_adds_one_handler():
    log = setup_logger()
    again = setup_logger()
    assert log is again
    assert log.name == LOGGER_NAME
    assert len(log.handlers) == 1
    handler = log.handlers[0]
    assert isinstance(handler, RichHandler)
    # timestamps come from RichHandler's own column
    assert handler.formatter.datefmt is None


def test_child_loggers_share_the_handler():
    setup_logger()
    child = get_logger("api")
    assert child.name == f"{LOGGER_NAME}.api"
    assert not child.handlers
    assert child.parent.name == LOGGER_NAME
