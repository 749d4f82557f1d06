import logging

import pytest

from ts_to_typebox.logging import LOGGER_NAME, configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_child_loggers():
    assert get_logger().name == "ts_to_typebox"
    assert get_logger("visitor").name == "ts_to_typebox.visitor"


def test_records_go_to_stderr(capsys):
    configure_logging()
    get_logger("generator").warning("something happened")
    get_logger("generator").debug("hidden")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "[ts2typebox] WARNING something happened" in captured.err
    assert "hidden" not in captured.err


def test_verbose_shows_debug(capsys):
    configure_logging(verbose=True)
    get_logger("generator").debug("phase done")
    assert "[ts2typebox] DEBUG phase done" in capsys.readouterr().err


def test_reconfiguring_replaces_handler():
    configure_logging()
    logger = configure_logging(verbose=True)
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
