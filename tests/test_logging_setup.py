import io
import logging

from expense_tracker.logging_setup import configure_logging, get_logger, reset_logging


def test_get_logger_is_silent_until_configured():
    get_logger("expense_tracker.test")
    pkg = logging.getLogger("expense_tracker")
    assert any(isinstance(h, logging.NullHandler) for h in pkg.handlers)


def test_configure_logging_once_with_env_level(monkeypatch):
    monkeypatch.setenv("EXPENSE_TRACKER_LOG_LEVEL", "debug")
    stream = io.StringIO()
    configure_logging(stream=stream, fmt="%(levelname)s %(message)s")
    configure_logging(level="ERROR", stream=io.StringIO())

    pkg = logging.getLogger("expense_tracker")
    assert pkg.level == logging.DEBUG
    assert len([h for h in pkg.handlers if isinstance(h, logging.StreamHandler)]) == 1
    assert not pkg.propagate

    get_logger("expense_tracker.api").debug("hello %s", "there")
    assert stream.getvalue() == "DEBUG hello there\n"

    reset_logging()
    assert pkg.propagate
