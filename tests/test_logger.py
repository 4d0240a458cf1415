import logging
import sys

from expense_tracker.core.logger import resolve_level, setup_logger


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" Error ") == logging.ERROR
    assert resolve_level("verbose") == logging.WARNING
    assert resolve_level(None) == logging.WARNING


def test_setup_logger_writes_to_stderr():
    logger = setup_logger(level="INFO")
    root = logging.getLogger()
    assert logger.name == "expense_tracker"
    assert root.level == logging.INFO
    assert any(getattr(handler, "stream", None) is sys.stderr for handler in root.handlers)
