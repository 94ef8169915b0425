import logging
import sys

import pytest

from firstmint.infrastructure.monitoring.logger_setup import resolve_log_level, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.mark.parametrize(
    "name, expected",
    [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("nonsense", logging.INFO)]
)
def test_resolve_log_level(name, expected):
    assert resolve_log_level(name) == expected


def test_setup_logging_replaces_handlers(restore_root_logger, tmp_path):
    log_file = tmp_path / "firstmint.log"
    setup_logging(log_level=logging.DEBUG, log_file=str(log_file))

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    assert logging.getLogger("httpx").level == logging.WARNING

    logging.getLogger("firstmint.test").info("hello from test")
    for handler in root.handlers:
        handler.flush()
    assert "hello from test" in log_file.read_text(encoding="utf-8")


def test_console_handler_writes_to_stderr(restore_root_logger):
    setup_logging(log_level=logging.INFO)

    root = restore_root_logger
    assert len(root.handlers) == 1
    assert root.handlers[0].stream is sys.stderr
    assert root.handlers[0].stream is not sys.stdout
