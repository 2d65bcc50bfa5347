"""Tests for logging setup."""

from __future__ import annotations

import logging

import pytest

from armory.logging_config import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_file_handler_receives_records(tmp_path, restore_root_logger):
    logfile = tmp_path / "logs" / "armory.log"

    configure_logging("debug", logfile)
    logging.getLogger("armory.test").debug("escaping user input string: %r", "ace")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert restore_root_logger.level == logging.DEBUG
    content = logfile.read_text(encoding="utf-8")
    assert "DEBUG armory.test escaping user input string: 'ace'" in content


def test_without_logfile_only_streams(restore_root_logger):
    configure_logging("WARNING", None)

    assert restore_root_logger.level == logging.WARNING
    assert [type(h) for h in restore_root_logger.handlers] == [logging.StreamHandler]
