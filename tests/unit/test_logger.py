"""Tests for the logging helpers."""

from __future__ import annotations

import logging
import os

import pytest

from replaymitt.lib.logger import CustomFormatter, clean_old_logs, configure_logger


@pytest.fixture
def restore_logging():
    """Put root handlers and level back after configure_logger replaces them."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def test_clean_old_logs_keeps_newest(tmp_path):
    for i in range(7):
        log = tmp_path / f"{i}.log"
        log.write_text("x")
        os.utime(log, (1000 + i, 1000 + i))
    (tmp_path / "notes.txt").write_text("kept")

    clean_old_logs(tmp_path, max_files=3)

    assert sorted(p.name for p in tmp_path.glob("*.log")) == ["4.log", "5.log", "6.log"]
    assert (tmp_path / "notes.txt").exists()


def test_clean_old_logs_missing_dir(tmp_path):
    clean_old_logs(tmp_path / "nope")


def test_custom_formatter_pads_level():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "hello", None, None)
    assert CustomFormatter("%(levelname)s|%(message)s").format(record) == "INFO    |hello"


def test_configure_logger_writes_emitter_logs(tmp_path, restore_logging):
    from replaymitt.lib.events import Emitter
    from replaymitt.lib.registry import ChannelStore

    log_file = configure_logger(logging.DEBUG, log_dir=tmp_path / "logs")

    Emitter("logged", store=ChannelStore()).emit("greeting", "hi")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_file.parent == tmp_path / "logs"
    contents = log_file.read_text()
    assert "greeting" in contents
    assert "replaymitt.lib.events" in contents
