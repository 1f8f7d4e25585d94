"""Unit tests for logger module."""

import logging
import logging.handlers
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from schooldesk.lib.logger import (
    CustomFormatter,
    clean_old_logs,
    configure_logger,
    get_log_directory,
)


class TestGetLogDirectory:
    def test_linux(self):
        with patch("schooldesk.lib.logger.get_platform", return_value="linux"):
            assert get_log_directory() == Path.home() / ".config" / "schooldesk" / "logs"

    def test_windows(self):
        with patch("schooldesk.lib.logger.get_platform", return_value="windows"):
            assert get_log_directory() == Path.home() / "AppData" / "Local" / "schooldesk" / "Logs"

    def test_unknown(self):
        with patch("schooldesk.lib.logger.get_platform", return_value="unknown"):
            with pytest.raises(OSError):
                get_log_directory()


def test_clean_old_logs_keeps_newest(tmp_path):
    for i in range(4):
        log = tmp_path / f"{i}.log"
        log.write_text("x")
        os.utime(log, (i, i))

    clean_old_logs(tmp_path, max_files=2)

    assert sorted(p.name for p in tmp_path.glob("*.log")) == ["2.log", "3.log"]


def test_custom_formatter_pads_level():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
    assert CustomFormatter("%(levelname)s|%(message)s").format(record) == "INFO    |hello"


def test_configure_logger_writes_to_log_dir(tmp_path):
    with patch("logging.basicConfig") as mock_basic_config:
        log_file = configure_logger(log_level=logging.WARNING, log_dir=tmp_path / "logs")

    assert log_file.parent == tmp_path / "logs"
    assert log_file.suffix == ".log"
    kwargs = mock_basic_config.call_args[1]
    assert kwargs["level"] == logging.WARNING
    assert kwargs["force"] is True
    assert len(kwargs["handlers"]) == 2
    for handler in kwargs["handlers"]:
        handler.close()


def test_configure_logger_without_console(tmp_path):
    with patch("logging.basicConfig") as mock_basic_config:
        configure_logger(log_dir=tmp_path, console=False)

    handlers = mock_basic_config.call_args[1]["handlers"]
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)
    handlers[0].close()


def test_configure_logger_quiets_libraries(tmp_path):
    werkzeug_logger = logging.getLogger("werkzeug")
    previous = werkzeug_logger.level
    try:
        with patch("logging.basicConfig") as mock_basic_config:
            configure_logger(log_level=logging.INFO, log_dir=tmp_path)
        assert werkzeug_logger.level == logging.WARNING
        for handler in mock_basic_config.call_args[1]["handlers"]:
            handler.close()
    finally:
        werkzeug_logger.setLevel(previous)
