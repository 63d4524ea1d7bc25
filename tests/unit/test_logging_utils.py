#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_logging_utils.py
"""Unit tests for command-line logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from dokuscan.logging_utils import configure_logging


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_console_handler(self):
        """The console gets a single rich handler at the requested level."""
        root = configure_logging("info")
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RichHandler)

    def test_log_file(self, temp_dir):
        """A log file receives plain formatted records."""
        log_path = temp_dir / "scan.log"
        root = configure_logging(logging.DEBUG, log_file=str(log_path))
        file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        logging.getLogger("dokuscan.test").debug("hello")
        file_handlers[0].close()
        assert "DEBUG: hello" in log_path.read_text(encoding="utf-8")

    def test_trace_format(self, temp_dir):
        """Trace mode adds logger names to file records."""
        log_path = temp_dir / "trace.log"
        root = configure_logging("WARNING", log_file=str(log_path), trace_mode=True)
        logging.getLogger("dokuscan.test").warning("careful")
        for handler in root.handlers:
            if isinstance(handler, logging.FileHandler):
                handler.close()
        assert "[dokuscan.test] careful" in log_path.read_text(encoding="utf-8")
