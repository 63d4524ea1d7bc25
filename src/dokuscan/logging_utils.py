#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dokuscan/logging_utils.py
"""Logging setup for the dokuscan command line.

Library modules only create module-level loggers. Handlers are installed on
the root logger by :func:`configure_logging`, which the CLI calls once per
run: a rich console handler on stderr and, optionally, a plain file handler.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _console_handler(trace_mode: bool) -> RichHandler:
    # RichHandler renders level, time and path itself
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=trace_mode,
        show_path=trace_mode,
        rich_tracebacks=trace_mode,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the command line.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, show timestamps and source locations on the console and
        logger names in the log file.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    console_handler = _console_handler(trace_mode)
    console_handler.setLevel(resolved_level)
    root_logger.addHandler(console_handler)

    if log_file:
        formatter = logging.Formatter(
            TRACE_FORMAT if trace_mode else PLAIN_FORMAT,
            datefmt=TRACE_DATE_FORMAT if trace_mode else None,
        )
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)

    return root_logger
