"""
Logging configuration for the appstore command line tool.

Library modules only create ``logging.getLogger(__name__)`` loggers;
handlers are installed here, by the CLI, never on import.
"""

from __future__ import annotations

import logging

import json_log_formatter

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "WARNING", fmt: str = "text") -> None:
    """Configure the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        fmt: ``text`` or ``json`` (one JSON object per line)
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    if fmt == "json":
        formatter: logging.Formatter = json_log_formatter.JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    # Reduce noise from libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
