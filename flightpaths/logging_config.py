"""Console logging setup driven by ObservabilityConfig."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import ObservabilityConfig, get_config


class _ColoredFormatter(logging.Formatter):
    _COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    _RESET = "\033[0m"
    _BOLD = "\033[1m"

    def format(self, record: logging.LogRecord) -> str:
        color = self._COLORS.get(record.levelname, "")
        if color:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{self._BOLD}{record.levelname}{self._RESET}"
        return super().format(record)


def configure_logging(
    config: Optional[ObservabilityConfig] = None,
    level: Optional[str] = None,
) -> None:
    """Install a single stderr handler on the root logger.

    Standard output stays free for command results.

    Args:
        config: Logging settings, defaults to the application config.
        level: Level name overriding the configured one.
    """
    config = config or get_config().observability
    resolved = logging.getLevelName((level or config.level).upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)

    formatter = (
        _ColoredFormatter(config.format, datefmt=config.date_format)
        if sys.stderr.isatty()
        else logging.Formatter(config.format, datefmt=config.date_format)
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
