"""Centralized logging configuration for the application.

Provides logging with separate files for:
- info.log: General application logs (INFO level and above)
- error.log: Error logs only (ERROR level and above)

Contract answers carry personal data, so every handler redacts e-mail
addresses and long tokens before a record is written.
"""

import logging
import re
import sys
from pathlib import Path

from contract_engine.core.config import get_settings

_EMAIL = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_LONG_TOKEN = re.compile(r"\b[a-zA-Z0-9]{32,}\b")


class RedactingFilter(logging.Filter):
    """Masks e-mail addresses and long identifiers (API keys, tokens)."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _LONG_TOKEN.sub("[ID]", _EMAIL.sub("[EMAIL]", message))
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(log_dir: Path | None = None) -> logging.Logger:
    """Configure application logging with file and console handlers.

    Args:
        log_dir: Directory for log files. Defaults to logs/ in the project root.

    Returns:
        The configured root logger.
    """
    settings = get_settings()
    level = logging.DEBUG if settings.log_level == "DEBUG" else logging.INFO

    log_dir = log_dir or Path(__file__).parent.parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    detailed_formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    simple_formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    redactor = RedactingFilter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    info_handler = logging.FileHandler(log_dir / "info.log", encoding="utf-8")
    info_handler.setLevel(logging.INFO)
    info_handler.setFormatter(detailed_formatter)
    info_handler.addFilter(redactor)
    root_logger.addHandler(info_handler)

    error_handler = logging.FileHandler(log_dir / "error.log", encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(detailed_formatter)
    error_handler.addFilter(redactor)
    root_logger.addHandler(error_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(simple_formatter)
    console_handler.addFilter(redactor)
    root_logger.addHandler(console_handler)

    # httpx logs every request URL at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root_logger
