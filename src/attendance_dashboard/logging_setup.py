"""
Logging configuration for the dashboard.

Console output is always enabled; a rotating file handler is added when a log
file is configured. Bearer tokens are masked before records are emitted.
"""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER_NAME = "attendance_dashboard"

_BEARER_PATTERN = re.compile(r"(Bearer\s+)[A-Za-z0-9\-._~+/]+=*", re.IGNORECASE)
_TOKEN_PATTERN = re.compile(r'(access_token["\']?\s*[:=]\s*["\']?)([^"\'\s,}]+)', re.IGNORECASE)


def mask_token(token: str | None) -> str:
    """
    Mask a credential for safe logging.

    Examples:
        >>> mask_token("eyJhbGciOi.abc")
        'eyJh********'
        >>> mask_token(None)
        '***'
    """
    if not token:
        return "***"
    return token[:4] + "********"


class SensitiveDataFilter(logging.Filter):
    """Mask bearer tokens and access_token values in log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = _BEARER_PATTERN.sub(r"\1********", message)
        masked = _TOKEN_PATTERN.sub(r"\1********", masked)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def configure_logging(
    level: str | int = logging.INFO,
    log_file: Path | None = None,
    *,
    name: str = ROOT_LOGGER_NAME,
) -> logging.Logger:
    """
    Set up the package logger.

    Args:
        level: Logging level name or number
        log_file: Optional path for a rotating log file

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers when the app is rebuilt
    if logger.handlers:
        logger.setLevel(level)
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    sensitive_filter = SensitiveDataFilter()
    for handler in logger.handlers:
        handler.addFilter(sensitive_filter)

    return logger
