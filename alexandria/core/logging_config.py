"""
Logging Configuration Module.

Console (and optionally file) logging for the Alexandria platform, driven by
the ``server`` settings group. The ``json`` format emits one object per line
and carries the ledger context passed through ``extra=`` (payment reference,
user, request data) so payment events can be traced end to end.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from alexandria.server.core.config import settings

LOG_LEVEL = settings.server.log_level.upper()
LOG_FORMAT = settings.server.log_format
LOG_FILE_DIR = settings.server.log_file_dir
ENABLE_FILE_LOGGING = settings.server.enable_file_logging

LOG_FILE_NAME = "alexandria.log"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

# Attributes lifted from ``extra=`` into JSON log lines when present.
CONTEXT_FIELDS = (
    "reference",
    "payment_id",
    "user_id",
    "status",
    "method",
    "path",
    "request_id",
    "status_code",
    "duration_ms",
    "error",
    "error_id",
)

MODULE_LOG_LEVELS = {
    # Payment flow: every status transition is worth keeping
    "alexandria.ledger": "DEBUG",
    "alexandria.gateway": "INFO",
    "alexandria.earnings": "INFO",
    # Business rules
    "alexandria.points": "INFO",
    "alexandria.social": "INFO",
    "alexandria.libraries": "INFO",
    "alexandria.courses": "INFO",
    "alexandria.users": "INFO",
    "alexandria.core.database": "INFO",
    # HTTP surface
    "alexandria.server": "INFO",
    "alexandria.server.api": "DEBUG",
    # Third-party libraries
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "uvicorn.access": "INFO",
}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "module": record.filename,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            if field in record.__dict__:
                payload[field] = record.__dict__[field]
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def build_formatter(fmt: str) -> logging.Formatter:
    """Formatter for ``simple``, ``json`` or ``detailed`` (anything else)."""
    if fmt == "json":
        return JsonFormatter(datefmt=DATE_FORMAT)
    if fmt == "simple":
        return logging.Formatter(SIMPLE_FORMAT, datefmt=DATE_FORMAT)
    return logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Configure logging for the application.

    Safe to call repeatedly: existing root handlers are replaced.

    Args:
        log_level: Console level override (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format override (simple, detailed, json)
        enable_file: Allow the file handler when file logging is enabled in settings
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    formatter = build_formatter(fmt)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_logging = enable_file and ENABLE_FILE_LOGGING
    if file_logging:
        log_dir = Path(LOG_FILE_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.debug(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)
