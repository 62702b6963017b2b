"""Structured logging configuration for github-repos.

- JSON structured logging with StructuredFormatter
- Logger hierarchy under the github_repos namespace
- Human-readable TextFormatter for terminals

Library modules only create loggers; configure_logging() is called by the CLI.
"""

import json
import logging
from datetime import datetime, timezone

__all__ = ["ROOT_LOGGER", "StructuredFormatter", "TextFormatter", "configure_logging"]

ROOT_LOGGER = "github_repos"

# Keys redacted from the context of structured log output
SENSITIVE_KEYS = {
    "password", "token", "secret", "apikey", "api_key",
    "authorization", "credential", "auth", "bearer",
}

_STANDARD_FIELDS = {
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "exc_info",
    "exc_text",
    "stack_info",
    "taskName",
}


class StructuredFormatter(logging.Formatter):
    """JSON log formatter.

    Outputs one JSON object per record with:
    - timestamp: UTC ISO 8601 format with 'Z' suffix
    - level: Log level name
    - logger: Logger name
    - message: Log message
    - context: Extras passed via ``extra=``, sensitive keys redacted
    - exception: Formatted traceback when exc_info is set
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = {
            k: ("[REDACTED]" if k.lower() in SENSITIVE_KEYS else v)
            for k, v in record.__dict__.items()
            if k not in _STANDARD_FIELDS and not k.startswith("_")
        }
        if extras:
            log_data["context"] = extras

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter for terminals."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def configure_logging(level: str = "INFO", log_format: str = "text") -> logging.Logger:
    """Configure the github_repos logger hierarchy.

    Safe to call more than once: the handler is installed only once, later
    calls just update level and formatter.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "json" or "text"

    Returns:
        The configured github_repos root logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = StructuredFormatter() if log_format.lower() == "json" else TextFormatter()

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)

    if not logger.handlers:
        logger.addHandler(logging.StreamHandler())
    for handler in logger.handlers:
        handler.setFormatter(formatter)

    # Avoid duplicate output through the root logger
    logger.propagate = False
    return logger
