"""
Logging utilities for the SQLite stress harness.

Centralizes logging configuration so the CLI, orchestrator and workers emit
the same line shape:

    2026-10-19 14:02:11 [3] - Insert

Records below WARNING go to stdout and WARNING and above go to stderr. An
optional JSON formatter emits structured logs (useful for pipelines/CI).

Usage:
    from sqlite_stress.utils.logging import configure_logging, get_logger

    configure_logging(level="INFO", json_logs=False)
    log = get_logger(__name__)
    log.info("Insert", extra={"worker_id": 1})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

DEFAULT_WORKER_ID = "main"

# Attributes every LogRecord carries; anything else arrived through `extra`.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as JSON string."""
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    for key, value in record.__dict__.items():
        if key in _STANDARD_ATTRS or key == "extra":
            continue
        payload[key] = value
    if hasattr(record, "extra") and isinstance(record.extra, dict):
        payload.update(record.extra)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


class WorkerContextFilter(logging.Filter):
    """Give records logged outside a worker the `main` worker id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "worker_id"):
            record.worker_id = DEFAULT_WORKER_ID
        return True


class MaxLevelFilter(logging.Filter):
    """Pass only records strictly below `level`."""

    def __init__(self, level: str = "WARNING") -> None:
        super().__init__()
        self.level = logging.getLevelName(level)

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
) -> None:
    """
    Configure root logging with split stdout/stderr handlers.

    Parameters
    ----------
    level : str
        Logging level name (e.g., "DEBUG", "INFO", "WARNING").
    json_logs : bool
        Whether to emit logs as JSON. If False, uses the worker line format.
    """
    formatter_name = "json" if json_logs else "console"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "worker_context": {"()": WorkerContextFilter},
                "below_warning": {"()": MaxLevelFilter, "level": "WARNING"},
            },
            "formatters": {
                "console": {
                    "format": "%(asctime)s [%(worker_id)s] - %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                },
            },
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter_name,
                    "filters": ["worker_context", "below_warning"],
                    "stream": "ext://sys.stdout",
                    "level": level,
                },
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter_name,
                    "filters": ["worker_context"],
                    "stream": "ext://sys.stderr",
                    "level": "WARNING",
                },
            },
            "root": {
                "handlers": ["stdout", "stderr"],
                "level": level,
            },
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the given name. If name is None, returns the root logger.
    """
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter", "WorkerContextFilter"]
