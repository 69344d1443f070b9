# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for dupscan.

Diagnostics (scan warnings, skipped entries, lifecycle events) are structured
JSON lines on stderr. Normal output like the scan summary and query results
goes to stdout and never passes through here, so the two streams can be
redirected independently.

How this works:
  - Python's standard `logging` module does the routing, but every record is
    rendered by JsonFormatter into a single JSON line.
  - `get_logger(name, log_level=...)` attaches a stderr handler and, when asked,
    a file handler. The CLI does this once for the `dupscan` root logger.
  - `get_logger(name)` without a level returns a plain child logger that
    propagates to whatever the root `dupscan` logger was configured with.

The JSON structure looks like:
  {"ts": "2026-...", "level": "WARNING", "module": "dupscan.scan", "msg": "Skipping entry", ...}
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "dupscan"


class JsonFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Each log entry contains four mandatory fields:
      ts     : ISO 8601 UTC timestamp
      level  : log level name
      module : the logger name (usually the Python module path)
      msg    : the formatted message string

    Anything passed through the `extra` kwarg is merged in as additional
    context fields, e.g. the path of a skipped entry or the bucket count.
    """

    _STANDARD_ATTRS = frozenset(
        {
            "name",
            "msg",
            "args",
            "created",
            "relativeCreated",
            "exc_info",
            "exc_text",
            "stack_info",
            "lineno",
            "funcName",
            "pathname",
            "filename",
            "module",
            "levelno",
            "levelname",
            "processName",
            "process",
            "threadName",
            "thread",
            "message",
            "msecs",
            "taskName",
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in self._STANDARD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name string into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def get_logger(
    name: str,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Get a structured JSON logger.

    Modules call this with just their name and inherit the configuration of
    the `dupscan` root logger. Passing `log_level` configures handlers on the
    named logger itself, which is what bootstrap does once per process.

    Args:
        name: Logger name, typically a dotted path under `dupscan`.
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL. None means
                   "don't touch the configuration, just hand back the logger".
        log_file: Optional path to a log file. If provided, logs go to both
                  stderr and the file.

    Returns:
        A logging.Logger that outputs structured JSON once configured.
    """
    logger = logging.getLogger(name)
    if log_level is None:
        return logger

    level = _resolve_log_level(log_level)
    logger.setLevel(level)

    # Repeated configuration of the same name (happens in tests) must not
    # stack handlers, but the level above still gets updated.
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = JsonFormatter()

    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger
