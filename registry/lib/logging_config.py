"""Structured logging for the registry commands and the webhook service.

Every record can carry context fields attached with `log_with_context`;
they travel on the record under an `extra_` prefix and are flattened into
the JSON document (or appended as key=value pairs in text mode).
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

EXTRA_PREFIX = "extra_"
QUIET_LOGGERS = ("httpx", "httpcore", "urllib3", "uvicorn.access")


def _context_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Collect the context fields attached through log_with_context."""
    return {
        key[len(EXTRA_PREFIX):]: value
        for key, value in vars(record).items()
        if key.startswith(EXTRA_PREFIX)
    }


def _utc_timestamp(record: logging.LogRecord) -> str:
    moment = datetime.fromtimestamp(record.created, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, context fields at the top level."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _utc_timestamp(record),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        run_id = getattr(record, "run_id", None)
        if run_id:
            payload["run_id"] = run_id

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": self.formatException(record.exc_info),
            }

        payload.update(_context_fields(record))
        return json.dumps(payload, default=str, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for local runs, context appended as key=value."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _context_fields(record)
        if fields:
            line += " " + " ".join(f"{k}={v!r}" for k, v in fields.items())
        return line


class RunFilter(logging.Filter):
    """Stamps every record passing the handler with the current run ID."""

    def __init__(self):
        super().__init__()
        self.run_id: Optional[str] = None

    def set_run_id(self, run_id: str) -> None:
        self.run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        if self.run_id and not hasattr(record, "run_id"):
            record.run_id = self.run_id
        return True


def setup_logging(service_name: str, level: str = "INFO", fmt: str = "json") -> RunFilter:
    """Route all logging to stdout through a single handler.

    Any handlers already on the root logger are replaced, so calling this
    twice does not duplicate output.

    Args:
        service_name: Name reported in every JSON record (e.g. "distill")
        level: Root log level name
        fmt: "json" for structured output, "text" for console output

    Returns:
        RunFilter attached to the handler, for setting the run ID
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ConsoleFormatter() if fmt == "text" else StructuredFormatter(service_name))

    run_filter = RunFilter()
    handler.addFilter(run_filter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return run_filter


def log_with_context(logger: logging.Logger, level: str, message: str, **fields: Any) -> None:
    """Log message at level with structured context fields.

    Example:
        >>> log_with_context(logger, "error", "Link inaccessible.", url=url, statusCode=404)
    """
    extra = {f"{EXTRA_PREFIX}{key}": value for key, value in fields.items()}
    getattr(logger, level.lower())(message, extra=extra)


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the context fields of a captured record (used by tests and tooling)."""
    return _context_fields(record)
