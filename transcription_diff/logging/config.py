"""Logging configuration for the transcription diff engine."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Literal, Tuple

from .context import get_log_context

LogFormat = Literal["json", "key-value"]

SERVICE_NAME = "transcription-diff"

# Attributes every LogRecord carries; anything else came from extra, a filter or the context.
RECORD_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
    "processName", "relativeCreated", "thread", "threadName", "asctime",
    "exc_info", "exc_text", "stack_info", "taskName",
})


def _extra_fields(record: logging.LogRecord, skip: frozenset) -> Iterator[Tuple[str, Any]]:
    for key, value in record.__dict__.items():
        if key in skip or key.startswith("_"):
            continue
        yield key, value


class ContextualFilter(logging.Filter):
    """Filter that enriches log records with static metadata and active context.

    Adds ``service`` and ``environment`` to every record, then copies the
    fields pushed with log_context()/push_log_context(). Fields passed via
    ``extra`` win over context fields of the same name.
    """

    def __init__(self, service: str = SERVICE_NAME, environment: str = "local"):
        super().__init__()
        self.service = service
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        record.environment = self.environment

        for key, value in get_log_context().items():
            if not hasattr(record, key):
                setattr(record, key, value)

        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, message, then every extra field."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": utc_timestamp(record.created),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        for key, value in _extra_fields(record, RECORD_ATTRS):
            log_obj[key] = self._to_json_value(value)

        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False, default=str)

    @staticmethod
    def _to_json_value(value: Any) -> Any:
        if isinstance(value, datetime):
            return value.isoformat()
        if value is None or isinstance(value, (str, int, float, bool, list, dict)):
            return value
        return str(value)


class KeyValueFormatter(logging.Formatter):
    """Human-readable formatter.

    Appends extra fields to the standard line as sorted ``key=value`` pairs:
    ``2026-10-19 10:30:00 [INFO] transcription_diff.alignment.comparer:
    Transcription compared accuracy=67 event=comparison.completed ...``

    ``service`` and ``environment`` are left out; they are constant per process.
    """

    SKIP_ATTRS = RECORD_ATTRS | {"service", "environment"}

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        pairs = [
            f"{key}={self._to_text(value)}"
            for key, value in sorted(_extra_fields(record, self.SKIP_ATTRS))
        ]
        if not pairs:
            return base
        return f"{base} {' '.join(pairs)}"

    @staticmethod
    def _to_text(value: Any) -> str:
        if isinstance(value, str):
            if any(ch in value for ch in (" ", "=", ",")):
                return f'"{value}"'
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return "null"
        if isinstance(value, datetime):
            return value.isoformat()
        return str(value)


def utc_timestamp(created: float) -> str:
    """Format a unix timestamp as ISO-8601 UTC with millisecond precision and 'Z'."""
    dt = datetime.fromtimestamp(created, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def configure_logging(
    level: str = "INFO",
    format_type: LogFormat = "key-value",
    environment: str = "local",
) -> None:
    """
    Route all logging through one stderr handler with the chosen format.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL), any case
        format_type: 'json' for one JSON object per line, 'key-value' for people
        environment: Label added to every record (local, staging, production)

    Raises:
        ValueError: If level or format_type is invalid
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    if format_type == "json":
        formatter: logging.Formatter = JSONFormatter()
    elif format_type == "key-value":
        formatter = KeyValueFormatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        raise ValueError(f"Invalid log format: {format_type}. Must be 'json' or 'key-value'")

    # stdout carries comparison output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.addFilter(ContextualFilter(service=SERVICE_NAME, environment=environment))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    logging.getLogger(__name__).debug(
        "Logging configured",
        extra={
            "event": "logging.configured",
            "component": "logging",
            "log_level": level.upper(),
            "log_format": format_type,
        },
    )
