"""Logging setup and the fault log sink.

Every record written through `log_event` carries a `correlation_id` attribute, so
formatters can print it next to the message. Records from other loggers get `-`.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(correlation_id)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("movie_api.faults")


class CorrelationIdFilter(logging.Filter):
    """Default `correlation_id` for records that were not logged with one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "correlation_id": getattr(record, "correlation_id", "-"),
            "message": record.getMessage(),
        }
        for key in ("error_codes", "status_code", "fault_kind"):
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Install a single stdout handler on the root logger.

    Safe to call more than once; earlier root handlers are replaced.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    # Access logs duplicate what the pipeline already reports.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def log_event(
    correlation_id: str | None,
    severity: int,
    message: str,
    cause: BaseException | None = None,
    **fields: object,
) -> None:
    """Write one fault log line tagged with the request's correlation id."""
    extra: dict[str, object] = {"correlation_id": correlation_id or "-"}
    extra.update(fields)
    exc_info = None
    if cause is not None:
        exc_info = (type(cause), cause, cause.__traceback__)
    logger.log(severity, message, exc_info=exc_info, extra=extra)
