"""JSON logging for the service plus an in-memory tail for the status routes."""

from __future__ import annotations

import logging
import os
from collections import deque
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(service)s"

_CONFIGURED = False


class LogTail(logging.Handler):
    """Keep the newest records as plain dicts, newest first."""

    def __init__(self, capacity: int = 200) -> None:
        super().__init__()
        self._entries: deque[dict[str, str]] = deque(maxlen=capacity)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            created = datetime.fromtimestamp(record.created, tz=timezone.utc)
            self._entries.appendleft(
                {
                    "time": created.strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
                    "level": record.levelname,
                    "name": record.name,
                    "message": record.getMessage(),
                }
            )
        except Exception:
            self.handleError(record)

    def snapshot(self, limit: int = 100, min_level: str | None = None) -> list[dict[str, str]]:
        entries = list(self._entries)
        if min_level:
            threshold = logging.getLevelName(min_level.upper())
            if isinstance(threshold, int):
                entries = [e for e in entries if logging.getLevelName(e["level"]) >= threshold]
        return entries[:limit]


LOG_TAIL = LogTail()


class _ServiceNameFilter(logging.Filter):
    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        record.service = self.service_name
        return True


_SERVICE_FILTER = _ServiceNameFilter("weather-blog")


def setup_logging(service_name: Optional[str] = None, level: Optional[str] = None) -> None:
    """Send JSON lines to stderr and mirror records into :data:`LOG_TAIL`.

    Handlers are installed once per process. Later calls only update the
    root level and the service name stamped on records.
    """

    global _CONFIGURED
    service = service_name or os.getenv("SERVICE_NAME", "weather-blog")
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    root = logging.getLogger()
    _SERVICE_FILTER.service_name = service
    root.setLevel(log_level)
    if _CONFIGURED:
        return

    stream = logging.StreamHandler()
    stream.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))
    stream.addFilter(_SERVICE_FILTER)

    root.handlers.clear()
    root.addHandler(stream)
    root.addHandler(LOG_TAIL)
    # httpx logs every request at INFO, which buries the pipeline's own records
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.captureWarnings(True)
    _CONFIGURED = True


def get_log_buffer(limit: int = 100, min_level: str | None = None) -> list[dict[str, str]]:
    return LOG_TAIL.snapshot(limit=limit, min_level=min_level)


__all__ = ["LOG_TAIL", "LogTail", "setup_logging", "get_log_buffer"]
