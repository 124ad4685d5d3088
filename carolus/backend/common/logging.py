from __future__ import annotations

import json
import logging
import sys
import time
from typing import Any, MutableMapping, Optional, TextIO


_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_RESERVED_ATTRS = frozenset(
    (
        "args", "asctime", "created", "exc_info", "exc_text", "filename",
        "funcName", "levelname", "levelno", "lineno", "module", "msecs",
        "message", "msg", "name", "pathname", "process", "processName",
        "relativeCreated", "stack_info", "taskName", "thread", "threadName",
    )
)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: MutableMapping[str, Any] = {
            "ts": int(time.time() * 1000),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        # anything passed through ``extra=``
        for k, v in record.__dict__.items():
            if k not in _RESERVED_ATTRS:
                payload[k] = v

        return json.dumps(payload, ensure_ascii=False, default=str)


def level_from_name(level: str) -> Optional[int]:
    return _LEVELS.get((level or "").upper())


def level_from_verbosity(count: int) -> str:
    """Map repeated ``-v`` flags onto a level name."""

    if count <= 0:
        return "WARNING"
    if count == 1:
        return "INFO"
    return "DEBUG"


def init_logging(level: str = "INFO", *, stream: Optional[TextIO] = None) -> None:
    root = logging.getLogger()

    # Idempotent: clear existing handlers to avoid duplication
    for h in list(root.handlers):
        root.removeHandler(h)

    root.setLevel(level_from_name(level) or logging.INFO)
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name if name else __name__)
