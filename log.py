"""Structured logging for the tutor relay.

Every relay invocation ends with exactly one "Relay finished" line carrying
endpoint, method, status_code and duration_ms, so a failed request can be
found from a single JSON record.

TUTOR_LOG_LEVEL sets verbosity (DEBUG/INFO/WARNING/ERROR).
TUTOR_LOG_FORMAT=text switches to human-readable lines.
"""
import logging
import json
import os
import sys
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

# Only these `extra=` attributes reach the JSON line.
RELAY_FIELDS = ("component", "endpoint", "method", "status_code", "duration_ms", "count", "detail")


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update({k: getattr(record, k) for k in RELAY_FIELDS if getattr(record, k, None) is not None})
        if record.exc_info and record.exc_info[1]:
            exc = record.exc_info[1]
            entry["error"] = str(exc)
            entry["error_type"] = type(exc).__name__
        return json.dumps(entry, ensure_ascii=False, default=str)


def get_logger(name: str = "tutor") -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, os.environ.get("TUTOR_LOG_LEVEL", "INFO").upper(), logging.INFO))
    handler = logging.StreamHandler(sys.stderr)
    if os.environ.get("TUTOR_LOG_FORMAT", "json") == "text":
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S"))
    else:
        handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger


@contextmanager
def relay_invocation(logger: logging.Logger, endpoint: str, method: str) -> Iterator[dict]:
    """Time one relay call and log its outcome on every exit path.

    The caller sets ``outcome["status_code"]`` for responses it returns; an
    escaping exception contributes its own ``status_code`` (502 if it has none).
    """
    started = time.monotonic()
    outcome = {"status_code": 200}
    try:
        yield outcome
    except Exception as exc:
        outcome["status_code"] = getattr(exc, "status_code", 502)
        raise
    finally:
        status = outcome["status_code"]
        logger.log(
            logging.INFO if status < 400 else logging.WARNING,
            "Relay finished",
            extra={
                "endpoint": endpoint, "method": method, "status_code": status,
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
