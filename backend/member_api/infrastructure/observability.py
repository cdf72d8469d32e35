"""Request Logging: JSON and key=value formatters for member API logs.

Invariants:
    - Every line carries timestamp, level, logger name, and message
    - Member extras (member_id, error_code, path, operation, status_code) appear
      in both formats, in that order, only when set on the record
    - operation is rendered as "store.<operation>"; status_code as an int
    - Text lines stay greppable: extras follow the message as key=value pairs

Design Decisions:
    - Formatters on stdlib logging: routes, services, and the store log through
      logging.getLogger(__name__) and need no wrapper
    - setup_logging called once on startup via lifespan
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = ("member_id", "error_code", "path", "operation", "status_code")
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def member_extras(record: logging.LogRecord) -> dict:
    """Known extras present on record, normalized for output."""
    extras = {}
    for key in EXTRA_FIELDS:
        val = record.__dict__.get(key)
        if val is None:
            continue
        if key == "operation" and "." not in str(val):
            val = f"store.{val}"
        elif key == "status_code":
            val = int(val)
        extras[key] = val
    return extras


class JSONFormatter(logging.Formatter):
    """One JSON object per line for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(member_extras(record))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class KeyValueFormatter(logging.Formatter):
    """Human-readable line followed by member extras as key=value."""

    def __init__(self):
        super().__init__(TEXT_FORMAT)

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        extras = member_extras(record)
        if not extras:
            return line
        pairs = " ".join(f"{key}={val}" for key, val in extras.items())
        return f"{line} [{pairs}]"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install one root handler for the service. Returns the installed handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else KeyValueFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
