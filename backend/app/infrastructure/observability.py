"""Structured Logging — player-aware JSON and text log output.

Invariants:
    - Every record carries service, timestamp (from the record itself), level,
      logger and message
    - Player context (player_id, operation) and request context (path, error_code,
      field) are emitted only when a call site supplied them via `extra=`
    - Text format shows player context inline; missing values print as "-"

Design Decisions:
    - Formatters on stdlib logging, configured once from the lifespan
    - TextFormatter fills missing player context itself, so %(player_id)s never
      raises for records logged without extra
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "player-registry"
PLAYER_FIELDS = ("player_id", "operation")
REQUEST_FIELDS = ("path", "error_code", "field")

TEXT_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s "
    "[player=%(player_id)s op=%(operation)s]: %(message)s"
)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log = {
            "service": SERVICE_NAME,
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in PLAYER_FIELDS + REQUEST_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        for key in PLAYER_FIELDS:
            if getattr(record, key, None) is None:
                setattr(record, key, "-")
        return super().format(record)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter(TEXT_FORMAT))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
