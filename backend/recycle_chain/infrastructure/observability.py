"""Structured Logging — JSON lines for the ledger's audit-relevant log records.

Invariants:
    - Every record carries timestamp (of the record, UTC), level, logger, message
    - Ledger fields passed via `extra=` (LEDGER_FIELDS) are lifted to top-level keys
    - setup_logging is idempotent: calling it twice never duplicates output

Design Decisions:
    - stdlib logging + JSONFormatter, no third-party logging lib
    - Text format for local runs and tests (LOG_FORMAT=text)
"""

import json
import logging
from datetime import datetime, timezone

# Keys the ledger attaches with logger.x(..., extra={...})
LEDGER_FIELDS = (
    "operation", "sequence", "actor", "error_code",
    "product_id", "item_count", "path",
)

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: getattr(record, key)
            for key in LEDGER_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_recycle_chain", False):
            root.removeHandler(existing)
    handler._recycle_chain = True
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
