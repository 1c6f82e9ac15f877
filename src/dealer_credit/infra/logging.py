"""Structured JSON logging.

Log calls across the service attach their data through ``extra={...}``;
the JSON formatter turns those extras into top-level keys.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger.json import JsonFormatter


SERVICE_NAME = "dealer-credit"


class ServiceJsonFormatter(JsonFormatter):
    """JSON formatter adding timestamp, level and service name to each record."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


def configure_logging(level: str = "INFO") -> None:
    """Install a single JSON stdout handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ServiceJsonFormatter("%(name)s %(message)s"))
    root.addHandler(handler)
