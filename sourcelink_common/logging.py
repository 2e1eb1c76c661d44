"""JSON logging for the GitHub App auth core."""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional

from opentelemetry import trace
from pythonjsonlogger import jsonlogger

from .config import get_settings

_NOISY_LOGGERS = ("httpx", "httpcore")


class OTelJSONFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter that adds the active trace/span ids, so a failed token
    exchange can be matched with the request that triggered it.
    """

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        ctx = trace.get_current_span().get_span_context()
        if ctx.is_valid:
            log_record["trace_id"] = trace.format_trace_id(ctx.trace_id)
            log_record["span_id"] = trace.format_span_id(ctx.span_id)

        log_record["level"] = str(log_record.get("level") or record.levelname).upper()


def build_formatter() -> OTelJSONFormatter:
    return OTelJSONFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level"},
    )


def setup_logging(level: Optional[str] = None, stream: Any = None) -> logging.Handler:
    """
    Route the root logger to a single JSON handler.

    ``level`` defaults to ``GITHUB_LOG_LEVEL`` from the settings.
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(build_formatter())

    root_logger = logging.getLogger()
    root_logger.setLevel((level or get_settings().log_level).upper())

    # Remove existing handlers to avoid duplicate logs when reconfiguring
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler
