"""Logging and OpenTelemetry helpers for trace query construction."""

import json
import logging
import os
import sys

from opentelemetry import metrics, trace

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_meter(name: str) -> metrics.Meter:
    """Returns a meter for the given module name."""
    return metrics.get_meter(name)


class _StructuredJsonFormatter(logging.Formatter):
    """JSON log formatter with OTel trace correlation."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": self.formatTime(record, self.datefmt),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "func": record.funcName,
        }

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_obj["trace_id"] = format(span_context.trace_id, "032x")
            log_obj["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


def configure_logging(level: int = logging.INFO) -> None:
    """Configures root logging for applications embedding trace_query.

    Args:
        level: The logging level to use (default: INFO). Overridden by the
            LOG_LEVEL environment variable when it names a valid level.
    """
    env_level = os.environ.get("LOG_LEVEL", "").upper()
    if env_level in _LOG_LEVELS:
        level = getattr(logging, env_level)

    log_format = os.environ.get("LOG_FORMAT", "TEXT").upper()

    if log_format == "JSON":
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_StructuredJsonFormatter())
        logging.getLogger().handlers = [handler]
        logging.getLogger().setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            force=True,
        )
