"""JSON logging and optional OpenTelemetry tracing for harmonic field pods.

Every record is one JSON object on stdout. Fields passed through `extra=`
are copied into the object, so pods can log structured context:

    logger.info("Drill answered", extra={"drill": "ear", "feedback": "wrong"})
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional

from .config import get_settings

try:
    # Optional OTEL tracing
    from opentelemetry import trace
    from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor
except ImportError:  # pragma: no cover - OTEL is optional
    trace = None  # type: ignore

# Attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def _trace_context() -> Dict[str, str]:
    """Ids of the active span, empty without OpenTelemetry or a recording span."""
    if trace is None:
        return {}
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return {}
    return {"trace_id": format(ctx.trace_id, "032x"), "span_id": format(ctx.span_id, "016x")}


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON."""

    def __init__(self, service: Optional[str] = None, env: Optional[str] = None):
        super().__init__()
        self.service = service
        self.env = env

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if self.service:
            payload["service"] = self.service
        if self.env:
            payload["env"] = self.env

        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        payload.update(_trace_context())
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: Optional[str] = None, service: Optional[str] = None) -> None:
    """Route the root logger to stdout as JSON at the configured level."""
    s = get_settings()
    log_level = (level or s.HF_LOG_LEVEL).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(service=service, env=s.HF_ENV))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level, logging.INFO))


def setup_tracing(service_name: str = "harmony-pod") -> bool:
    """Install an OTLP tracer provider when HF_OTEL_ENDPOINT is set.

    Returns:
        True if a tracer provider was installed
    """
    s = get_settings()
    if not s.HF_OTEL_ENDPOINT or not trace:
        return False

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=s.HF_OTEL_ENDPOINT)))
    trace.set_tracer_provider(provider)
    return True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["setup_logging", "setup_tracing", "get_logger", "JsonFormatter"]
