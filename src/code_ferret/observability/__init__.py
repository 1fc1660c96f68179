"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from code_ferret.observability.context import bind_directory, get_trace_context, set_trace_context
from code_ferret.observability.logging import JsonFormatter, configure_logging
from code_ferret.observability.metrics import (
    INDEXED_FILES,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    track_latency,
)
from code_ferret.observability.tracing import configure_trace_exporter, create_span, get_tracer, init_tracing


__all__ = [
    "INDEXED_FILES",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "JsonFormatter",
    "bind_directory",
    "configure_logging",
    "configure_trace_exporter",
    "create_span",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "set_trace_context",
    "track_latency",
]
