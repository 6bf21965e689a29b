"""Context propagation for the B3 multi-header format."""

from b3prop.context.carrier import iter_entries, put_entry
from b3prop.context.propagators import (
    FLAGS_KEY,
    PARENT_SPAN_ID_KEY,
    SAMPLED_KEY,
    SPAN_ID_KEY,
    TRACE_ID_KEY,
    B3TextMapPropagator,
    extract,
    inject,
)
from b3prop.context.otel import B3Propagator

__all__ = [
    "B3TextMapPropagator",
    "B3Propagator",
    "extract",
    "inject",
    "iter_entries",
    "put_entry",
    "TRACE_ID_KEY",
    "SPAN_ID_KEY",
    "PARENT_SPAN_ID_KEY",
    "SAMPLED_KEY",
    "FLAGS_KEY",
]
