"""Trace context data model."""

from b3prop.tracer.span_context import Identifier, SpanContext

__all__ = [
    "Identifier",
    "SpanContext",
]
