"""OpenTelemetry TextMapPropagator backed by B3TextMapPropagator."""

from __future__ import annotations

import typing
from typing import List, Optional, Tuple

from opentelemetry import baggage as baggage_api
from opentelemetry.context import Context
from opentelemetry.propagators.textmap import (
    CarrierT,
    Getter,
    Setter,
    TextMapPropagator,
    default_getter,
    default_setter,
)
from opentelemetry.trace import NonRecordingSpan, get_current_span, set_span_in_context
from opentelemetry.trace import SpanContext as OTelSpanContext, TraceFlags

from b3prop.config import PropagationConfig
from b3prop.context.propagators import (
    SAMPLED_KEY,
    SPAN_ID_KEY,
    TRACE_ID_KEY,
    B3TextMapPropagator,
)
from b3prop.tracer.span_context import Identifier, SpanContext


class B3Propagator(TextMapPropagator):
    """
    Plugs B3 extraction/injection into OpenTelemetry's propagation API.

    Register with ``opentelemetry.propagate.set_global_textmap(B3Propagator())``.
    OTel span ids are 64-bit, so only the low half of a span id is kept.
    """

    def __init__(self, config: Optional[PropagationConfig] = None) -> None:
        self._propagator = B3TextMapPropagator(config)

    def extract(
        self,
        carrier: CarrierT,
        context: Optional[Context] = None,
        getter: Getter = default_getter,
    ) -> Context:
        if context is None:
            context = Context()

        entries: List[Tuple[str, str]] = []
        for key in getter.keys(carrier):
            for value in getter.get(carrier, key) or []:
                entries.append((key, value))

        b3_context = self._propagator.extract(entries)
        if b3_context is None:
            return context

        ctx = set_span_in_context(NonRecordingSpan(_to_otel_context(b3_context)), context)
        for key, value in b3_context.baggage_items():
            ctx = baggage_api.set_baggage(key, value, context=ctx)
        return ctx

    def inject(
        self,
        carrier: CarrierT,
        context: Optional[Context] = None,
        setter: Setter = default_setter,
    ) -> None:
        otel_context = get_current_span(context).get_span_context()
        if not otel_context.is_valid:
            return

        baggage = {k: str(v) for k, v in baggage_api.get_all(context).items()}
        entries: List[Tuple[str, str]] = []
        self._propagator.inject(_from_otel_context(otel_context, baggage), entries)
        for key, value in entries:
            setter.set(carrier, key, value)

    @property
    def fields(self) -> typing.Set[str]:
        return {TRACE_ID_KEY, SPAN_ID_KEY, SAMPLED_KEY}


def _to_otel_context(context: SpanContext) -> OTelSpanContext:
    """Convert a b3prop SpanContext to a remote OTel SpanContext."""
    trace_flags = TraceFlags(TraceFlags.SAMPLED if context.sampled else TraceFlags.DEFAULT)
    return OTelSpanContext(
        trace_id=int(context.trace_id),
        span_id=context.span_id.low,
        is_remote=True,
        trace_flags=trace_flags,
    )


def _from_otel_context(otel_context: OTelSpanContext, baggage: dict) -> SpanContext:
    """Convert an OTel SpanContext (plus baggage) to a b3prop SpanContext."""
    return SpanContext(
        trace_id=Identifier.from_int(otel_context.trace_id),
        span_id=Identifier.from_int(otel_context.span_id),
        sampled=otel_context.trace_flags.sampled,
        baggage=baggage or None,
    )
