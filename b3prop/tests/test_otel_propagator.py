"""Tests for the OpenTelemetry propagator bridge."""

from opentelemetry import baggage
from opentelemetry.context import Context
from opentelemetry.trace import (
    NonRecordingSpan,
    SpanContext as OTelSpanContext,
    TraceFlags,
    get_current_span,
    set_span_in_context,
)

from b3prop.config import PropagationConfig
from b3prop.context.otel import B3Propagator


TRACE_ID = 0x463AC35C9F6413AD48485A3953BB6124
SPAN_ID = 0xA2FB4A1D1A96D312


def _otel_context(sampled=True, baggage_items=None):
    span_context = OTelSpanContext(
        trace_id=TRACE_ID,
        span_id=SPAN_ID,
        is_remote=False,
        trace_flags=TraceFlags(TraceFlags.SAMPLED if sampled else TraceFlags.DEFAULT),
    )
    ctx = set_span_in_context(NonRecordingSpan(span_context))
    for key, value in (baggage_items or {}).items():
        ctx = baggage.set_baggage(key, value, context=ctx)
    return ctx


class TestExtract:
    def test_extracts_remote_span(self):
        carrier = {
            "x-b3-traceid": "463ac35c9f6413ad48485a3953bb6124",
            "x-b3-spanid": "a2fb4a1d1a96d312",
            "x-b3-sampled": "1",
        }
        ctx = B3Propagator().extract(carrier)
        span_context = get_current_span(ctx).get_span_context()
        assert span_context.trace_id == TRACE_ID
        assert span_context.span_id == SPAN_ID
        assert span_context.is_remote
        assert span_context.trace_flags.sampled

    def test_extracts_baggage(self):
        carrier = {
            "X-B3-TraceId": "a",
            "X-B3-SpanId": "b",
            "baggage-user": "alice",
        }
        ctx = B3Propagator().extract(carrier)
        assert baggage.get_baggage("user", context=ctx) == "alice"

    def test_missing_ids_returns_given_context(self):
        parent = Context()
        assert B3Propagator().extract({"X-B3-SpanId": "b"}, context=parent) is parent

    def test_malformed_id_leaves_no_span(self):
        ctx = B3Propagator().extract({"X-B3-TraceId": "nope", "X-B3-SpanId": "b"})
        assert not get_current_span(ctx).get_span_context().is_valid


class TestInject:
    def test_injects_current_span(self):
        carrier = {}
        B3Propagator().inject(carrier, context=_otel_context(sampled=False))
        assert carrier == {
            "X-B3-TraceId": "463ac35c9f6413ad48485a3953bb6124",
            "X-B3-SpanId": "a2fb4a1d1a96d312",
            "X-B3-Sampled": "0",
        }

    def test_injects_baggage(self):
        carrier = {}
        propagator = B3Propagator(PropagationConfig(baggage_prefix="ctx-"))
        propagator.inject(carrier, context=_otel_context(baggage_items={"user": "alice"}))
        assert carrier["ctx-user"] == "alice"
        assert carrier["X-B3-Sampled"] == "1"

    def test_no_span_injects_nothing(self):
        carrier = {}
        B3Propagator().inject(carrier, context=Context())
        assert carrier == {}

    def test_round_trip(self):
        propagator = B3Propagator()
        carrier = {}
        propagator.inject(carrier, context=_otel_context(baggage_items={"user": "alice"}))
        ctx = propagator.extract(carrier)
        span_context = get_current_span(ctx).get_span_context()
        assert span_context.trace_id == TRACE_ID
        assert span_context.span_id == SPAN_ID
        assert baggage.get_baggage("user", context=ctx) == "alice"

    def test_fields(self):
        assert B3Propagator().fields == {"X-B3-TraceId", "X-B3-SpanId", "X-B3-Sampled"}
