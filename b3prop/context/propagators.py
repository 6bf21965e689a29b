"""B3 multi-header trace context propagation."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from b3prop.config import PropagationConfig
from b3prop.context.carrier import iter_entries, put_entry
from b3prop.errors import MalformedIdentifierError
from b3prop.tracer.span_context import SpanContext
from b3prop.utils.helpers import format_id, parse_id

logger = logging.getLogger(__name__)

TRACE_ID_KEY = "X-B3-TraceId"
SPAN_ID_KEY = "X-B3-SpanId"
PARENT_SPAN_ID_KEY = "X-B3-ParentSpanId"
SAMPLED_KEY = "X-B3-Sampled"
FLAGS_KEY = "X-B3-Flags"

_TRACE_ID = TRACE_ID_KEY.lower()
_SPAN_ID = SPAN_ID_KEY.lower()
_PARENT_SPAN_ID = PARENT_SPAN_ID_KEY.lower()
_SAMPLED = SAMPLED_KEY.lower()
_FLAGS = FLAGS_KEY.lower()


class B3TextMapPropagator:
    """
    Extracts and injects SpanContexts using X-B3-* carrier keys.

    Header names are matched case-insensitively on read and written with
    their canonical casing. Baggage travels as ``<prefix><key>`` entries;
    the prefix match is case-sensitive.
    """

    def __init__(self, config: Optional[PropagationConfig] = None) -> None:
        self._config = config or PropagationConfig()

    @property
    def baggage_prefix(self) -> str:
        return self._config.baggage_prefix

    def extract(self, carrier: Any) -> Optional[SpanContext]:
        """
        Build a SpanContext from the carrier.

        Returns None when the trace id or span id is missing, or when either
        one is not valid hex.
        """
        prefix = self._config.baggage_prefix
        trace_id = None
        span_id = None
        sampled = False
        baggage: Optional[Dict[str, str]] = None

        for key, value in iter_entries(carrier):
            name = key.lower()
            try:
                if name == _SAMPLED:
                    if value == "1" or value.lower() == "true":
                        sampled = True
                elif name == _TRACE_ID:
                    trace_id = parse_id(value)
                elif name == _SPAN_ID:
                    span_id = parse_id(value)
                elif name == _FLAGS:
                    # Debug forces sampling on, "0" never clears it
                    if value == "1":
                        sampled = True
                elif name == _PARENT_SPAN_ID:
                    continue
                elif key.startswith(prefix):
                    if baggage is None:
                        baggage = {}
                    baggage[key[len(prefix):]] = value
            except MalformedIdentifierError as e:
                logger.debug("Discarding B3 context, malformed %s: %s", key, e)
                return None

        if trace_id is None or span_id is None:
            return None
        return SpanContext(trace_id=trace_id, span_id=span_id, sampled=sampled, baggage=baggage)

    def inject(self, context: SpanContext, carrier: Any) -> None:
        """
        Write the context's ids, sampling flag and baggage into the carrier.

        Existing entries are left alone. Flags and parent span id are never
        written.
        """
        put_entry(carrier, TRACE_ID_KEY, format_id(context.trace_id))
        put_entry(carrier, SPAN_ID_KEY, format_id(context.span_id))
        put_entry(carrier, SAMPLED_KEY, "1" if context.sampled else "0")
        for key, value in context.baggage_items():
            put_entry(carrier, self._config.baggage_prefix + key, value)


_default_propagator = B3TextMapPropagator()


def extract(carrier: Any) -> Optional[SpanContext]:
    """Extract a SpanContext using the default baggage prefix."""
    return _default_propagator.extract(carrier)


def inject(context: SpanContext, carrier: Any) -> None:
    """Inject a SpanContext using the default baggage prefix."""
    _default_propagator.inject(context, carrier)
