"""b3prop: B3 multi-header trace context propagation."""

from b3prop.errors import (
    B3PropError,
    ConfigError,
    MalformedIdentifierError,
    ValidationError,
)
from b3prop.tracer import Identifier, SpanContext
from b3prop.utils import format_id, parse_id
from b3prop.config import B3PropConfig, PropagationConfig, load_config, validate_config
from b3prop.context import B3Propagator, B3TextMapPropagator, extract, inject

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Identifier",
    "SpanContext",
    "format_id",
    "parse_id",
    "B3TextMapPropagator",
    "B3Propagator",
    "extract",
    "inject",
    "PropagationConfig",
    "B3PropConfig",
    "load_config",
    "validate_config",
    "B3PropError",
    "ConfigError",
    "ValidationError",
    "MalformedIdentifierError",
]
