"""Immutable trace metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

from b3prop.errors import ValidationError

MASK_64 = (1 << 64) - 1


def split_id(value: int) -> Tuple[int, int]:
    """
    Split an unsigned 128-bit integer into its (high, low) 64-bit halves.

    Bits above 128 are dropped.
    """
    return (value >> 64) & MASK_64, value & MASK_64


def join_id(high: int, low: int) -> int:
    """Combine (high, low) 64-bit halves into one unsigned integer."""
    return ((high & MASK_64) << 64) | (low & MASK_64)


@dataclass(frozen=True)
class Identifier:
    """A 128-bit trace or span id held as two unsigned 64-bit halves."""

    high: int = 0
    low: int = 0

    def __post_init__(self) -> None:
        for name in ("high", "low"):
            value = getattr(self, name)
            if not 0 <= value <= MASK_64:
                raise ValidationError(
                    f"{name} must be an unsigned 64-bit integer", details={name: value}
                )

    @classmethod
    def from_int(cls, value: int) -> "Identifier":
        if value < 0 or value >> 128:
            raise ValidationError(
                "identifier must fit in 128 unsigned bits", details={"value": value}
            )
        high, low = split_id(value)
        return cls(high=high, low=low)

    def __int__(self) -> int:
        return join_id(self.high, self.low)


@dataclass(frozen=True)
class SpanContext:
    trace_id: Identifier
    span_id: Identifier
    sampled: bool = False
    # Read-only copy; an empty map is stored as None
    baggage: Optional[Mapping[str, str]] = field(default=None, hash=False)

    def __post_init__(self) -> None:
        if self.trace_id is None or self.span_id is None:
            raise ValidationError(
                "SpanContext requires both trace_id and span_id",
                details={"trace_id": self.trace_id, "span_id": self.span_id},
            )
        baggage = MappingProxyType(dict(self.baggage)) if self.baggage else None
        object.__setattr__(self, "baggage", baggage)

    def baggage_items(self) -> Iterator[Tuple[str, str]]:
        return iter((self.baggage or {}).items())

    def get_baggage_item(self, key: str) -> Optional[str]:
        return (self.baggage or {}).get(key)
