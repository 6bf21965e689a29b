"""Hex codec for 128-bit trace and span identifiers."""

from __future__ import annotations

import re

from b3prop.errors import MalformedIdentifierError
from b3prop.tracer.span_context import MASK_64, Identifier, join_id, split_id

# Width of the low half in hex digits
_LOW_HEX_LENGTH = 16

_HEX_RE = re.compile(r"[0-9a-fA-F]+")

__all__ = ["MASK_64", "split_id", "join_id", "format_id", "parse_id"]


def format_id(identifier: Identifier) -> str:
    """
    Format an identifier as lowercase hex with leading zeros stripped.

    An id whose high half is zero comes out at 16 characters or fewer,
    which is what 64-bit-only peers expect.
    """
    return format(join_id(identifier.high, identifier.low), "x")


def parse_id(hex_string: str) -> Identifier:
    """
    Parse a hex trace/span id into an Identifier.

    The last 16 characters are the low half. Anything before them is the
    high half, truncated to 64 bits.

    Raises:
        MalformedIdentifierError: if the text is empty or not hexadecimal
    """
    if not isinstance(hex_string, str) or not _HEX_RE.fullmatch(hex_string):
        raise MalformedIdentifierError(
            "identifier is not a hexadecimal string", details={"value": hex_string}
        )

    low = int(hex_string[-_LOW_HEX_LENGTH:], 16)
    high = 0
    if len(hex_string) > _LOW_HEX_LENGTH:
        high = int(hex_string[:-_LOW_HEX_LENGTH], 16) & MASK_64
    return Identifier(high=high, low=low)
