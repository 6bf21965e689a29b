"""Utility functions for b3prop."""

from b3prop.utils.helpers import (
    format_id,
    join_id,
    parse_id,
    split_id,
)

__all__ = [
    "format_id",
    "parse_id",
    "split_id",
    "join_id",
]
