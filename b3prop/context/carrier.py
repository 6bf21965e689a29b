"""Read and write access to propagation carriers.

A carrier is either a mapping of header names to values or a sequence of
(key, value) pairs, which may repeat keys.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Iterator, Tuple


def iter_entries(carrier: Any) -> Iterator[Tuple[str, str]]:
    """Yield every (key, value) pair held by the carrier."""
    if isinstance(carrier, Mapping):
        yield from carrier.items()
    else:
        for key, value in carrier:
            yield key, value


def put_entry(carrier: Any, key: str, value: str) -> None:
    """Append an entry to a pair list, or assign it into a mapping."""
    if hasattr(carrier, "append"):
        carrier.append((key, value))
    elif isinstance(carrier, MutableMapping):
        carrier[key] = value
    else:
        raise TypeError(f"Unsupported carrier type: {type(carrier).__name__}")
