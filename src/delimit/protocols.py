"""Protocols and callback types for delimit.

Defines the contracts at the engine's boundaries: the byte source it pulls
from, the sink it pushes chunks to, and the per-region decision callbacks.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class ByteReader(Protocol):
    """Blocking, sequential byte source.

    Any binary file object satisfies this (``open(path, "rb")``,
    ``io.BytesIO``, ``sys.stdin.buffer``, socket files).

    """

    def read(self, size: int = -1, /) -> bytes:
        """Return up to size bytes; an empty result means end of input."""
        ...


# Receives each output chunk in stream order; at_end is True exactly once, last.
Sink = Callable[[bytes, bool], None]

# Decides whether a captured value gets the fixed replacement.
KeepFunc = Callable[[bytes], bool]

# Returns the exact bytes to substitute for a captured value.
TransformFunc = Callable[[bytes], bytes]

__all__ = ["ByteReader", "KeepFunc", "Sink", "TransformFunc"]
