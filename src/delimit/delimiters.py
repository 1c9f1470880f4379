"""Delimiter pairs and region matches.

Thread Safety:
Both types are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

_BYTES_LIKE = (bytes, bytearray, memoryview)


@dataclass(frozen=True, slots=True)
class Delimiter:
    """A (start, end) byte marker pair bounding a replaceable region.

    A pair with an empty start or end is inert: it never matches.

    Examples:
        >>> Delimiter(b"{{", b"}}").is_active
        True
        >>> Delimiter(b"", b"}}").is_active
        False
        >>> Delimiter.from_text("require(\\"", "\\")")
        Delimiter(start=b'require("', end=b'")')

    """

    start: bytes
    end: bytes

    @property
    def is_active(self) -> bool:
        """True when both markers are non-empty."""
        return bool(self.start) and bool(self.end)

    @classmethod
    def from_text(cls, start: str, end: str, encoding: str = "utf-8") -> Delimiter:
        """Build a pair from text markers."""
        return cls(start.encode(encoding), end.encode(encoding))


@dataclass(frozen=True, slots=True)
class Match:
    """A complete region found in the current window.

    Offsets are window-relative and bound the captured value, so
    ``window[start_offset:end_offset] == value``.

    Attributes:
        delimiter: The winning pair
        value: Bytes strictly between the start and end markers
        start_offset: Offset just past the start marker
        end_offset: Offset of the end marker

    """

    delimiter: Delimiter
    value: bytes
    start_offset: int
    end_offset: int

    @property
    def region_start(self) -> int:
        """Offset of the first byte of the start marker."""
        return self.start_offset - len(self.delimiter.start)

    @property
    def region_end(self) -> int:
        """Offset just past the end marker."""
        return self.end_offset + len(self.delimiter.end)


def coerce_delimiters(
    delimiters: Iterable[Delimiter | tuple[bytes, bytes]],
) -> tuple[Delimiter, ...]:
    """Normalize a delimiter collection into an immutable tuple.

    Accepts Delimiter instances or plain ``(start, end)`` byte tuples.

    Raises:
        TypeError: If an entry is neither.
    """
    result: list[Delimiter] = []
    for item in delimiters:
        if isinstance(item, Delimiter):
            result.append(item)
        elif isinstance(item, tuple) and len(item) == 2 and all(
            isinstance(part, _BYTES_LIKE) for part in item
        ):
            result.append(Delimiter(bytes(item[0]), bytes(item[1])))
        else:
            raise TypeError(f"Expected Delimiter or (start, end) tuple, got {item!r}")
    return tuple(result)
