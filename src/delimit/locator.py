"""Region locator: finds the next cut point in a byte window.

The locator is pure: it never mutates the window and keeps no state between
calls. The engine owns the window and advances it after each cut.

Uses bytes.find (C implementation) for every search. No regex.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto

from delimit.delimiters import Delimiter, Match


class CutKind(Enum):
    """Outcome of a single locate call."""

    MATCH = auto()  # Complete region found
    NEED_MORE = auto()  # Window must grow before anything can be decided
    DRAIN = auto()  # Final window with no regions: whole window is literal tail
    EMPTY = auto()  # Final window is empty


@dataclass(frozen=True, slots=True)
class Cut:
    """Where to split the window.

    Attributes:
        kind: Outcome of the locate call
        literal: Bytes to pass through unchanged ahead of the match (MATCH),
            or the whole tail (DRAIN)
        match: The winning region, MATCH only
        advance: Bytes of the window consumed by this cut

    """

    kind: CutKind
    literal: bytes = b""
    match: Match | None = None
    advance: int = 0


_NEED_MORE = Cut(CutKind.NEED_MORE)
_EMPTY = Cut(CutKind.EMPTY)


def _partial_start(window: bytes | bytearray, token: bytes) -> int:
    """Earliest offset where the window ends with a proper prefix of token.

    Returns -1 if no suffix of the window can grow into the token.
    """
    size = len(window)
    for offset in range(max(0, size - len(token) + 1), size):
        if token.startswith(window[offset:]):
            return offset
    return -1


class RegionLocator:
    """Finds the earliest complete region among a set of delimiter pairs.

    Among all pairs whose start and end markers are both present, the one
    whose start marker begins earliest wins; equal positions go to the pair
    configured first.

    A start marker whose end has not arrived yet does not match in this pass
    and does not hold back later complete regions, so output keeps flowing
    past a stray start marker. While more input may arrive, a winner is
    deferred only when the trailing bytes of the window could still grow into
    an earlier start marker.

    Usage:
        >>> locator = RegionLocator([Delimiter(b"(", b")")])
        >>> cut = locator.locate(b"a (b) c", at_eof=True)
        >>> cut.kind, cut.literal, cut.match.value, cut.advance
        (<CutKind.MATCH: 1>, b'a ', b'b', 5)

    """

    __slots__ = ("_delimiters",)

    def __init__(self, delimiters: Sequence[Delimiter]) -> None:
        self._delimiters = tuple(d for d in delimiters if d.is_active)

    @property
    def delimiters(self) -> tuple[Delimiter, ...]:
        """Active pairs, in priority order."""
        return self._delimiters

    def locate(self, window: bytes | bytearray, at_eof: bool) -> Cut:
        """Find the next cut in window.

        Args:
            window: Unconsumed input bytes
            at_eof: True when no more input will arrive

        Returns:
            Cut describing the match, or what the caller must do next.
        """
        if not window:
            return _EMPTY if at_eof else _NEED_MORE

        best: Match | None = None
        best_key = (len(window), len(self._delimiters))
        # Earliest position where a start marker split by the read boundary may begin
        blocked_key: tuple[int, int] | None = None

        for index, delimiter in enumerate(self._delimiters):
            begin = window.find(delimiter.start)
            if begin < 0:
                if not at_eof:
                    partial = _partial_start(window, delimiter.start)
                    if partial >= 0 and (blocked_key is None or (partial, index) < blocked_key):
                        blocked_key = (partial, index)
                continue

            value_start = begin + len(delimiter.start)
            value_end = window.find(delimiter.end, value_start)
            if value_end < 0:
                # Still open: later complete regions are not held back
                continue

            if (begin, index) < best_key:
                best_key = (begin, index)
                best = Match(
                    delimiter=delimiter,
                    value=bytes(window[value_start:value_end]),
                    start_offset=value_start,
                    end_offset=value_end,
                )

        if best is not None and (blocked_key is None or best_key < blocked_key):
            return Cut(
                CutKind.MATCH,
                literal=bytes(window[: best.region_start]),
                match=best,
                advance=best.region_end,
            )

        if at_eof:
            return Cut(CutKind.DRAIN, literal=bytes(window), advance=len(window))

        return _NEED_MORE
