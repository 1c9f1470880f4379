"""Engine states.

An engine run moves through a small finite state machine:
- SCANNING: asking the locator for the next cut
- MATCH_PENDING: a match was found and its value is being classified
- DRAINING: no further regions; the tail is being emitted
- DONE: the final chunk was delivered, or the run was aborted

Separately, RegionState tracks whether the end marker of the last match is
still owed to the next chunk.
"""

from __future__ import annotations

from enum import Enum, auto


class EngineState(Enum):
    """Lifecycle of a single engine run."""

    SCANNING = auto()
    MATCH_PENDING = auto()
    DRAINING = auto()
    DONE = auto()


class RegionState(Enum):
    """Delimiter bookkeeping between chunks."""

    OUTSIDE = auto()  # No end marker owed
    INSIDE = auto()  # Last match's end marker opens the next chunk
