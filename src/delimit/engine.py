"""Streaming region replacement engine.

Drives a RegionLocator across a window pulled from a blocking reader,
classifies each captured value through a caller policy, and pushes output
chunks to a sink in stream order.

Chunk layout:
    Each matched region produces one chunk:

        [end marker of previous region] + literal + [start marker] + substitute

    The end marker of a region is owed to the head of the following chunk.
    The last chunk carries any owed end marker plus the literal tail and is
    delivered with at_end=True. Markers in brackets are only present when
    delimiters are preserved.

Thread Safety:
RegionReplacer instances are single-use. Create one per stream.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

import io
from collections.abc import Iterable, Iterator
from contextlib import closing

from delimit.config import ScanConfig, get_scan_config
from delimit.delimiters import Delimiter, coerce_delimiters
from delimit.errors import EngineStateError, WindowOverflowError
from delimit.locator import CutKind, RegionLocator
from delimit.modes import EngineState, RegionState
from delimit.protocols import ByteReader, KeepFunc, Sink, TransformFunc
from delimit.utils.logger import get_logger

logger = get_logger(__name__)

_BYTES_LIKE = (bytes, bytearray, memoryview)


class RegionReplacer:
    """Replaces every delimited region of a byte stream in a single pass.

    Usage:
        >>> import io
        >>> engine = RegionReplacer(io.BytesIO(b"a [b] c"), [Delimiter(b"[", b"]")])
        >>> out = []
        >>> engine.replace(b"X", lambda chunk, at_end: out.append(chunk))
        >>> b"".join(out)
        b'a X c'

    Three policies are provided:
        replace: every value becomes the fixed replacement
        replace_filter: keep(value) picks the replacement or the original value
        replace_filter_with: transform(value) returns the substitute bytes

    Thread Safety:
        Instances are single-use and must not be shared between threads.

    """

    __slots__ = (
        "_reader",
        "_delimiters",
        "_locator",
        "_config",
        "_state",
        "_region",
        "_open",  # Delimiter whose end marker is owed to the next chunk
        "_offset",  # Absolute stream offset of the window start
        "_started",
    )

    def __init__(
        self,
        reader: ByteReader,
        delimiters: Iterable[Delimiter | tuple[bytes, bytes]],
        *,
        config: ScanConfig | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            reader: Blocking byte source; an empty read means end of input
            delimiters: Pairs to match, in priority order for equal positions
            config: Scan configuration (uses the context's config if None)
        """
        self._reader = reader
        self._delimiters = coerce_delimiters(delimiters)
        self._locator = RegionLocator(self._delimiters)
        self._config = config if config is not None else get_scan_config()
        self._state = EngineState.SCANNING
        self._region = RegionState.OUTSIDE
        self._open: Delimiter | None = None
        self._offset = 0
        self._started = False

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        delimiters: Iterable[Delimiter | tuple[bytes, bytes]],
        *,
        config: ScanConfig | None = None,
    ) -> RegionReplacer:
        """Create an engine reading from an in-memory buffer."""
        return cls(io.BytesIO(data), delimiters, config=config)

    @property
    def delimiters(self) -> tuple[Delimiter, ...]:
        """Configured pairs, including inert ones."""
        return self._delimiters

    @property
    def state(self) -> EngineState:
        """Current engine state."""
        return self._state

    @property
    def region_state(self) -> RegionState:
        """Whether an end marker is owed to the next chunk."""
        return self._region

    # =========================================================================
    # Public policies
    # =========================================================================

    def replace(
        self,
        replacement: bytes,
        sink: Sink,
        *,
        preserve_delimiters: bool = False,
    ) -> None:
        """Replace every captured value with replacement."""
        self._replace_filter_func(sink, _keep_all, preserve_delimiters, False, replacement)

    def replace_filter(
        self,
        replacement: bytes,
        sink: Sink,
        keep: KeepFunc,
        preserve_delimiters: bool = False,
    ) -> None:
        """Replace captured values for which keep(value) is true.

        Values rejected by keep are emitted unchanged.
        """
        self._replace_filter_func(sink, keep, preserve_delimiters, False, replacement)

    def replace_filter_with(
        self,
        sink: Sink,
        transform: TransformFunc,
        preserve_delimiters: bool = False,
    ) -> None:
        """Substitute each captured value with transform(value)."""
        self._replace_filter_func(sink, transform, preserve_delimiters, True, b"")

    def iter_chunks(
        self,
        transform: TransformFunc,
        *,
        preserve_delimiters: bool = False,
    ) -> Iterator[tuple[bytes, bool]]:
        """Yield ``(chunk, at_end)`` pairs instead of calling a sink.

        Stopping iteration early abandons the run; the engine ends up DONE
        once the generator is closed.
        """
        self._begin()
        return self._scan(transform, preserve_delimiters)

    # =========================================================================
    # Core
    # =========================================================================

    def _replace_filter_func(
        self,
        sink: Sink,
        decide: KeepFunc | TransformFunc,
        preserve_delimiters: bool,
        use_transform: bool,
        replacement: bytes,
    ) -> None:
        """Shared driver behind all three policies.

        With use_transform, decide returns the substitute bytes directly.
        Otherwise it is a predicate choosing between replacement and the
        original value.
        """
        self._begin()
        if use_transform:
            resolve = decide
        else:
            fixed = bytes(replacement)

            def resolve(value: bytes) -> bytes:
                return fixed if decide(value) else value

        with closing(self._scan(resolve, preserve_delimiters)) as chunks:
            for chunk, at_end in chunks:
                sink(chunk, at_end)

    def _begin(self) -> None:
        if self._started:
            raise EngineStateError(
                f"RegionReplacer is single-use (state: {self._state.name})"
            )
        self._started = True

    def _scan(
        self,
        resolve: TransformFunc,
        preserve_delimiters: bool,
    ) -> Iterator[tuple[bytes, bool]]:
        """Run the scan loop, yielding output chunks in stream order."""
        window = bytearray()
        at_eof = False
        try:
            while True:
                cut = self._locator.locate(window, at_eof)

                if cut.kind is CutKind.NEED_MORE:
                    at_eof = self._fill(window)
                    continue

                owed = self._take_owed(preserve_delimiters)

                if cut.kind is CutKind.MATCH:
                    match = cut.match
                    self._state = EngineState.MATCH_PENDING
                    substitute = resolve(match.value)
                    if not isinstance(substitute, _BYTES_LIKE):
                        raise TypeError(
                            f"transform must return bytes, got {type(substitute).__name__}"
                        )
                    delimiter = match.delimiter
                    logger.debug(
                        "Matched %r...%r region at offset %d",
                        delimiter.start,
                        delimiter.end,
                        self._offset + match.region_start,
                    )

                    parts = [owed, cut.literal]
                    if preserve_delimiters:
                        parts.append(delimiter.start)
                    parts.append(bytes(substitute))

                    self._open = delimiter
                    self._region = RegionState.INSIDE
                    del window[: cut.advance]
                    self._offset += cut.advance
                    self._state = EngineState.SCANNING
                    yield b"".join(parts), False
                    continue

                # DRAIN or EMPTY: whatever is left is the literal tail
                self._state = EngineState.DRAINING
                logger.debug(
                    "Draining %d tail bytes at offset %d", len(cut.literal), self._offset
                )
                self._offset += cut.advance
                yield owed + cut.literal, True
                return
        finally:
            self._state = EngineState.DONE

    def _take_owed(self, preserve_delimiters: bool) -> bytes:
        """Close the open region, returning its end marker if it is kept."""
        if self._region is RegionState.OUTSIDE:
            return b""
        delimiter = self._open
        self._region = RegionState.OUTSIDE
        self._open = None
        if preserve_delimiters and delimiter is not None:
            return delimiter.end
        return b""

    def _fill(self, window: bytearray) -> bool:
        """Append the next read to window.

        Returns:
            True when the reader is exhausted.

        Raises:
            WindowOverflowError: If max_window would be exceeded.
        """
        max_window = self._config.max_window
        size = self._config.read_size
        if max_window is not None:
            # At the limit, read one more byte to tell EOF from overflow
            size = min(size, max(max_window - len(window), 1))

        data = self._reader.read(size)
        if not data:
            logger.debug("Reader exhausted at offset %d", self._offset + len(window))
            return True

        if max_window is not None and len(window) + len(data) > max_window:
            raise WindowOverflowError(len(window) + len(data), max_window)
        window += data
        return False


def _keep_all(value: bytes) -> bool:
    return True
