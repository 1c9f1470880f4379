"""
delimit: streaming delimiter-region replacement for byte streams

Finds every region bounded by one of a set of (start, end) delimiter pairs
and replaces the captured value, in a single pass over an arbitrarily large
input. Flat matching only: regions do not nest. Zero runtime dependencies.

Quick Start:
    >>> from delimit import replace_all
    >>> replace_all(b"Hello [name]!", [(b"[", b"]")], b"World")
    b'Hello World!'

    >>> # Stream a file through a custom transform
    >>> from delimit import Delimiter, RegionReplacer
    >>> with open("in.js", "rb") as src, open("out.js", "wb") as dst:
    ...     engine = RegionReplacer(src, [Delimiter.from_text('require("', '")')])
    ...     engine.replace_filter_with(
    ...         lambda chunk, at_end: dst.write(chunk),
    ...         lambda value: value.replace(b"~/", b"./", 1),
    ...         preserve_delimiters=True,
    ...     )

Installation:
    pip install delimit
"""

from collections.abc import Iterable

from delimit.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from delimit.delimiters import Delimiter, Match
from delimit.engine import RegionReplacer
from delimit.errors import ConfigError, DelimitError, EngineStateError, WindowOverflowError
from delimit.locator import Cut, CutKind, RegionLocator
from delimit.modes import EngineState, RegionState
from delimit.protocols import ByteReader, KeepFunc, Sink, TransformFunc

__version__ = "0.1.0"


def replace_all(
    source: bytes,
    delimiters: Iterable[Delimiter | tuple[bytes, bytes]],
    replacement: bytes,
    *,
    preserve_delimiters: bool = False,
    config: ScanConfig | None = None,
) -> bytes:
    """Replace every delimited value in an in-memory buffer.

    Args:
        source: Input bytes
        delimiters: Pairs to match
        replacement: Bytes substituted for every captured value
        preserve_delimiters: Keep the start/end markers in the output
        config: Optional scan configuration

    Returns:
        The transformed bytes

    Example:
        >>> replace_all(b"a (b) c", [(b"(", b")")], b"X", preserve_delimiters=True)
        b'a (X) c'
    """
    parts: list[bytes] = []
    engine = RegionReplacer.from_bytes(source, delimiters, config=config)
    engine.replace(
        replacement,
        lambda chunk, at_end: parts.append(chunk),
        preserve_delimiters=preserve_delimiters,
    )
    return b"".join(parts)


def transform_all(
    source: bytes,
    delimiters: Iterable[Delimiter | tuple[bytes, bytes]],
    transform: TransformFunc,
    *,
    preserve_delimiters: bool = False,
    config: ScanConfig | None = None,
) -> bytes:
    """Substitute every delimited value with transform(value).

    Example:
        >>> transform_all(b"<a> <b>", [(b"<", b">")], bytes.upper)
        b'A B'
    """
    engine = RegionReplacer.from_bytes(source, delimiters, config=config)
    return b"".join(
        chunk for chunk, _ in engine.iter_chunks(transform, preserve_delimiters=preserve_delimiters)
    )


__all__ = [
    # Engine
    "RegionReplacer",
    "RegionLocator",
    "Cut",
    "CutKind",
    "EngineState",
    "RegionState",
    # Data
    "Delimiter",
    "Match",
    # Callback contracts
    "ByteReader",
    "KeepFunc",
    "Sink",
    "TransformFunc",
    # Configuration
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
    # Errors
    "DelimitError",
    "ConfigError",
    "EngineStateError",
    "WindowOverflowError",
    # Convenience
    "replace_all",
    "transform_all",
    "__version__",
]
