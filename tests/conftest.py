"""Shared fixtures for delimit tests."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterable

import pytest


class Recorder:
    """Sink that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[bytes, bool]] = []

    def __call__(self, chunk: bytes, at_end: bool) -> None:
        self.calls.append((chunk, at_end))

    @property
    def output(self) -> bytes:
        return b"".join(chunk for chunk, _ in self.calls)


class ChunkedReader:
    """Reader that hands out fixed pieces regardless of the requested size."""

    def __init__(self, pieces: Iterable[bytes]) -> None:
        self._pieces = list(pieces)

    def read(self, size: int = -1, /) -> bytes:
        if not self._pieces:
            return b""
        return self._pieces.pop(0)


class TrackingReader:
    """In-memory reader that exposes how many bytes have been handed out."""

    def __init__(self, data: bytes) -> None:
        self._stream = io.BytesIO(data)
        self.size = len(data)

    @property
    def position(self) -> int:
        return self._stream.tell()

    def read(self, size: int = -1, /) -> bytes:
        return self._stream.read(size)


@pytest.fixture
def recorder() -> Recorder:
    """Sink collecting (chunk, at_end) calls."""
    return Recorder()


@pytest.fixture
def chunked_reader() -> Callable[[Iterable[bytes]], ChunkedReader]:
    """Factory for readers returning one fixed piece per read."""
    return ChunkedReader


@pytest.fixture
def tracking_reader() -> Callable[[bytes], TrackingReader]:
    """Factory for readers that report their read position."""
    return TrackingReader
