"""Test fixed-size chunking of byte streams."""

import io
import math
import random

import pytest

from stdin2file.ingestion.chunker import StreamChunker


class TrickleStream:
    """Stream returning at most `step` bytes per read, like a pipe."""

    def __init__(self, data: bytes, step: int = 3):
        self._buffer = io.BytesIO(data)
        self.step = step

    def read(self, n: int = -1) -> bytes:
        return self._buffer.read(min(n, self.step))


class FlakyStream:
    """Stream whose reads fail at the given call numbers."""

    def __init__(self, data: bytes, fail_on: set):
        self._buffer = io.BytesIO(data)
        self.fail_on = fail_on
        self.calls = 0

    def read(self, n: int = -1) -> bytes:
        self.calls += 1
        if self.calls in self.fail_on:
            raise OSError("transient read error")
        return self._buffer.read(n)


@pytest.mark.parametrize("length", [0, 1, 9, 10, 11, 99, 100, 101, 1000])
def test_chunk_count_matches_length(length):
    """Chunk count is ceil(L/C) for L > 0 and 0 for empty input."""
    chunk_size = 10
    data = random.Random(length).randbytes(length)

    chunks = list(StreamChunker(io.BytesIO(data), chunk_size))

    assert len(chunks) == math.ceil(length / chunk_size)


def test_chunks_reassemble_input():
    """Chunks are consecutive slices with sequence numbers 0, 1, 2, ..."""
    data = random.Random(1).randbytes(1050)

    chunks = list(StreamChunker(io.BytesIO(data), 100))

    assert [c.sequence_number for c in chunks] == list(range(11))
    assert all(len(c) == 100 for c in chunks[:-1])
    assert len(chunks[-1]) == 50
    assert b"".join(c.data for c in chunks) == data


def test_exact_multiple_has_no_empty_trailing_chunk():
    chunks = list(StreamChunker(io.BytesIO(b"x" * 40), 10))

    assert len(chunks) == 4
    assert all(len(c) == 10 for c in chunks)


def test_short_reads_still_fill_chunks():
    """Pipes return short reads; chunks must still be exactly chunk_size."""
    data = bytes(range(256)) * 4

    chunks = list(StreamChunker(TrickleStream(data, step=7), 100))

    assert [len(c) for c in chunks] == [100] * 10 + [24]
    assert b"".join(c.data for c in chunks) == data


def test_read_errors_are_skipped():
    """A failing read is logged and skipped without ending the stream."""
    data = b"abcdefghij" * 3
    stream = FlakyStream(data, fail_on={2})
    chunker = StreamChunker(stream, 10)

    chunks = list(chunker)

    assert chunker.read_errors == 1
    assert b"".join(c.data for c in chunks) == data


def test_chunker_is_not_restartable():
    chunker = StreamChunker(io.BytesIO(b"abc"), 2)
    list(chunker)

    with pytest.raises(RuntimeError):
        iter(chunker)


def test_chunk_size_must_be_positive():
    with pytest.raises(ValueError):
        StreamChunker(io.BytesIO(b""), 0)
