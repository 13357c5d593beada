"""
Chunking of a raw byte stream for stdin2file.

Fixed-size chunking only: every chunk except the last holds exactly
chunk_size bytes, the last one holds the non-empty remainder.
"""

import logging
from typing import BinaryIO, Iterator

from stdin2file.core.contracts import Chunk

logger = logging.getLogger(__name__)


class StreamChunker:
    """Fixed-size chunking of a binary stream."""

    def __init__(self, stream: BinaryIO, chunk_size: int):
        """
        Initialize chunker.

        Args:
            stream: Binary stream to read (read(n) returning b"" at end of stream)
            chunk_size: Chunk size in bytes
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.stream = stream
        self.chunk_size = chunk_size
        self.bytes_read = 0
        self.read_errors = 0
        self._consumed = False

    def __iter__(self) -> Iterator[Chunk]:
        if self._consumed:
            raise RuntimeError("StreamChunker can only be iterated once")
        self._consumed = True
        return self._chunks()

    def _chunks(self) -> Iterator[Chunk]:
        sequence_number = 0
        while True:
            data, eof = self._fill()
            if data:
                logger.debug(
                    f"Got {len(data)} bytes from input, emitting chunk {sequence_number}"
                )
                yield Chunk(sequence_number=sequence_number, data=data)
                sequence_number += 1
            if eof:
                logger.debug(f"No more data in input after {self.bytes_read} bytes")
                return

    def _fill(self):
        """
        Read until a full chunk is buffered or the stream ends.

        Pipes return short reads, so one read() call is not enough.

        Returns:
            Tuple of (buffered bytes, end of stream reached)
        """
        buffer = bytearray()
        while len(buffer) < self.chunk_size:
            try:
                data = self.stream.read(self.chunk_size - len(buffer))
            except OSError as e:
                # Read errors are not fatal: log, skip and keep reading
                self.read_errors += 1
                logger.error(f"Failed to read input: {e}")
                continue
            if not data:
                return bytes(buffer), True
            buffer.extend(data)
            self.bytes_read += len(data)
        return bytes(buffer), False
