"""
Per-chunk producer: encode a chunk, write it to its own file, report the name.
"""

import asyncio
import logging

from stdin2file.core.contracts import Chunk, Config
from stdin2file.core.errors import ChannelClosedError, ProducerError
from stdin2file.core.naming import compose_file_name
from stdin2file.storage.channel import ReportSender
from stdin2file.storage.compression import compress_data

logger = logging.getLogger(__name__)


def write_chunk_file(file_name: str, data: bytes) -> int:
    """
    Create (or truncate) a file and write data to it.

    Args:
        file_name: Target file name
        data: Bytes to write

    Returns:
        Number of bytes written

    Raises:
        OSError: If the file cannot be created or written
    """
    with open(file_name, "wb") as f:
        f.write(data)
        f.flush()
    return len(data)


class ChunkProducer:
    """
    Writes one chunk to disk and reports the file name.

    Producers run concurrently and independently of each other; the order in
    which they report is arbitrary.
    """

    def __init__(self, chunk: Chunk, config: Config, sender: ReportSender):
        """
        Initialize producer.

        Args:
            chunk: Chunk to write (owned by this producer from now on)
            config: Run configuration (output path and compression)
            sender: Completion report handle, released when the producer finishes
        """
        self.chunk = chunk
        self.config = config
        self.sender = sender
        self.file_name = compose_file_name(
            config.output, chunk.sequence_number, config.compression
        )

    def _encode_and_write(self) -> int:
        data = compress_data(
            self.chunk.data, self.config.compression, self.config.compression_level()
        )
        return write_chunk_file(self.file_name, data)

    async def run(self) -> str:
        """
        Encode, write and report the chunk.

        Returns:
            Name of the written file

        Raises:
            ProducerError: If encoding, writing or reporting fails
        """
        async with self.sender:
            try:
                written = await asyncio.to_thread(self._encode_and_write)
            except Exception as e:
                raise ProducerError(
                    f"Failed to write {self.file_name}: {e}", file_name=self.file_name
                ) from e

            logger.debug(
                f"CREATE {self.file_name} ({len(self.chunk)} bytes in, {written} bytes out)"
            )

            try:
                await self.sender.send(self.file_name)
            except ChannelClosedError as e:
                raise ProducerError(
                    f"Failed to report {self.file_name}: {e}", file_name=self.file_name
                ) from e

        return self.file_name
