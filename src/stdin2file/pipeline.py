"""
Pipeline orchestration for stdin2file.

Wires the chunker, one producer task per chunk and the retention authority
together, and decides how the run ends.

States:
- STARTING: completion channel and retention authority task are created
- STREAMING: chunks are read and a producer task is spawned for each
- DRAINING: input is exhausted (or a task failed); the orchestrator releases
  its own sender and awaits every task
- TERMINATED: all tasks are done; the first observed failure, if any, is raised
"""

import asyncio
import logging
from enum import Enum
from typing import BinaryIO, Optional, Set

from stdin2file.core.contracts import Chunk, Config, PipelineResult
from stdin2file.ingestion.chunker import StreamChunker
from stdin2file.storage.channel import CompletionChannel, ReportSender
from stdin2file.storage.producer import ChunkProducer
from stdin2file.storage.retention import RetentionAuthority

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    STARTING = "starting"
    STREAMING = "streaming"
    DRAINING = "draining"
    TERMINATED = "terminated"


class Pipeline:
    """Runs one chunk/write/retain pass over an input stream."""

    def __init__(self, config: Config, stream: BinaryIO):
        """
        Initialize pipeline.

        Args:
            config: Run configuration (validated when the run starts)
            stream: Binary input stream
        """
        self.config = config
        self.stream = stream
        self.state = PipelineState.STARTING
        self.chunks_spawned = 0
        self._tasks: Set[asyncio.Task] = set()  # pending only
        self._failure: Optional[BaseException] = None
        self._in_flight: Optional[asyncio.Semaphore] = None
        self.authority: Optional[RetentionAuthority] = None

    @property
    def failed(self) -> bool:
        return self._failure is not None

    def _on_task_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        logger.error(f"Task {task.get_name()} failed: {exc}")
        if self._failure is None:
            self._failure = exc

    def _spawn(self, coro, name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=name)
        task.add_done_callback(self._on_task_done)
        self._tasks.add(task)
        return task

    async def _produce(self, producer: ChunkProducer) -> str:
        try:
            return await producer.run()
        finally:
            if self._in_flight is not None:
                self._in_flight.release()

    async def _next_chunk(self, chunks) -> Optional[Chunk]:
        # Blocking read runs off the loop so spawned producers keep going
        return await asyncio.to_thread(next, chunks, None)

    async def _stream(self, sender: ReportSender):
        chunks = iter(StreamChunker(self.stream, self.config.chunk_size))
        while not self.failed:
            chunk = await self._next_chunk(chunks)
            if chunk is None:
                return
            if self._in_flight is not None:
                await self._in_flight.acquire()
                if self.failed:
                    self._in_flight.release()
                    break

            producer = ChunkProducer(chunk, self.config, sender.clone())
            logger.debug(
                f"Spawning producer for chunk {chunk.sequence_number} -> {producer.file_name}"
            )
            self._spawn(self._produce(producer), name=f"producer-{chunk.sequence_number}")
            self.chunks_spawned += 1

        logger.error("Task failure observed, no further input will be read")

    async def run(self) -> PipelineResult:
        """
        Run the pipeline to completion.

        Returns:
            PipelineResult with the number of chunks and the retained file names

        Raises:
            ConfigError: If the configuration is invalid
            ProducerError: If a chunk could not be written (first failure observed)
            RetentionError: If an evicted file could not be deleted (first failure observed)
        """
        self.config.validate()
        logger.info(
            f"START output={self.config.output} chunk_size={self.config.chunk_size} "
            f"compression={self.config.compression.value} max_files={self.config.max_files}"
        )

        channel = CompletionChannel(self.config.channel_capacity)
        sender = channel.sender()
        self.authority = RetentionAuthority(channel, self.config.max_files)
        authority_task = self._spawn(self.authority.run(), name="retention")
        if self.config.max_in_flight is not None:
            self._in_flight = asyncio.Semaphore(self.config.max_in_flight)

        self.state = PipelineState.STREAMING
        try:
            await self._stream(sender)
        finally:
            self.state = PipelineState.DRAINING
            await sender.release()
            logger.debug(
                f"Released orchestrator sender, waiting for {len(self._tasks)} tasks to finish"
            )
            # Finished tasks drop out of _tasks; their failures are already recorded
            while self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
            self.state = PipelineState.TERMINATED

        if self._failure is not None:
            raise self._failure

        logger.info(f"END {self.chunks_spawned} chunks written")
        return PipelineResult(chunks=self.chunks_spawned, retained=authority_task.result())


def run_pipeline(config: Config, stream: BinaryIO) -> PipelineResult:
    """
    Run the pipeline on a fresh event loop.

    Args:
        config: Run configuration
        stream: Binary input stream

    Returns:
        PipelineResult
    """
    return asyncio.run(Pipeline(config, stream).run())
