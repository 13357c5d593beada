"""
Bounded completion channel between producers and the retention authority.

Many senders, one receiver. The channel closes once every ReportSender handle
has been released and the buffered reports are drained; the receiver then
stops iterating. If the receiver goes away first, pending and future sends
fail with ChannelClosedError instead of waiting forever.
"""

import asyncio
from typing import Optional

from stdin2file.core.errors import ChannelClosedError

# Queued after the last sender is released; everything sent before it is delivered first
_CLOSED = object()


class CompletionChannel:
    """Bounded multi-sender, single-receiver channel of file names."""

    def __init__(self, capacity: int = 16):
        """
        Initialize channel.

        Args:
            capacity: Number of buffered reports before send() waits
        """
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=capacity)
        self._receiver_closed = asyncio.Event()
        self._senders = 0
        self._drained = False

    @property
    def closed(self) -> bool:
        """True once no sender handle is left."""
        return self._senders == 0

    def sender(self) -> "ReportSender":
        """Create a new sender handle registered with this channel."""
        self._senders += 1
        return ReportSender(self)

    async def _put(self, item) -> bool:
        """
        Queue an item, waiting while the queue is full.

        Returns:
            False if the receiver closed before the item could be queued
        """
        if self._receiver_closed.is_set():
            return False
        try:
            self._queue.put_nowait(item)
            return True
        except asyncio.QueueFull:
            pass

        put = asyncio.ensure_future(self._queue.put(item))
        closed = asyncio.ensure_future(self._receiver_closed.wait())
        try:
            await asyncio.wait({put, closed}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            put.cancel()
            closed.cancel()
        return not self._receiver_closed.is_set()

    async def _send(self, file_name: str):
        if not await self._put(file_name):
            raise ChannelClosedError(
                f"Report for {file_name} dropped: receiver is closed"
            )

    async def _release(self):
        self._senders -= 1
        if self._senders == 0:
            await self._put(_CLOSED)

    async def recv(self) -> Optional[str]:
        """
        Receive the next report.

        Returns:
            File name, or None once the channel is closed and drained
        """
        if self._drained or (self._senders == 0 and self._queue.empty()):
            return None
        item = await self._queue.get()
        if item is _CLOSED:
            self._drained = True
            return None
        return item

    async def close_receiver(self):
        """Stop accepting reports; blocked and future senders fail."""
        self._receiver_closed.set()

    def __aiter__(self):
        return self

    async def __anext__(self) -> str:
        file_name = await self.recv()
        if file_name is None:
            raise StopAsyncIteration
        return file_name


class ReportSender:
    """
    Handle used to send completion reports.

    Each holder releases its own handle; clone() gives an independent one.
    """

    def __init__(self, channel: CompletionChannel):
        self._channel = channel
        self._released = False

    def clone(self) -> "ReportSender":
        """Create another handle on the same channel."""
        if self._released:
            raise ChannelClosedError("Cannot clone a released sender")
        return self._channel.sender()

    async def send(self, file_name: str):
        """
        Send a completion report, waiting while the channel is full.

        Raises:
            ChannelClosedError: If this handle was released or the receiver is gone
        """
        if self._released:
            raise ChannelClosedError("Cannot send on a released sender")
        await self._channel._send(file_name)

    async def release(self):
        """Release this handle; releasing twice is a no-op."""
        if self._released:
            return
        self._released = True
        await self._channel._release()

    async def __aenter__(self) -> "ReportSender":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.release()
