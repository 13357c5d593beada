"""
Retention authority for stdin2file.

A single task owns the retention set. Producers only talk to it through the
completion channel, so the set needs no lock.

Invariant after every report: the set holds at most max_files names, and they
are the newest (by sequence number) of the names reported so far. Reports
arrive in completion order, not sequence order, so the set is re-sorted in
natural order before evicting. A late report whose sequence number is older
than everything already retained is therefore evicted as soon as it arrives.
"""

import asyncio
import logging
import os
from typing import List, Optional

from stdin2file.core.errors import RetentionError
from stdin2file.core.naming import natural_sort_key
from stdin2file.storage.channel import CompletionChannel

logger = logging.getLogger(__name__)


def delete_file(file_name: str):
    """
    Delete a retained file.

    Raises:
        OSError: If the file is missing or cannot be removed
    """
    os.remove(file_name)


class RetentionAuthority:
    """Keeps the newest max_files reported files and deletes the rest."""

    def __init__(self, channel: CompletionChannel, max_files: Optional[int] = None):
        """
        Initialize retention authority.

        Args:
            channel: Completion channel to receive file names from
            max_files: Retention limit (None keeps every file)
        """
        if max_files is not None and max_files <= 0:
            raise ValueError(f"max_files must be positive, got {max_files}")
        self.channel = channel
        self.max_files = max_files
        self._files: List[str] = []
        self.received = 0
        self.evicted = 0

    @property
    def retained(self) -> List[str]:
        """Snapshot of the retention set, oldest first."""
        return list(self._files)

    async def run(self) -> List[str]:
        """
        Process reports until every sender has been released.

        Returns:
            Names retained when the channel closed, oldest first

        Raises:
            RetentionError: If an evicted file cannot be deleted
        """
        try:
            async for file_name in self.channel:
                await self._handle_report(file_name)
        finally:
            await self.channel.close_receiver()

        retained = self.retained
        self._files.clear()
        logger.debug(
            f"Retention finished: {self.received} reported, {self.evicted} removed, "
            f"{len(retained)} retained"
        )
        return retained

    async def _handle_report(self, file_name: str):
        logger.debug(f"Received report that file {file_name} is completed")
        self.received += 1

        self._files.append(file_name)
        self._files.sort(key=natural_sort_key)

        if self.max_files is None:
            return

        while len(self._files) > self.max_files:
            victim = self._files.pop(0)
            if victim == file_name:
                # Newer files already fill the limit
                logger.info(f"Straggler {file_name} evicted on arrival")
            await self._remove(victim)

    async def _remove(self, file_name: str):
        logger.debug(f"REMOVE {file_name}")
        try:
            await asyncio.to_thread(delete_file, file_name)
        except OSError as e:
            raise RetentionError(
                f"Failed to remove {file_name}: {e}", file_name=file_name
            ) from e
        self.evicted += 1
