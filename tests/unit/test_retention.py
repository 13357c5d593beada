"""Tests for the retention authority."""

import asyncio
from pathlib import Path

import pytest

from stdin2file.core.errors import ChannelClosedError, RetentionError
from stdin2file.storage.channel import CompletionChannel
from stdin2file.storage.retention import RetentionAuthority


def make_files(tmp_path: Path, numbers, suffix=""):
    names = []
    for n in numbers:
        path = tmp_path / f"out.{n}{suffix}"
        path.write_bytes(str(n).encode())
        names.append(str(path))
    return names


async def report_all(channel, names):
    sender = channel.sender()
    async with sender:
        for name in names:
            await sender.send(name)


def surviving(tmp_path: Path):
    return sorted(int(p.name.split(".")[1]) for p in tmp_path.glob("out.*"))


class TestRetentionAuthority:
    """Ordering, eviction and failure behavior."""

    @pytest.mark.asyncio
    async def test_keeps_newest_files(self, tmp_path):
        channel = CompletionChannel()
        authority = RetentionAuthority(channel, max_files=5)
        names = make_files(tmp_path, range(12))

        task = asyncio.create_task(authority.run())
        await report_all(channel, names)
        retained = await task

        assert retained == names[7:]
        assert surviving(tmp_path) == list(range(7, 12))
        assert authority.retained == []  # drained on exit

    @pytest.mark.asyncio
    async def test_out_of_order_reports_evict_by_sequence(self, tmp_path):
        """Reports for .10 and .9 in any order: the smaller number is evicted."""
        channel = CompletionChannel()
        authority = RetentionAuthority(channel, max_files=3)
        names = make_files(tmp_path, range(12))
        order = [names[i] for i in (11, 9, 10, 8, 2, 0, 1)]

        task = asyncio.create_task(authority.run())
        await report_all(channel, order)
        retained = await task

        assert retained == [names[9], names[10], names[11]]
        # files never reported are left alone
        assert surviving(tmp_path) == [3, 4, 5, 6, 7, 9, 10, 11]

    @pytest.mark.asyncio
    async def test_straggler_is_evicted_on_arrival(self, tmp_path):
        """A late report older than everything retained is removed immediately."""
        channel = CompletionChannel()
        authority = RetentionAuthority(channel, max_files=2)
        names = make_files(tmp_path, range(4))

        task = asyncio.create_task(authority.run())
        await report_all(channel, [names[2], names[3], names[0]])
        retained = await task

        assert retained == [names[2], names[3]]
        assert authority.evicted == 1
        assert not Path(names[0]).exists()
        assert Path(names[1]).exists()  # never reported

    @pytest.mark.asyncio
    async def test_unlimited_retention_keeps_everything(self, tmp_path):
        channel = CompletionChannel()
        authority = RetentionAuthority(channel, max_files=None)
        names = make_files(tmp_path, range(20), suffix=".xz")

        task = asyncio.create_task(authority.run())
        await report_all(channel, list(reversed(names)))
        retained = await task

        assert retained == names
        assert authority.evicted == 0
        assert len(list(tmp_path.glob("out.*"))) == 20

    @pytest.mark.asyncio
    async def test_deletion_failure_is_fatal(self, tmp_path):
        channel = CompletionChannel()
        authority = RetentionAuthority(channel, max_files=1)
        existing = make_files(tmp_path, [1])
        missing = str(tmp_path / "out.0")

        task = asyncio.create_task(authority.run())
        sender = channel.sender()
        await sender.send(existing[0])
        await sender.send(missing)

        with pytest.raises(RetentionError) as excinfo:
            await task
        assert excinfo.value.file_name == missing

        # receiver is gone, further reports fail instead of blocking
        with pytest.raises(ChannelClosedError):
            await asyncio.wait_for(sender.send(existing[0]), timeout=1)

    def test_max_files_must_be_positive(self):
        with pytest.raises(ValueError):
            RetentionAuthority(CompletionChannel(), max_files=0)
