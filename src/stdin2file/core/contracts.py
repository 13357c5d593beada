"""
Core data structures (dataclasses) for stdin2file.

All core data structures are defined as explicit dataclasses.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from stdin2file.core.errors import ConfigError

MIB = 1024 * 1024


class CompressionFormat(Enum):
    """Compression applied to a chunk before it is written."""

    NONE = "none"
    GZ = "gz"
    XZ = "xz"
    ZSTD = "zst"

    @property
    def suffix(self) -> str:
        """Public file name suffix for this format ("" when uncompressed)."""
        if self is CompressionFormat.NONE:
            return ""
        return "." + self.value

    @classmethod
    def parse(cls, name: Optional[str]) -> "CompressionFormat":
        """
        Map a CLI compression name to a format.

        Args:
            name: "gz", "xz", "zst", or None/"" for no compression

        Returns:
            CompressionFormat member

        Raises:
            ValueError: If the name is not a known format
        """
        if not name:
            return cls.NONE
        for member in cls:
            if member.value == name.lower():
                return member
        raise ValueError(f"Unsupported compression format: {name!r}")


@dataclass
class Config:
    """Configuration for a chunking/retention run."""

    output: str  # base path, files are named {output}.{n}[.suffix]
    chunk_size: int  # bytes per chunk

    # Compression
    compression: CompressionFormat = CompressionFormat.NONE
    gzip_level: int = 6
    xz_preset: int = 6
    zstd_level: int = 3

    # Retention
    max_files: Optional[int] = None  # None keeps every file

    # Concurrency
    channel_capacity: int = 16  # pending completion reports before senders wait
    max_in_flight: Optional[int] = None  # None spawns a producer per chunk immediately

    @classmethod
    def from_megabytes(cls, output: str, chunk_mb: int, **kwargs) -> "Config":
        """Build a config whose chunk size is given in MiB, as on the command line."""
        return cls(output=output, chunk_size=chunk_mb * MIB, **kwargs)

    def compression_level(self) -> Optional[int]:
        """Level passed to the encoder of the selected format."""
        if self.compression is CompressionFormat.GZ:
            return self.gzip_level
        if self.compression is CompressionFormat.XZ:
            return self.xz_preset
        if self.compression is CompressionFormat.ZSTD:
            return self.zstd_level
        return None

    def validate(self):
        """
        Check invariants that must hold before the pipeline starts.

        Raises:
            ConfigError: If any value is out of range
        """
        if not self.output:
            raise ConfigError("output base path must not be empty")
        if self.chunk_size <= 0:
            raise ConfigError(f"chunk size must be positive, got {self.chunk_size}")
        if self.max_files is not None and self.max_files <= 0:
            raise ConfigError(f"max files must be positive, got {self.max_files}")
        if self.channel_capacity <= 0:
            raise ConfigError(
                f"channel capacity must be positive, got {self.channel_capacity}"
            )
        if self.max_in_flight is not None and self.max_in_flight <= 0:
            raise ConfigError(
                f"max in-flight producers must be positive, got {self.max_in_flight}"
            )


@dataclass
class Chunk:
    """
    A contiguous slice of the input stream.

    sequence_number starts at 0 and increases by one per chunk, so it also
    gives the chunk's position in the input.
    """

    sequence_number: int
    data: bytes

    def __len__(self) -> int:
        return len(self.data)


@dataclass
class PipelineResult:
    """Summary of a finished run."""

    chunks: int  # number of chunks handed to producers
    retained: List[str]  # file names still retained, oldest first
