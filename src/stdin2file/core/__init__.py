"""
Core contracts, naming and errors for stdin2file.
"""

from stdin2file.core.contracts import (
    MIB,
    Chunk,
    CompressionFormat,
    Config,
    PipelineResult,
)
from stdin2file.core.errors import (
    ChannelClosedError,
    ConfigError,
    ProducerError,
    RetentionError,
    Stdin2FileError,
)
from stdin2file.core.naming import compose_file_name, natural_sort_key

__all__ = [
    "MIB",
    "Config",
    "Chunk",
    "CompressionFormat",
    "PipelineResult",
    "Stdin2FileError",
    "ConfigError",
    "ChannelClosedError",
    "ProducerError",
    "RetentionError",
    "compose_file_name",
    "natural_sort_key",
]
