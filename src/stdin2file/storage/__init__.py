"""
Storage layer: compression, per-chunk producers, completion channel and retention.
"""

from stdin2file.storage.channel import CompletionChannel, ReportSender
from stdin2file.storage.compression import compress_data, decompress_data
from stdin2file.storage.producer import ChunkProducer
from stdin2file.storage.retention import RetentionAuthority

__all__ = [
    "CompletionChannel",
    "ReportSender",
    "compress_data",
    "decompress_data",
    "ChunkProducer",
    "RetentionAuthority",
]
