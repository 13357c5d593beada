"""
Ingestion: slicing the input stream into chunks.
"""

from stdin2file.ingestion.chunker import StreamChunker

__all__ = [
    "StreamChunker",
]
