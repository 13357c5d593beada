"""
Compression utilities for stdin2file.

Each chunk is compressed as a whole, in memory: gzip, xz (LZMA in the XZ
container) or zstd via the zstandard library.
"""

import gzip
import lzma
from typing import Optional

import zstandard as zstd

from stdin2file.core.contracts import CompressionFormat

DEFAULT_GZIP_LEVEL = 6
DEFAULT_XZ_PRESET = 6
DEFAULT_ZSTD_LEVEL = 3


def compress_data(
    data: bytes, fmt: CompressionFormat, level: Optional[int] = None
) -> bytes:
    """
    Compress data with the given format.

    Output is deterministic: the gzip header carries no timestamp.

    Args:
        data: Data to compress
        fmt: Compression format (NONE returns data unchanged)
        level: Format-specific compression level (format default if None)

    Returns:
        Compressed data
    """
    if fmt is CompressionFormat.NONE:
        return data
    if fmt is CompressionFormat.GZ:
        return gzip.compress(
            data,
            compresslevel=DEFAULT_GZIP_LEVEL if level is None else level,
            mtime=0,
        )
    if fmt is CompressionFormat.XZ:
        return lzma.compress(
            data,
            format=lzma.FORMAT_XZ,
            preset=DEFAULT_XZ_PRESET if level is None else level,
        )
    if fmt is CompressionFormat.ZSTD:
        cctx = zstd.ZstdCompressor(level=DEFAULT_ZSTD_LEVEL if level is None else level)
        return cctx.compress(data)
    raise ValueError(f"Unsupported compression format: {fmt!r}")


def decompress_data(compressed_data: bytes, fmt: CompressionFormat) -> bytes:
    """
    Decompress data written by compress_data.

    Args:
        compressed_data: Compressed data
        fmt: Format the data was compressed with

    Returns:
        Decompressed data
    """
    if fmt is CompressionFormat.NONE:
        return compressed_data
    if fmt is CompressionFormat.GZ:
        return gzip.decompress(compressed_data)
    if fmt is CompressionFormat.XZ:
        return lzma.decompress(compressed_data, format=lzma.FORMAT_XZ)
    if fmt is CompressionFormat.ZSTD:
        dctx = zstd.ZstdDecompressor()
        return dctx.decompress(compressed_data)
    raise ValueError(f"Unsupported compression format: {fmt!r}")
