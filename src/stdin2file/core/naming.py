"""
Output file naming for stdin2file.

Naming Policy:
- file name: {base_path}.{sequence_number}{suffix}, suffix "" / ".gz" / ".xz" / ".zst"
- base_path is used as given (plain string concatenation, no path handling)
- natural order: digit runs compare by numeric value, so "out.9" < "out.10"
"""

import re
from typing import List, Tuple, Union

from stdin2file.core.contracts import CompressionFormat

_DIGITS = re.compile(r"(\d+)")


def compose_file_name(
    base_path: str,
    sequence_number: int,
    compression: CompressionFormat = CompressionFormat.NONE,
) -> str:
    """
    Compose the output file name of a chunk.

    Args:
        base_path: Base output path from the command line
        sequence_number: Chunk sequence number (>= 0)
        compression: Format the chunk is written in

    Returns:
        File name string
    """
    return f"{base_path}.{sequence_number}{compression.suffix}"


def natural_sort_key(name: str) -> List[Tuple[int, Union[int, str]]]:
    """
    Sort key comparing embedded digit runs by numeric value.

    Text and number parts are tagged so they never compare against each other.

    Args:
        name: String to build the key for

    Returns:
        List of (tag, part) tuples usable with sorted()/list.sort()
    """
    key = []
    for part in _DIGITS.split(name):
        if not part:
            continue
        if part.isdigit():
            key.append((0, int(part)))
        else:
            key.append((1, part))
    return key

