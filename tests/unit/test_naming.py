"""
Tests for output file naming and natural ordering.
"""

import random

from stdin2file.core.contracts import CompressionFormat
from stdin2file.core.naming import compose_file_name, natural_sort_key


def test_compose_file_name():
    assert compose_file_name("out", 0) == "out.0"
    assert compose_file_name("logs/app", 12, CompressionFormat.XZ) == "logs/app.12.xz"
    assert compose_file_name("out", 3, CompressionFormat.GZ) == "out.3.gz"


def test_natural_order_compares_numbers_by_value():
    """Plain string order puts "out.10" before "out.9"; natural order does not."""
    names = ["out.10", "out.9", "out.100", "out.0", "out.11"]

    assert sorted(names) != sorted(names, key=natural_sort_key)
    assert sorted(names, key=natural_sort_key) == [
        "out.0",
        "out.9",
        "out.10",
        "out.11",
        "out.100",
    ]


def test_natural_order_reproduces_sequence_order():
    """Any arrival order sorts back into sequence order, with or without suffix."""
    for fmt in CompressionFormat:
        names = [compose_file_name("run2/data", n, fmt) for n in range(250)]
        shuffled = names[:]
        random.Random(7).shuffle(shuffled)

        assert sorted(shuffled, key=natural_sort_key) == names

