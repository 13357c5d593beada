"""
Basic usage example for stdin2file.
"""

import io
import os

from stdin2file import CompressionFormat, Config, run_pipeline
from stdin2file.core.logging_config import setup_logging
from stdin2file.storage import decompress_data

setup_logging("stdin2file", log_level="DEBUG")

os.makedirs("rotated", exist_ok=True)

# Split 10 MiB of data into 1 MiB xz files, keeping the newest 3
print("Writing chunks...")
payload = os.urandom(10 * 1024 * 1024)
config = Config.from_megabytes(
    "rotated/capture", 1, compression=CompressionFormat.XZ, max_files=3
)
result = run_pipeline(config, io.BytesIO(payload))
print(f"Wrote {result.chunks} chunks, kept {len(result.retained)}")

# Read the retained files back, oldest first
print("\nReading back...")
restored = b""
for file_name in result.retained:
    with open(file_name, "rb") as f:
        restored += decompress_data(f.read(), config.compression)
    print(f"  {file_name}")

assert restored == payload[-len(restored):]
print("\nRetained files match the end of the input")
