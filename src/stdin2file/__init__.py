"""
stdin2file - split a byte stream into numbered, optionally compressed files with rotation.
"""

__version__ = "0.1.0"

from stdin2file.core import CompressionFormat, Config, PipelineResult
from stdin2file.pipeline import Pipeline, run_pipeline

__all__ = [
    "run_pipeline",
    "Pipeline",
    "PipelineResult",
    "Config",
    "CompressionFormat",
]
