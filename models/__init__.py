"""
Models package for unichecksum.

This package contains the algorithm descriptor, Pydantic-based digest result models
and the validated runtime settings.
"""

from .algorithm import AlgorithmDescriptor, AlgorithmFamily
from .digest_result import DigestResult, DigestFailure, HashBatchResult
from .settings import ChecksumSettings, OutputFormat

__all__ = [
    "AlgorithmDescriptor",
    "AlgorithmFamily",
    "DigestResult",
    "DigestFailure",
    "HashBatchResult",
    "ChecksumSettings",
    "OutputFormat",
]
