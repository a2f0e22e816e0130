"""
Exception types raised by the checksum services.

Algorithm-selection errors are fatal to an invocation. Path and read errors are
isolated to one input so that batch hashing can carry on with the rest.
"""
from typing import Optional


class ChecksumError(Exception):
    """Base class for all checksum errors."""


class UnsupportedAlgorithmError(ChecksumError):
    """Raised when an algorithm name matches none of the registered algorithms."""

    def __init__(self, algorithm: Optional[str], message: Optional[str] = None):
        self.algorithm = algorithm
        super().__init__(message or f"Unsupported hash algorithm: {algorithm!r}")


class PathNotFoundError(ChecksumError):
    """Raised when a path or pattern does not resolve to any existing entry."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path not found: {path}")


class FileReadError(ChecksumError):
    """
    Raised when an opened (or about to be opened) file cannot be read.

    Attributes:
        path (str): The file that failed.
        cause (Exception): The underlying OS error.
    """

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read {path}: {cause}")


class EngineFinalizedError(ChecksumError, RuntimeError):
    """Raised when update() is called on an engine that has already been finalized."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"{algorithm} engine has been finalized and cannot accept more input")


class HashingCancelledError(ChecksumError):
    """Raised when a caller cancels a running hash computation."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        target = path if path else "stream"
        super().__init__(f"Hashing cancelled for {target}")
