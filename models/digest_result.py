"""
Result models for the digest pipeline: one DigestResult per hashed input, one
DigestFailure per input that could not be hashed.
"""
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

HEX_PATTERN = re.compile(r"^[0-9A-F]+$")


class DigestResult(BaseModel):
    """
    The digest of one input.

    Attributes:
        algorithm (str): Uppercase canonical algorithm name.
        hash (str): Uppercase hexadecimal digest.
        path (Optional[str]): Source file path; None for stream input.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    algorithm: str = Field(..., min_length=1, description="Uppercase canonical algorithm name")
    hash: str = Field(..., min_length=2, description="Uppercase hexadecimal digest")
    path: Optional[str] = Field(None, description="Source file path, absent for stream input")

    @field_validator('algorithm')
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        if v != v.upper():
            raise ValueError("algorithm must be the uppercase canonical name")
        return v

    @field_validator('hash')
    @classmethod
    def validate_hash(cls, v: str) -> str:
        if not HEX_PATTERN.match(v) or len(v) % 2:
            raise ValueError("hash must be an uppercase hexadecimal string of whole bytes")
        return v

    def to_line(self) -> str:
        """Render as a `sha256sum`-style line: hash, two spaces, path (or '-')."""
        return f"{self.hash}  {self.path if self.path is not None else '-'}"


class DigestFailure(BaseModel):
    """
    A per-input failure reported during batch hashing.

    Attributes:
        path (str): The offending path or pattern as given by the caller.
        error (str): Error kind, "PathNotFound" or "FileReadError".
        message (str): Human readable description including the underlying cause.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    path: str
    error: str
    message: str


class HashBatchResult(BaseModel):
    """Outcome of hashing a collection of paths."""

    results: List[DigestResult] = Field(default_factory=list)
    failures: List[DigestFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
