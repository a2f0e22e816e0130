"""
Validated runtime settings assembled from the configuration file and environment.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OutputFormat(str, Enum):
    """How digest results are printed by the CLI."""
    TABLE = "table"
    PLAIN = "plain"
    JSON = "json"


class ChecksumSettings(BaseModel):
    """
    Attributes:
        default_algorithm (str): Algorithm used when none is given on the command line.
        chunk_size (int): Bytes read per chunk by the digest pipeline.
        max_workers (int): Files hashed in parallel by batch operations.
        literal_paths (bool): Treat path arguments verbatim instead of as glob patterns.
        output_format (OutputFormat): CLI output format.
    """

    model_config = ConfigDict(validate_assignment=True, extra='forbid')

    default_algorithm: str = Field("SHA256", min_length=1)
    chunk_size: int = Field(65536, ge=1, le=1 << 30)
    max_workers: int = Field(1, ge=1, le=64)
    literal_paths: bool = False
    output_format: OutputFormat = OutputFormat.TABLE

    @field_validator('default_algorithm')
    @classmethod
    def normalize_algorithm(cls, v: str) -> str:
        return v.strip().upper()
