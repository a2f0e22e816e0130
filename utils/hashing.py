"""
Functional hashing helpers for scripts that just want a hex string.

Both helpers delegate to services.hashing_service.HashingService.
"""

from __future__ import annotations

import os
import sys
from typing import Union

from services.algorithm_registry import DEFAULT_ALGORITHM
from services.errors import ChecksumError
from services.hashing_service import DEFAULT_CHUNK_SIZE, HashingService


def hash_file(file_path: str, algorithm: str = DEFAULT_ALGORITHM, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    return HashingService(chunk_size=chunk_size).hash_file(file_path, algorithm).hash


def hash_bytes(data: Union[bytes, bytearray, memoryview], algorithm: str = DEFAULT_ALGORITHM) -> str:
    return HashingService().hash_bytes(data, algorithm).hash


if __name__ == "__main__":
    if len(sys.argv) not in (2, 3):
        print("Usage: python -m utils.hashing <file_path> [algorithm]")
        sys.exit(1)

    file_path = sys.argv[1]
    algorithm = sys.argv[2] if len(sys.argv) == 3 else DEFAULT_ALGORITHM
    if not os.path.isfile(file_path):
        print(f"❌ File not found: {file_path}")
        sys.exit(1)

    try:
        print(f"{hash_file(file_path, algorithm)}  {file_path}")
    except ChecksumError as e:
        print(f"❌ {e}")
        sys.exit(1)
