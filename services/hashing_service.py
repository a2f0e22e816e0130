"""
HashingService: streaming digest pipeline with configurable chunk size.

Defaults to a 64 KiB chunk size. Every computation gets a fresh engine from the
algorithm registry, so one service instance can be shared across threads.
"""

from __future__ import annotations

import io
import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import BinaryIO, List, Optional, Sequence, Union

from models.algorithm import AlgorithmDescriptor
from models.digest_result import DigestFailure, DigestResult, HashBatchResult
from services.algorithm_registry import DEFAULT_ALGORITHM, resolve_algorithm
from services.errors import FileReadError, HashingCancelledError, PathNotFoundError
from utils.path_resolver import open_for_hashing, resolve_paths

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65_536


class HashingService:
    """
    Drives bytes from files or streams through a hash engine.

    - Digests are rendered as uppercase hex strings
    - Unknown algorithms fail before any file is opened
    - Batch hashing reports per-file failures and carries on with the other files
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size

    def hash_stream(
        self,
        stream: BinaryIO,
        algorithm: str = DEFAULT_ALGORITHM,
        path: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> DigestResult:
        """
        Hash a readable binary stream until it is exhausted.

        The stream is consumed but neither rewound nor closed; the caller owns it.

        Args:
            stream (BinaryIO): Source of bytes.
            algorithm (str): Algorithm name (case-insensitive).
            path (Optional[str]): Related file path recorded in the result.
            cancel_event (Optional[threading.Event]): When set, reading stops before
                the next chunk.

        Returns:
            DigestResult: The digest of everything read.

        Raises:
            UnsupportedAlgorithmError: If the algorithm is unknown (before any read).
            HashingCancelledError: If cancel_event was set during hashing.
        """
        descriptor = resolve_algorithm(algorithm)
        digest_hex = self._digest_stream(stream, descriptor, path, cancel_event)
        return DigestResult(algorithm=descriptor.name, hash=digest_hex, path=path)

    def hash_file(
        self,
        file_path: str,
        algorithm: str = DEFAULT_ALGORITHM,
        cancel_event: Optional[threading.Event] = None,
    ) -> DigestResult:
        """
        Hash one file. The file handle is owned here and closed on every exit path.

        Raises:
            UnsupportedAlgorithmError: If the algorithm is unknown (before any I/O).
            PathNotFoundError: If the path does not exist or is not a regular file.
            FileReadError: If the file cannot be opened or read.
        """
        descriptor = resolve_algorithm(algorithm)
        if not os.path.isfile(file_path):
            raise PathNotFoundError(file_path)
        return self._hash_resolved_file(file_path, descriptor, cancel_event)

    def hash_bytes(self, data: Union[bytes, bytearray, memoryview], algorithm: str = DEFAULT_ALGORITHM) -> DigestResult:
        """Hash an in-memory buffer; the result carries no path."""
        return self.hash_stream(io.BytesIO(bytes(data)), algorithm)

    def hash_paths(
        self,
        paths: Sequence[str],
        algorithm: str = DEFAULT_ALGORITHM,
        literal: bool = False,
        max_workers: int = 1,
        cancel_event: Optional[threading.Event] = None,
    ) -> HashBatchResult:
        """
        Resolve and hash a collection of paths or glob patterns.

        Algorithm errors are fatal and raised before any path is touched. Unmatched
        entries and unreadable files are recorded as failures; everything else is
        still hashed. Results keep the order in which files were resolved and
        failures keep the order of the inputs that produced them.

        Args:
            paths (Sequence[str]): Literal paths or glob patterns.
            algorithm (str): Algorithm name (case-insensitive).
            literal (bool): Use entries verbatim instead of glob-expanding them.
            max_workers (int): Files hashed in parallel; 1 hashes sequentially.
            cancel_event (Optional[threading.Event]): Stops the batch when set.

        Returns:
            HashBatchResult: One result per hashed file, one failure per failed input.
        """
        descriptor = resolve_algorithm(algorithm)
        resolution = resolve_paths(paths, literal=literal)

        if max_workers > 1 and len(resolution.files) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [
                    executor.submit(self._hash_resolved_file, file_path, descriptor, cancel_event)
                    for file_path in resolution.files
                ]
                outcomes = [self._collect(future.result, file_path) for future, file_path in zip(futures, resolution.files)]
        else:
            outcomes = [
                self._collect(lambda p=file_path: self._hash_resolved_file(p, descriptor, cancel_event), file_path)
                for file_path in resolution.files
            ]
        outcome_by_path = dict(zip(resolution.files, outcomes))

        # Results and failures both follow input order
        batch = HashBatchResult()
        for entry in resolution.entries:
            if isinstance(entry, PathNotFoundError):
                batch.failures.append(DigestFailure(path=entry.path, error="PathNotFound", message=str(entry)))
                continue
            outcome = outcome_by_path[entry]
            if isinstance(outcome, DigestResult):
                batch.results.append(outcome)
            else:
                batch.failures.append(outcome)

        logger.info(
            f"Hashed {len(batch.results)} file(s) with {descriptor.name}, {len(batch.failures)} failure(s)"
        )
        return batch

    def verify_file(self, file_path: str, expected: str, algorithm: str = DEFAULT_ALGORITHM) -> bool:
        """
        Compare a file's digest with an expected hex string (case-insensitive).

        Raises:
            UnsupportedAlgorithmError, PathNotFoundError, FileReadError: As hash_file().
        """
        actual = self.hash_file(file_path, algorithm).hash
        matches = actual == expected.strip().upper()
        if matches:
            logger.info(f"Checksum match for {file_path}: {actual}")
        else:
            logger.warning(f"Checksum mismatch for {file_path}: expected {expected.strip().upper()}, got {actual}")
        return matches

    # Convenience wrappers for the digests most callers ask for by name.
    def calculate_crc32(self, file_path: str) -> str:
        return self.hash_file(file_path, "CRC").hash

    def calculate_md5(self, file_path: str) -> str:
        return self.hash_file(file_path, "MD5").hash

    def calculate_sha1(self, file_path: str) -> str:
        return self.hash_file(file_path, "SHA1").hash

    def calculate_sha256(self, file_path: str) -> str:
        return self.hash_file(file_path, "SHA256").hash

    def _hash_resolved_file(
        self,
        file_path: str,
        descriptor: AlgorithmDescriptor,
        cancel_event: Optional[threading.Event],
    ) -> DigestResult:
        with open_for_hashing(file_path) as stream:
            try:
                digest_hex = self._digest_stream(stream, descriptor, file_path, cancel_event)
            except OSError as e:
                raise FileReadError(file_path, e) from e
        logger.info(f"{descriptor.name} {digest_hex} {file_path}")
        return DigestResult(algorithm=descriptor.name, hash=digest_hex, path=file_path)

    def _digest_stream(
        self,
        stream: BinaryIO,
        descriptor: AlgorithmDescriptor,
        path: Optional[str],
        cancel_event: Optional[threading.Event],
    ) -> str:
        engine = descriptor.create_engine()
        total = 0
        chunks = 0
        while True:
            if cancel_event is not None and cancel_event.is_set():
                logger.warning(f"Hashing cancelled after {total} bytes: {path or 'stream'}")
                raise HashingCancelledError(path)
            data = stream.read(self.chunk_size)
            if not data:
                break
            engine.update(data)
            total += len(data)
            chunks += 1
        logger.debug(f"{descriptor.name}: {total} bytes in {chunks} chunk(s) from {path or 'stream'}")
        return engine.hexdigest()

    @staticmethod
    def _collect(task, file_path: str) -> Union[DigestResult, DigestFailure]:
        try:
            return task()
        except FileReadError as e:
            logger.warning(str(e))
            return DigestFailure(path=file_path, error="FileReadError", message=str(e))
        except PathNotFoundError as e:
            logger.warning(str(e))
            return DigestFailure(path=file_path, error="PathNotFound", message=str(e))
