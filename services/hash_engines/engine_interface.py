import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

from services.errors import EngineFinalizedError

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


class HashEngine(ABC):
    """
    Abstract base class defining the streaming contract shared by every hash engine.

    An engine is created fresh for each computation, fed with update() any number of
    times and closed with finalize(). Splitting the input differently across update()
    calls never changes the digest.

    Methods:
        update(data): Feed more bytes into the engine.
        finalize(): Produce the fixed-size digest. Repeated calls return the same digest.
        digest(): Alias for finalize(), mirroring hashlib.
        hexdigest(): Uppercase hexadecimal rendering of the digest.
    """

    name: str = ""
    digest_size: int = 0
    block_size: int = 1

    def __init__(self) -> None:
        self._digest: Optional[bytes] = None

    @property
    def finalized(self) -> bool:
        return self._digest is not None

    def update(self, data: BytesLike) -> "HashEngine":
        """
        Feed bytes into the engine.

        Args:
            data: Bytes-like chunk of input. Empty chunks are accepted and ignored.

        Returns:
            HashEngine: self, to allow chaining.

        Raises:
            EngineFinalizedError: If finalize() has already been called.
        """
        if self._digest is not None:
            raise EngineFinalizedError(self.name)
        if data:
            self._update(bytes(data))
        return self

    def finalize(self) -> bytes:
        """Finish the computation and return the digest bytes."""
        if self._digest is None:
            digest = self._finalize()
            if len(digest) != self.digest_size:
                raise AssertionError(
                    f"{self.name} produced {len(digest)} digest bytes, expected {self.digest_size}"
                )
            self._digest = digest
        return self._digest

    def digest(self) -> bytes:
        return self.finalize()

    def hexdigest(self) -> str:
        return self.finalize().hex().upper()

    @abstractmethod
    def _update(self, data: bytes) -> None:
        """Consume a non-empty chunk of input."""
        pass

    @abstractmethod
    def _finalize(self) -> bytes:
        """Compute the digest from the accumulated state."""
        pass

    def __repr__(self) -> str:
        state = "finalized" if self.finalized else "open"
        return f"<{type(self).__name__} {self.name} ({state})>"


class BlockHashEngine(HashEngine):
    """
    Base class for engines that consume input in fixed-size blocks.

    Incoming bytes are buffered until whole blocks are available. Whole blocks are
    handed to _compress() in one contiguous run, and whatever is left over (always
    shorter than block_size once block processing has started) stays in self._buffer
    for _finalize() to handle as the tail.
    """

    block_size: int = 0

    def __init__(self) -> None:
        super().__init__()
        self._buffer = bytearray()
        self._length = 0

    def _update(self, data: bytes) -> None:
        self._length += len(data)
        self._buffer += data
        if not self._blocks_ready():
            return
        whole = len(self._buffer) - (len(self._buffer) % self.block_size)
        if whole:
            self._compress(bytes(self._buffer[:whole]))
            del self._buffer[:whole]

    def _blocks_ready(self) -> bool:
        """Whether buffered whole blocks may be compressed yet."""
        return True

    @abstractmethod
    def _compress(self, blocks: bytes) -> None:
        """Absorb a run of whole blocks (len(blocks) is a multiple of block_size)."""
        pass
