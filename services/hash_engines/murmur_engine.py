"""
MurmurHash3, x86 32-bit variant.
"""
import logging
import struct

from services.hash_engines.bitops import MASK32, rotl32
from services.hash_engines.engine_interface import BlockHashEngine

logger = logging.getLogger(__name__)

C1 = 0xCC9E2D51
C2 = 0x1B873593


def fmix32(h: int) -> int:
    """Final avalanche step."""
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & MASK32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & MASK32
    h ^= h >> 16
    return h


class MurmurHash3Engine(BlockHashEngine):
    name = "MURMURHASH3"
    digest_size = 4
    block_size = 4

    def __init__(self, seed: int = 0) -> None:
        super().__init__()
        self.seed = seed & MASK32
        self._h = self.seed

    def _compress(self, blocks: bytes) -> None:
        h = self._h
        for (k,) in struct.iter_unpack("<I", blocks):
            k = (k * C1) & MASK32
            k = rotl32(k, 15)
            k = (k * C2) & MASK32
            h ^= k
            h = rotl32(h, 13)
            h = (h * 5 + 0xE6546B64) & MASK32
        self._h = h

    def _finalize(self) -> bytes:
        h = self._h
        tail = self._buffer
        if tail:
            k = int.from_bytes(tail, "little")
            k = (k * C1) & MASK32
            k = rotl32(k, 15)
            k = (k * C2) & MASK32
            h ^= k
        h ^= self._length & MASK32
        return fmix32(h).to_bytes(4, "big")
