"""
Bob Jenkins' 32-bit hashes.

Jenkins1 is the byte-at-a-time "one-at-a-time" hash; Jenkins2 is lookup2's hash()
with a 12-byte block mix and initval 0. They are unrelated algorithms, not two widths
of one.
"""
import logging
import struct

from services.hash_engines.bitops import MASK32
from services.hash_engines.engine_interface import BlockHashEngine, HashEngine

logger = logging.getLogger(__name__)

GOLDEN_RATIO = 0x9E3779B9


class Jenkins1Engine(HashEngine):
    name = "JENKINS1"
    digest_size = 4

    def __init__(self) -> None:
        super().__init__()
        self._h = 0

    def _update(self, data: bytes) -> None:
        h = self._h
        for byte in data:
            h = (h + byte) & MASK32
            h = (h + (h << 10)) & MASK32
            h ^= h >> 6
        self._h = h

    def _finalize(self) -> bytes:
        h = self._h
        h = (h + (h << 3)) & MASK32
        h ^= h >> 11
        h = (h + (h << 15)) & MASK32
        return h.to_bytes(4, "big")


def lookup2_mix(a: int, b: int, c: int):
    a = (a - b - c) & MASK32; a ^= c >> 13
    b = (b - c - a) & MASK32; b ^= (a << 8) & MASK32
    c = (c - a - b) & MASK32; c ^= b >> 13
    a = (a - b - c) & MASK32; a ^= c >> 12
    b = (b - c - a) & MASK32; b ^= (a << 16) & MASK32
    c = (c - a - b) & MASK32; c ^= b >> 5
    a = (a - b - c) & MASK32; a ^= c >> 3
    b = (b - c - a) & MASK32; b ^= (a << 10) & MASK32
    c = (c - a - b) & MASK32; c ^= b >> 15
    return a, b, c


class Jenkins2Engine(BlockHashEngine):
    name = "JENKINS2"
    digest_size = 4
    block_size = 12

    def __init__(self, initval: int = 0) -> None:
        super().__init__()
        self._a = GOLDEN_RATIO
        self._b = GOLDEN_RATIO
        self._c = initval & MASK32

    def _compress(self, blocks: bytes) -> None:
        a, b, c = self._a, self._b, self._c
        for k0, k1, k2 in struct.iter_unpack("<3I", blocks):
            a, b, c = lookup2_mix((a + k0) & MASK32, (b + k1) & MASK32, (c + k2) & MASK32)
        self._a, self._b, self._c = a, b, c

    def _finalize(self) -> bytes:
        a, b, c = self._a, self._b, self._c
        tail = bytes(self._buffer)
        c = (c + self._length) & MASK32
        # The low byte of c is reserved for the length, so tail bytes 8..10 shift up one.
        a = (a + int.from_bytes(tail[0:4], "little")) & MASK32
        b = (b + int.from_bytes(tail[4:8], "little")) & MASK32
        c = (c + (int.from_bytes(tail[8:11], "little") << 8)) & MASK32
        a, b, c = lookup2_mix(a, b, c)
        return c.to_bytes(4, "big")
