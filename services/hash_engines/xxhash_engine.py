"""
xxHash32 and xxHash64, reference algorithms with seed 0 by default.

Inputs of at least one stripe (16 bytes for XXH32, 32 bytes for XXH64) go through the
four parallel accumulators; shorter inputs start from seed + PRIME5. The tail is
consumed in word, half-word and byte steps before the final avalanche.
"""
import logging
import struct

from services.hash_engines.bitops import MASK32, MASK64, rotl32, rotl64
from services.hash_engines.engine_interface import BlockHashEngine

logger = logging.getLogger(__name__)

PRIME32_1 = 0x9E3779B1
PRIME32_2 = 0x85EBCA77
PRIME32_3 = 0xC2B2AE3D
PRIME32_4 = 0x27D4EB2F
PRIME32_5 = 0x165667B1

PRIME64_1 = 0x9E3779B185EBCA87
PRIME64_2 = 0xC2B2AE3D27D4EB4F
PRIME64_3 = 0x165667B19E3779F9
PRIME64_4 = 0x85EBCA77C2B2AE63
PRIME64_5 = 0x27D4EB2F165667C5


def _round32(acc: int, lane: int) -> int:
    acc = (acc + lane * PRIME32_2) & MASK32
    acc = rotl32(acc, 13)
    return (acc * PRIME32_1) & MASK32


def _round64(acc: int, lane: int) -> int:
    acc = (acc + lane * PRIME64_2) & MASK64
    acc = rotl64(acc, 31)
    return (acc * PRIME64_1) & MASK64


def _merge_round64(acc: int, value: int) -> int:
    acc ^= _round64(0, value)
    return (acc * PRIME64_1 + PRIME64_4) & MASK64


class XXHash32Engine(BlockHashEngine):
    name = "XXHASH32"
    digest_size = 4
    block_size = 16

    def __init__(self, seed: int = 0) -> None:
        super().__init__()
        self.seed = seed & MASK32
        self._acc = [
            (self.seed + PRIME32_1 + PRIME32_2) & MASK32,
            (self.seed + PRIME32_2) & MASK32,
            self.seed,
            (self.seed - PRIME32_1) & MASK32,
        ]

    def _compress(self, blocks: bytes) -> None:
        v1, v2, v3, v4 = self._acc
        for l1, l2, l3, l4 in struct.iter_unpack("<4I", blocks):
            v1 = _round32(v1, l1)
            v2 = _round32(v2, l2)
            v3 = _round32(v3, l3)
            v4 = _round32(v4, l4)
        self._acc = [v1, v2, v3, v4]

    def _finalize(self) -> bytes:
        if self._length >= self.block_size:
            v1, v2, v3, v4 = self._acc
            h = (rotl32(v1, 1) + rotl32(v2, 7) + rotl32(v3, 12) + rotl32(v4, 18)) & MASK32
        else:
            h = (self.seed + PRIME32_5) & MASK32
        h = (h + self._length) & MASK32

        tail = bytes(self._buffer)
        offset = 0
        while offset + 4 <= len(tail):
            (lane,) = struct.unpack_from("<I", tail, offset)
            h = (h + lane * PRIME32_3) & MASK32
            h = (rotl32(h, 17) * PRIME32_4) & MASK32
            offset += 4
        for byte in tail[offset:]:
            h = (h + byte * PRIME32_5) & MASK32
            h = (rotl32(h, 11) * PRIME32_1) & MASK32

        h ^= h >> 15
        h = (h * PRIME32_2) & MASK32
        h ^= h >> 13
        h = (h * PRIME32_3) & MASK32
        h ^= h >> 16
        return h.to_bytes(4, "big")


class XXHash64Engine(BlockHashEngine):
    name = "XXHASH64"
    digest_size = 8
    block_size = 32

    def __init__(self, seed: int = 0) -> None:
        super().__init__()
        self.seed = seed & MASK64
        self._acc = [
            (self.seed + PRIME64_1 + PRIME64_2) & MASK64,
            (self.seed + PRIME64_2) & MASK64,
            self.seed,
            (self.seed - PRIME64_1) & MASK64,
        ]

    def _compress(self, blocks: bytes) -> None:
        v1, v2, v3, v4 = self._acc
        for l1, l2, l3, l4 in struct.iter_unpack("<4Q", blocks):
            v1 = _round64(v1, l1)
            v2 = _round64(v2, l2)
            v3 = _round64(v3, l3)
            v4 = _round64(v4, l4)
        self._acc = [v1, v2, v3, v4]

    def _finalize(self) -> bytes:
        if self._length >= self.block_size:
            v1, v2, v3, v4 = self._acc
            h = (rotl64(v1, 1) + rotl64(v2, 7) + rotl64(v3, 12) + rotl64(v4, 18)) & MASK64
            for acc in (v1, v2, v3, v4):
                h = _merge_round64(h, acc)
        else:
            h = (self.seed + PRIME64_5) & MASK64
        h = (h + self._length) & MASK64

        tail = bytes(self._buffer)
        offset = 0
        while offset + 8 <= len(tail):
            (lane,) = struct.unpack_from("<Q", tail, offset)
            h ^= _round64(0, lane)
            h = (rotl64(h, 27) * PRIME64_1 + PRIME64_4) & MASK64
            offset += 8
        if offset + 4 <= len(tail):
            (lane,) = struct.unpack_from("<I", tail, offset)
            h ^= (lane * PRIME64_1) & MASK64
            h = (rotl64(h, 23) * PRIME64_2 + PRIME64_3) & MASK64
            offset += 4
        for byte in tail[offset:]:
            h ^= (byte * PRIME64_5) & MASK64
            h = (rotl64(h, 11) * PRIME64_1) & MASK64

        h ^= h >> 33
        h = (h * PRIME64_2) & MASK64
        h ^= h >> 29
        h = (h * PRIME64_3) & MASK64
        h ^= h >> 32
        return h.to_bytes(8, "big")
