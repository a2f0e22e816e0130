"""
MetroHash64 and MetroHash128 (J. Andrew Rogers), seed 0 by default.

The two widths are separate algorithms with their own constants and finalization,
sharing only the 32-byte bulk loop shape. Digests are written in the reference byte
layout: the state words in little-endian order.
"""
import logging
import struct

from services.hash_engines.bitops import MASK64, rotr64
from services.hash_engines.engine_interface import BlockHashEngine

logger = logging.getLogger(__name__)


def _read(tail: bytes, offset: int, size: int) -> int:
    return int.from_bytes(tail[offset:offset + size], "little")


class _MetroBulk(BlockHashEngine):
    block_size = 32
    k0 = k1 = k2 = k3 = 0

    def _compress(self, blocks: bytes) -> None:
        v0, v1, v2, v3 = self._v
        k0, k1, k2, k3 = self.k0, self.k1, self.k2, self.k3
        for w0, w1, w2, w3 in struct.iter_unpack("<4Q", blocks):
            v0 = (v0 + w0 * k0) & MASK64
            v0 = (rotr64(v0, 29) + v2) & MASK64
            v1 = (v1 + w1 * k1) & MASK64
            v1 = (rotr64(v1, 29) + v3) & MASK64
            v2 = (v2 + w2 * k2) & MASK64
            v2 = (rotr64(v2, 29) + v0) & MASK64
            v3 = (v3 + w3 * k3) & MASK64
            v3 = (rotr64(v3, 29) + v1) & MASK64
        self._v = [v0, v1, v2, v3]


class MetroHash64Engine(_MetroBulk):
    name = "METROHASH64"
    digest_size = 8
    k0 = 0xD6D018F5
    k1 = 0xA2AA033B
    k2 = 0x62992FC1
    k3 = 0x30BC5B29

    def __init__(self, seed: int = 0) -> None:
        super().__init__()
        self._vseed = ((seed + self.k2) * self.k0) & MASK64
        self._v = [self._vseed] * 4

    def _finalize(self) -> bytes:
        k0, k1, k2, k3 = self.k0, self.k1, self.k2, self.k3
        v0, v1, v2, v3 = self._v

        if self._length >= self.block_size:
            v2 ^= (rotr64((((v0 + v3) * k0) + v1) & MASK64, 37) * k1) & MASK64
            v3 ^= (rotr64((((v1 + v2) * k1) + v0) & MASK64, 37) * k0) & MASK64
            v0 ^= (rotr64((((v0 + v2) * k0) + v3) & MASK64, 37) * k1) & MASK64
            v1 ^= (rotr64((((v1 + v3) * k1) + v2) & MASK64, 37) * k0) & MASK64
            v0 = (self._vseed + (v0 ^ v1)) & MASK64

        tail = bytes(self._buffer)
        pos = 0
        if len(tail) - pos >= 16:
            v1 = (v0 + _read(tail, pos, 8) * k2) & MASK64
            v1 = (rotr64(v1, 29) * k3) & MASK64
            v2 = (v0 + _read(tail, pos + 8, 8) * k2) & MASK64
            v2 = (rotr64(v2, 29) * k3) & MASK64
            v1 ^= (rotr64((v1 * k0) & MASK64, 21) + v2) & MASK64
            v2 ^= (rotr64((v2 * k3) & MASK64, 21) + v1) & MASK64
            v0 = (v0 + v2) & MASK64
            pos += 16
        if len(tail) - pos >= 8:
            v0 = (v0 + _read(tail, pos, 8) * k3) & MASK64
            v0 ^= (rotr64(v0, 55) * k1) & MASK64
            pos += 8
        if len(tail) - pos >= 4:
            v0 = (v0 + _read(tail, pos, 4) * k3) & MASK64
            v0 ^= (rotr64(v0, 26) * k1) & MASK64
            pos += 4
        if len(tail) - pos >= 2:
            v0 = (v0 + _read(tail, pos, 2) * k3) & MASK64
            v0 ^= (rotr64(v0, 48) * k1) & MASK64
            pos += 2
        if len(tail) - pos >= 1:
            v0 = (v0 + tail[pos] * k3) & MASK64
            v0 ^= (rotr64(v0, 37) * k1) & MASK64

        v0 ^= rotr64(v0, 28)
        v0 = (v0 * k0) & MASK64
        v0 ^= rotr64(v0, 29)
        return struct.pack("<Q", v0)


class MetroHash128Engine(_MetroBulk):
    name = "METROHASH128"
    digest_size = 16
    k0 = 0xC83A91E1
    k1 = 0x8648DBDB
    k2 = 0x7BDEC03B
    k3 = 0x2F5870A5

    def __init__(self, seed: int = 0) -> None:
        super().__init__()
        k0, k1, k2, k3 = self.k0, self.k1, self.k2, self.k3
        self._v = [
            ((seed - k0) * k3) & MASK64,
            ((seed + k1) * k2) & MASK64,
            ((seed + k0) * k2) & MASK64,
            ((seed - k1) * k3) & MASK64,
        ]

    def _finalize(self) -> bytes:
        k0, k1, k2, k3 = self.k0, self.k1, self.k2, self.k3
        v0, v1, v2, v3 = self._v

        if self._length >= self.block_size:
            v2 ^= (rotr64((((v0 + v3) * k0) + v1) & MASK64, 21) * k1) & MASK64
            v3 ^= (rotr64((((v1 + v2) * k1) + v0) & MASK64, 21) * k0) & MASK64
            v0 ^= (rotr64((((v0 + v2) * k0) + v3) & MASK64, 21) * k1) & MASK64
            v1 ^= (rotr64((((v1 + v3) * k1) + v2) & MASK64, 21) * k0) & MASK64

        tail = bytes(self._buffer)
        pos = 0
        if len(tail) - pos >= 16:
            v0 = (v0 + _read(tail, pos, 8) * k2) & MASK64
            v0 = (rotr64(v0, 33) * k3) & MASK64
            v1 = (v1 + _read(tail, pos + 8, 8) * k2) & MASK64
            v1 = (rotr64(v1, 33) * k3) & MASK64
            v0 ^= (rotr64((v0 * k2 + v1) & MASK64, 45) * k1) & MASK64
            v1 ^= (rotr64((v1 * k3 + v0) & MASK64, 45) * k0) & MASK64
            pos += 16
        if len(tail) - pos >= 8:
            v0 = (v0 + _read(tail, pos, 8) * k2) & MASK64
            v0 = (rotr64(v0, 33) * k3) & MASK64
            v0 ^= (rotr64((v0 * k2 + v1) & MASK64, 27) * k1) & MASK64
            pos += 8
        if len(tail) - pos >= 4:
            v1 = (v1 + _read(tail, pos, 4) * k2) & MASK64
            v1 = (rotr64(v1, 33) * k3) & MASK64
            v1 ^= (rotr64((v1 * k3 + v0) & MASK64, 46) * k0) & MASK64
            pos += 4
        if len(tail) - pos >= 2:
            v0 = (v0 + _read(tail, pos, 2) * k2) & MASK64
            v0 = (rotr64(v0, 33) * k3) & MASK64
            v0 ^= (rotr64((v0 * k2 + v1) & MASK64, 22) * k1) & MASK64
            pos += 2
        if len(tail) - pos >= 1:
            v1 = (v1 + tail[pos] * k2) & MASK64
            v1 = (rotr64(v1, 33) * k3) & MASK64
            v1 ^= (rotr64((v1 * k3 + v0) & MASK64, 58) * k0) & MASK64

        v0 = (v0 + rotr64((v0 * k0 + v1) & MASK64, 13)) & MASK64
        v1 = (v1 + rotr64((v1 * k1 + v0) & MASK64, 37)) & MASK64
        v0 = (v0 + rotr64((v0 * k2 + v1) & MASK64, 13)) & MASK64
        v1 = (v1 + rotr64((v1 * k3 + v0) & MASK64, 37)) & MASK64
        return struct.pack("<2Q", v0, v1)
