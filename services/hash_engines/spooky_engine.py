"""
SpookyHash V1 and V2 (Bob Jenkins), 128-bit output with both seeds set to 0.

Messages shorter than 192 bytes take the short path (4-word state, 32-byte rounds).
Longer messages are absorbed in 96-byte blocks into a 12-word state. The versions
differ in how the final partial block and the message length are folded in:

* V1 assigns the length into ``d`` on the short path and mixes the padded final block
  with Mix() before the three EndPartial rounds.
* V2 adds the length into ``d`` and folds the padded final block into the state
  inside End().

The digest is hash1 followed by hash2, each written big-endian.
"""
import logging
import struct
from typing import List

from services.hash_engines.bitops import MASK64, rotl64
from services.hash_engines.engine_interface import BlockHashEngine

logger = logging.getLogger(__name__)

SC_CONST = 0xDEADBEEFDEADBEEF
SC_NUM_VARS = 12
SC_BLOCK_SIZE = SC_NUM_VARS * 8
SC_BUF_SIZE = 2 * SC_BLOCK_SIZE

_MIX_ROTATIONS = (11, 32, 43, 31, 17, 28, 39, 57, 55, 54, 22, 46)
_END_ROTATIONS = (44, 15, 34, 21, 38, 33, 10, 13, 38, 53, 42, 54)


def _mix(data, s: List[int]) -> None:
    for i in range(SC_NUM_VARS):
        s[i] = (s[i] + data[i]) & MASK64
        s[(i + 2) % 12] ^= s[(i + 10) % 12]
        s[(i + 11) % 12] ^= s[i]
        s[i] = rotl64(s[i], _MIX_ROTATIONS[i])
        s[(i + 11) % 12] = (s[(i + 11) % 12] + s[(i + 1) % 12]) & MASK64


def _end_partial(h: List[int]) -> None:
    for i in range(SC_NUM_VARS):
        a = (i + 11) % 12
        h[a] = (h[a] + h[(i + 1) % 12]) & MASK64
        h[(i + 2) % 12] ^= h[a]
        h[(i + 1) % 12] = rotl64(h[(i + 1) % 12], _END_ROTATIONS[i])


def _short_mix(h0: int, h1: int, h2: int, h3: int):
    h2 = rotl64(h2, 50); h2 = (h2 + h3) & MASK64; h0 ^= h2
    h3 = rotl64(h3, 52); h3 = (h3 + h0) & MASK64; h1 ^= h3
    h0 = rotl64(h0, 30); h0 = (h0 + h1) & MASK64; h2 ^= h0
    h1 = rotl64(h1, 41); h1 = (h1 + h2) & MASK64; h3 ^= h1
    h2 = rotl64(h2, 54); h2 = (h2 + h3) & MASK64; h0 ^= h2
    h3 = rotl64(h3, 48); h3 = (h3 + h0) & MASK64; h1 ^= h3
    h0 = rotl64(h0, 38); h0 = (h0 + h1) & MASK64; h2 ^= h0
    h1 = rotl64(h1, 37); h1 = (h1 + h2) & MASK64; h3 ^= h1
    h2 = rotl64(h2, 62); h2 = (h2 + h3) & MASK64; h0 ^= h2
    h3 = rotl64(h3, 34); h3 = (h3 + h0) & MASK64; h1 ^= h3
    h0 = rotl64(h0, 5); h0 = (h0 + h1) & MASK64; h2 ^= h0
    h1 = rotl64(h1, 36); h1 = (h1 + h2) & MASK64; h3 ^= h1
    return h0, h1, h2, h3


def _short_end(h0: int, h1: int, h2: int, h3: int):
    h3 ^= h2; h2 = rotl64(h2, 15); h3 = (h3 + h2) & MASK64
    h0 ^= h3; h3 = rotl64(h3, 52); h0 = (h0 + h3) & MASK64
    h1 ^= h0; h0 = rotl64(h0, 26); h1 = (h1 + h0) & MASK64
    h2 ^= h1; h1 = rotl64(h1, 51); h2 = (h2 + h1) & MASK64
    h3 ^= h2; h2 = rotl64(h2, 28); h3 = (h3 + h2) & MASK64
    h0 ^= h3; h3 = rotl64(h3, 9); h0 = (h0 + h3) & MASK64
    h1 ^= h0; h0 = rotl64(h0, 47); h1 = (h1 + h0) & MASK64
    h2 ^= h1; h1 = rotl64(h1, 54); h2 = (h2 + h1) & MASK64
    h3 ^= h2; h2 = rotl64(h2, 32); h3 = (h3 + h2) & MASK64
    h0 ^= h3; h3 = rotl64(h3, 25); h0 = (h0 + h3) & MASK64
    h1 ^= h0; h0 = rotl64(h0, 63); h1 = (h1 + h0) & MASK64
    return h0, h1, h2, h3


class _SpookyEngine(BlockHashEngine):
    block_size = SC_BLOCK_SIZE
    digest_size = 16
    # V1 assigns the length into d on the short path, V2 adds it.
    short_length_assigns = False

    def __init__(self, seed1: int = 0, seed2: int = 0) -> None:
        super().__init__()
        self.seed1 = seed1 & MASK64
        self.seed2 = seed2 & MASK64
        self._state = [self.seed1, self.seed2, SC_CONST] * 4

    def _blocks_ready(self) -> bool:
        # Below SC_BUF_SIZE the message may still end up on the short path.
        return self._length >= SC_BUF_SIZE

    def _compress(self, blocks: bytes) -> None:
        state = self._state
        for words in struct.iter_unpack("<12Q", blocks):
            _mix(words, state)

    def _finalize(self) -> bytes:
        if self._length < SC_BUF_SIZE:
            h1, h2 = self._short(bytes(self._buffer))
        else:
            h1, h2 = self._long_final()
        return struct.pack(">2Q", h1, h2)

    def _short(self, message: bytes):
        length = len(message)
        remainder = length % 32
        a = self.seed1
        b = self.seed2
        c = SC_CONST
        d = SC_CONST
        pos = 0

        if length > 15:
            for _ in range(length // 32):
                w0, w1, w2, w3 = struct.unpack_from("<4Q", message, pos)
                c = (c + w0) & MASK64
                d = (d + w1) & MASK64
                a, b, c, d = _short_mix(a, b, c, d)
                a = (a + w2) & MASK64
                b = (b + w3) & MASK64
                pos += 32
            if remainder >= 16:
                w0, w1 = struct.unpack_from("<2Q", message, pos)
                c = (c + w0) & MASK64
                d = (d + w1) & MASK64
                a, b, c, d = _short_mix(a, b, c, d)
                pos += 16
                remainder -= 16

        if self.short_length_assigns:
            d = (length << 56) & MASK64
        else:
            d = (d + (length << 56)) & MASK64

        tail = message[pos:pos + remainder]
        if remainder >= 8:
            # c takes the first eight bytes, d whatever is left.
            c = (c + int.from_bytes(tail[:8], "little")) & MASK64
            d = (d + int.from_bytes(tail[8:], "little")) & MASK64
        elif remainder > 0:
            c = (c + int.from_bytes(tail, "little")) & MASK64
        else:
            c = (c + SC_CONST) & MASK64
            d = (d + SC_CONST) & MASK64

        a, b, c, d = _short_end(a, b, c, d)
        return a, b

    def _final_block(self) -> tuple:
        remainder = len(self._buffer)
        block = bytearray(self._buffer)
        block.extend(b"\x00" * (SC_BLOCK_SIZE - remainder))
        block[SC_BLOCK_SIZE - 1] = remainder
        return struct.unpack("<12Q", bytes(block))

    def _long_final(self):
        raise NotImplementedError


class SpookyHashV1Engine(_SpookyEngine):
    name = "SPOOKYHASHV1"
    short_length_assigns = True

    def _long_final(self):
        h = list(self._state)
        _mix(self._final_block(), h)
        for _ in range(3):
            _end_partial(h)
        return h[0], h[1]


class SpookyHashV2Engine(_SpookyEngine):
    name = "SPOOKYHASHV2"

    def _long_final(self):
        h = list(self._state)
        for i, word in enumerate(self._final_block()):
            h[i] = (h[i] + word) & MASK64
        for _ in range(3):
            _end_partial(h)
        return h[0], h[1]
