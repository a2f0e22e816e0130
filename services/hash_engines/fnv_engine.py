"""
Fowler-Noll-Vo hashes.

FNV-1 multiplies by the FNV prime and then xors in each byte; FNV-1a xors first and
multiplies afterwards. Both support the 32- and 64-bit parameter sets; the registry
uses the 64-bit ones.
"""
import logging

from services.hash_engines.engine_interface import HashEngine

logger = logging.getLogger(__name__)

FNV_PARAMETERS = {
    32: (0x811C9DC5, 0x01000193),
    64: (0xCBF29CE484222325, 0x00000100000001B3),
}


class _FNVEngine(HashEngine):
    def __init__(self, bits: int = 64) -> None:
        super().__init__()
        if bits not in FNV_PARAMETERS:
            raise ValueError(f"FNV supports {sorted(FNV_PARAMETERS)} bit widths, got {bits}")
        self.bits = bits
        self.digest_size = bits // 8
        self._mask = (1 << bits) - 1
        self._hash, self._prime = FNV_PARAMETERS[bits]

    def _finalize(self) -> bytes:
        return self._hash.to_bytes(self.digest_size, "big")


class FNV1Engine(_FNVEngine):
    name = "FNV1"

    def _update(self, data: bytes) -> None:
        h, prime, mask = self._hash, self._prime, self._mask
        for byte in data:
            h = ((h * prime) & mask) ^ byte
        self._hash = h


class FNV1aEngine(_FNVEngine):
    name = "FNV1A"

    def _update(self, data: bytes) -> None:
        h, prime, mask = self._hash, self._prime, self._mask
        for byte in data:
            h = ((h ^ byte) * prime) & mask
        self._hash = h
