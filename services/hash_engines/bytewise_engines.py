"""
Simple byte-at-a-time 32-bit hashes: Bernstein, modified Bernstein and ELF.

Both Bernstein variants start from 0 and multiply the running hash by 33 per byte.
They only differ in how the byte is combined afterwards, so each engine supplies a
combine operator to the shared multiply step.
"""
import logging
import operator

from services.hash_engines.bitops import MASK32
from services.hash_engines.engine_interface import HashEngine

logger = logging.getLogger(__name__)


class _Times33Engine(HashEngine):
    digest_size = 4
    combine = staticmethod(operator.add)

    def __init__(self) -> None:
        super().__init__()
        self._h = 0

    def _update(self, data: bytes) -> None:
        h = self._h
        combine = self.combine
        for byte in data:
            h = combine((h * 33) & MASK32, byte) & MASK32
        self._h = h

    def _finalize(self) -> bytes:
        return self._h.to_bytes(4, "big")


class BernsteinEngine(_Times33Engine):
    """h = 33 * h + byte"""
    name = "BERNSTEINHASH"
    combine = staticmethod(operator.add)


class ModifiedBernsteinEngine(_Times33Engine):
    """h = 33 * h ^ byte"""
    name = "MODIFIEDBERNSTEINHASH"
    combine = staticmethod(operator.xor)


class ELFEngine(HashEngine):
    """
    The PJW/ELF hash used for ELF symbol tables.

    Registered as ELF64 after the name it carries in the hash library the algorithm
    set comes from; the output is the classic 32-bit value.
    """
    name = "ELF64"
    digest_size = 4

    def __init__(self) -> None:
        super().__init__()
        self._h = 0

    def _update(self, data: bytes) -> None:
        h = self._h
        for byte in data:
            h = ((h << 4) + byte) & MASK32
            high = h & 0xF0000000
            if high:
                h ^= high >> 24
            h &= ~high & MASK32
        self._h = h

    def _finalize(self) -> bytes:
        return self._h.to_bytes(4, "big")
