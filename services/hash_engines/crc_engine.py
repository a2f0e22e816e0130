"""
CRC engine following the Rocksoft parameter model.

The registered "CRC" algorithm is CRC-32 (the ISO-HDLC variant used by zip, PNG and
Ethernet) and is computed by binascii.crc32. Other common variants are table-driven
presets for library callers.
"""
import binascii
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional, Tuple

from services.errors import UnsupportedAlgorithmError
from services.hash_engines.engine_interface import HashEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CRCParameters:
    """
    Rocksoft model description of a CRC variant.

    Attributes:
        name (str): Catalogue name of the variant.
        width (int): Register width in bits (8..64).
        poly (int): Generator polynomial, unreflected, without the top bit.
        init (int): Initial register value, unreflected.
        refin (bool): Whether input bytes are processed least-significant bit first.
        refout (bool): Whether the final register is reflected before the xor.
        xorout (int): Value xored into the final register.
        check (int): CRC of the ASCII string "123456789".
    """
    name: str
    width: int
    poly: int
    init: int
    refin: bool
    refout: bool
    xorout: int
    check: int

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1


CRC_8_SMBUS = CRCParameters("CRC-8/SMBUS", 8, 0x07, 0x00, False, False, 0x00, 0xF4)
CRC_16_ARC = CRCParameters("CRC-16/ARC", 16, 0x8005, 0x0000, True, True, 0x0000, 0xBB3D)
CRC_16_IBM_3740 = CRCParameters("CRC-16/IBM-3740", 16, 0x1021, 0xFFFF, False, False, 0x0000, 0x29B1)
CRC_16_XMODEM = CRCParameters("CRC-16/XMODEM", 16, 0x1021, 0x0000, False, False, 0x0000, 0x31C3)
CRC_32 = CRCParameters("CRC-32", 32, 0x04C11DB7, 0xFFFFFFFF, True, True, 0xFFFFFFFF, 0xCBF43926)
CRC_32C = CRCParameters("CRC-32C", 32, 0x1EDC6F41, 0xFFFFFFFF, True, True, 0xFFFFFFFF, 0xE3069283)
CRC_32_BZIP2 = CRCParameters("CRC-32/BZIP2", 32, 0x04C11DB7, 0xFFFFFFFF, False, False, 0xFFFFFFFF, 0xFC891918)
CRC_64_ECMA_182 = CRCParameters(
    "CRC-64/ECMA-182", 64, 0x42F0E1EBA9EA3693, 0x0, False, False, 0x0, 0x6C40DF5F0B497347
)
CRC_64_XZ = CRCParameters(
    "CRC-64/XZ", 64, 0x42F0E1EBA9EA3693, 0xFFFFFFFFFFFFFFFF, True, True,
    0xFFFFFFFFFFFFFFFF, 0x995DC9BBDF1939FA,
)

CRC_PRESETS: Dict[str, CRCParameters] = {
    preset.name: preset
    for preset in (
        CRC_8_SMBUS,
        CRC_16_ARC,
        CRC_16_IBM_3740,
        CRC_16_XMODEM,
        CRC_32,
        CRC_32C,
        CRC_32_BZIP2,
        CRC_64_ECMA_182,
        CRC_64_XZ,
    )
}


def crc_preset(name: str) -> CRCParameters:
    """
    Look up a CRC preset by catalogue name (case-insensitive).

    Raises:
        UnsupportedAlgorithmError: If no preset carries that name.
    """
    wanted = (name or "").strip().upper()
    for preset_name, preset in CRC_PRESETS.items():
        if preset_name.upper() == wanted:
            return preset
    raise UnsupportedAlgorithmError(name, f"Unknown CRC preset: {name!r}")


def reflect(value: int, width: int) -> int:
    result = 0
    for _ in range(width):
        result = (result << 1) | (value & 1)
        value >>= 1
    return result


@lru_cache(maxsize=None)
def _crc_table(width: int, poly: int, reflected: bool) -> Tuple[int, ...]:
    mask = (1 << width) - 1
    table = []
    if reflected:
        rpoly = reflect(poly, width)
        for byte in range(256):
            crc = byte
            for _ in range(8):
                crc = (crc >> 1) ^ rpoly if crc & 1 else crc >> 1
            table.append(crc)
    else:
        top = 1 << (width - 1)
        for byte in range(256):
            crc = byte << (width - 8)
            for _ in range(8):
                crc = ((crc << 1) ^ poly) if crc & top else (crc << 1)
                crc &= mask
            table.append(crc)
    return tuple(table)


class CRCEngine(HashEngine):
    """
    CRC of any width from 8 to 64 bits, configured by a CRCParameters preset.

    CRC-32 runs on binascii.crc32; the other presets use a lookup table.
    """

    name = "CRC"

    def __init__(self, parameters: Optional[CRCParameters] = None) -> None:
        super().__init__()
        self.parameters = parameters or CRC_32
        if not 8 <= self.parameters.width <= 64:
            raise ValueError(f"CRC width must be between 8 and 64 bits, got {self.parameters.width}")
        self._native = self.parameters is CRC_32
        if not self._native:
            self.name = self.parameters.name
        self.digest_size = (self.parameters.width + 7) // 8
        if self._native:
            self._table = None
            self._crc = 0
            return
        self._table = _crc_table(self.parameters.width, self.parameters.poly, self.parameters.refin)
        init = self.parameters.init & self.parameters.mask
        self._crc = reflect(init, self.parameters.width) if self.parameters.refin else init

    def _update(self, data: bytes) -> None:
        if self._native:
            self._crc = binascii.crc32(data, self._crc)
            return
        table = self._table
        crc = self._crc
        if self.parameters.refin:
            for byte in data:
                crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)
        else:
            shift = self.parameters.width - 8
            mask = self.parameters.mask
            for byte in data:
                crc = table[((crc >> shift) ^ byte) & 0xFF] ^ ((crc << 8) & mask)
        self._crc = crc

    def _finalize(self) -> bytes:
        if self._native:
            return (self._crc & 0xFFFFFFFF).to_bytes(4, "big")
        crc = self._crc
        if self.parameters.refin != self.parameters.refout:
            crc = reflect(crc, self.parameters.width)
        crc = (crc ^ self.parameters.xorout) & self.parameters.mask
        return crc.to_bytes(self.digest_size, "big")
