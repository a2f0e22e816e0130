"""
Algorithm descriptor model: the static metadata the registry holds for each algorithm.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from services.hash_engines.engine_interface import HashEngine


class AlgorithmFamily(str, Enum):
    """Family an algorithm belongs to."""
    CRYPTOGRAPHIC = "cryptographic"
    NON_CRYPTOGRAPHIC = "non_cryptographic"


@dataclass(frozen=True)
class AlgorithmDescriptor:
    """
    Immutable description of a registered hash algorithm.

    Attributes:
        name (str): Canonical uppercase name, matched case-insensitively.
        display_name (str): Conventional spelling of the name (e.g. "xxHash64").
        family (AlgorithmFamily): Cryptographic or non-cryptographic.
        output_bits (int): Digest size in bits.
        block_size (int): Internal block size in bytes (1 for bytewise engines).
        construct (Callable[[], HashEngine]): Factory for a fresh engine instance.
    """
    name: str
    display_name: str
    family: AlgorithmFamily
    output_bits: int
    block_size: int
    construct: Callable[[], "HashEngine"]

    @property
    def hex_length(self) -> int:
        return self.output_bits // 4

    def create_engine(self) -> "HashEngine":
        return self.construct()
