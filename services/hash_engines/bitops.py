"""
Fixed-width integer helpers shared by the native hash engines.
"""
from typing import List

MASK8 = 0xFF
MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF


def rotl32(value: int, count: int) -> int:
    value &= MASK32
    return ((value << count) | (value >> (32 - count))) & MASK32


def rotl64(value: int, count: int) -> int:
    value &= MASK64
    return ((value << count) | (value >> (64 - count))) & MASK64


def rotr64(value: int, count: int) -> int:
    value &= MASK64
    return ((value >> count) | (value << (64 - count))) & MASK64


def splitmix64(seed: int, count: int) -> List[int]:
    """
    Return `count` successive outputs of the SplitMix64 generator.

    Used to derive the fixed substitution tables of the table-driven engines, so the
    tables are reproducible without shipping 256 literal constants each.
    """
    state = seed & MASK64
    values = []
    for _ in range(count):
        state = (state + 0x9E3779B97F4A7C15) & MASK64
        z = state
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
        values.append(z ^ (z >> 31))
    return values
