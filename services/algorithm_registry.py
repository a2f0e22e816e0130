"""
Static registry mapping algorithm names to their descriptors.

The table is built once at import and never mutated. Lookup is an exact,
case-insensitive match on the canonical name: there is no fuzzy or prefix matching.
Adding an algorithm means writing an engine and adding one descriptor below.
"""

import logging
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from models.algorithm import AlgorithmDescriptor, AlgorithmFamily
from services.errors import UnsupportedAlgorithmError
from services.hash_engines.bytewise_engines import BernsteinEngine, ELFEngine, ModifiedBernsteinEngine
from services.hash_engines.crc_engine import CRCEngine
from services.hash_engines.crypto_engines import (
    Blake2Engine,
    MD5Engine,
    SHA1Engine,
    SHA256Engine,
    SHA384Engine,
    SHA512Engine,
)
from services.hash_engines.engine_interface import HashEngine
from services.hash_engines.fnv_engine import FNV1aEngine, FNV1Engine
from services.hash_engines.jenkins_engine import Jenkins1Engine, Jenkins2Engine
from services.hash_engines.metrohash_engine import MetroHash128Engine, MetroHash64Engine
from services.hash_engines.murmur_engine import MurmurHash3Engine
from services.hash_engines.spooky_engine import SpookyHashV1Engine, SpookyHashV2Engine
from services.hash_engines.table_engines import BuzhashEngine, PearsonEngine
from services.hash_engines.xxhash_engine import XXHash32Engine, XXHash64Engine

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "SHA256"

_CRYPTO = AlgorithmFamily.CRYPTOGRAPHIC
_NON_CRYPTO = AlgorithmFamily.NON_CRYPTOGRAPHIC

_DESCRIPTORS = (
    # Cryptographic family
    AlgorithmDescriptor("SHA1", "SHA1", _CRYPTO, 160, 64, SHA1Engine),
    AlgorithmDescriptor("SHA256", "SHA256", _CRYPTO, 256, 64, SHA256Engine),
    AlgorithmDescriptor("SHA384", "SHA384", _CRYPTO, 384, 128, SHA384Engine),
    AlgorithmDescriptor("SHA512", "SHA512", _CRYPTO, 512, 128, SHA512Engine),
    AlgorithmDescriptor("MD5", "MD5", _CRYPTO, 128, 64, MD5Engine),
    # Non-cryptographic family
    AlgorithmDescriptor("BERNSTEINHASH", "BernsteinHash", _NON_CRYPTO, 32, 1, BernsteinEngine),
    AlgorithmDescriptor("MODIFIEDBERNSTEINHASH", "ModifiedBernsteinHash", _NON_CRYPTO, 32, 1, ModifiedBernsteinEngine),
    AlgorithmDescriptor("BLAKE2", "Blake2", _NON_CRYPTO, 512, 128, Blake2Engine),
    AlgorithmDescriptor("BUZHASH", "Buzhash", _NON_CRYPTO, 64, 1, BuzhashEngine),
    AlgorithmDescriptor("CRC", "CRC", _NON_CRYPTO, 32, 1, CRCEngine),
    AlgorithmDescriptor("ELF64", "ELF64", _NON_CRYPTO, 32, 1, ELFEngine),
    AlgorithmDescriptor("FNV1", "FNV1", _NON_CRYPTO, 64, 1, FNV1Engine),
    AlgorithmDescriptor("FNV1A", "FNV1a", _NON_CRYPTO, 64, 1, FNV1aEngine),
    AlgorithmDescriptor("JENKINS1", "Jenkins1", _NON_CRYPTO, 32, 1, Jenkins1Engine),
    AlgorithmDescriptor("JENKINS2", "Jenkins2", _NON_CRYPTO, 32, 12, Jenkins2Engine),
    AlgorithmDescriptor("MURMURHASH3", "MurmurHash3", _NON_CRYPTO, 32, 4, MurmurHash3Engine),
    AlgorithmDescriptor("PEARSON", "Pearson", _NON_CRYPTO, 8, 1, PearsonEngine),
    AlgorithmDescriptor("SPOOKYHASHV1", "SpookyHashV1", _NON_CRYPTO, 128, 96, SpookyHashV1Engine),
    AlgorithmDescriptor("SPOOKYHASHV2", "SpookyHashV2", _NON_CRYPTO, 128, 96, SpookyHashV2Engine),
    AlgorithmDescriptor("XXHASH32", "xxHash32", _NON_CRYPTO, 32, 16, XXHash32Engine),
    AlgorithmDescriptor("XXHASH64", "xxHash64", _NON_CRYPTO, 64, 32, XXHash64Engine),
    AlgorithmDescriptor("METROHASH64", "MetroHash64", _NON_CRYPTO, 64, 32, MetroHash64Engine),
    AlgorithmDescriptor("METROHASH128", "MetroHash128", _NON_CRYPTO, 128, 32, MetroHash128Engine),
)

REGISTRY: Mapping[str, AlgorithmDescriptor] = MappingProxyType({d.name: d for d in _DESCRIPTORS})


def resolve_algorithm(name: Optional[str]) -> AlgorithmDescriptor:
    """
    Resolve an algorithm name to its descriptor.

    Args:
        name (str): Algorithm name, matched case-insensitively after stripping whitespace.

    Returns:
        AlgorithmDescriptor: The registered descriptor.

    Raises:
        UnsupportedAlgorithmError: If the name is empty or not registered.
    """
    if not isinstance(name, str) or not name.strip():
        raise UnsupportedAlgorithmError(name)
    descriptor = REGISTRY.get(name.strip().upper())
    if descriptor is None:
        logger.debug(f"Rejected algorithm name: {name!r}")
        raise UnsupportedAlgorithmError(name)
    return descriptor


def create_engine(name: Optional[str]) -> HashEngine:
    """Resolve `name` and return a fresh engine for it."""
    return resolve_algorithm(name).create_engine()


def is_supported(name: Optional[str]) -> bool:
    try:
        resolve_algorithm(name)
    except UnsupportedAlgorithmError:
        return False
    return True


def list_algorithms(family: Optional[AlgorithmFamily] = None) -> List[AlgorithmDescriptor]:
    """Return registered descriptors in registration order, optionally filtered by family."""
    descriptors: Iterable[AlgorithmDescriptor] = REGISTRY.values()
    if family is not None:
        family = AlgorithmFamily(family)
        descriptors = (d for d in descriptors if d.family == family)
    return list(descriptors)
