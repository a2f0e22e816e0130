"""
Cryptographic engines backed by the interpreter's hashlib primitives.

SHA-1, the SHA-2 family, MD5 and BLAKE2b are adapted to the HashEngine contract so
that the digest pipeline can drive them exactly like the native engines.
"""
import hashlib
import logging

from services.hash_engines.engine_interface import HashEngine

logger = logging.getLogger(__name__)


class HashlibEngine(HashEngine):
    """Adapter from a hashlib constructor to the HashEngine contract."""

    hashlib_name: str = ""

    def __init__(self) -> None:
        super().__init__()
        self._context = self._new_context()
        self.digest_size = self._context.digest_size
        self.block_size = self._context.block_size

    def _new_context(self):
        return hashlib.new(self.hashlib_name)

    def _update(self, data: bytes) -> None:
        self._context.update(data)

    def _finalize(self) -> bytes:
        return self._context.digest()


class SHA1Engine(HashlibEngine):
    name = "SHA1"
    hashlib_name = "sha1"
    digest_size = 20


class SHA256Engine(HashlibEngine):
    name = "SHA256"
    hashlib_name = "sha256"
    digest_size = 32


class SHA384Engine(HashlibEngine):
    name = "SHA384"
    hashlib_name = "sha384"
    digest_size = 48


class SHA512Engine(HashlibEngine):
    name = "SHA512"
    hashlib_name = "sha512"
    digest_size = 64


class MD5Engine(HashlibEngine):
    name = "MD5"
    hashlib_name = "md5"
    digest_size = 16

    def _new_context(self):
        # FIPS builds refuse md5 unless it is declared as a non-security use.
        return hashlib.md5(usedforsecurity=False)


class Blake2Engine(HashlibEngine):
    """BLAKE2b with the full 512-bit digest and no key."""

    name = "BLAKE2"
    hashlib_name = "blake2b"
    digest_size = 64

    def _new_context(self):
        return hashlib.blake2b(digest_size=64)
