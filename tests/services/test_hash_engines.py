import binascii
import hashlib
import random
import pytest

from services.algorithm_registry import REGISTRY, create_engine
from services.errors import EngineFinalizedError, UnsupportedAlgorithmError
from services.hash_engines.bitops import rotl32, rotl64, rotr64, splitmix64
from services.hash_engines.bytewise_engines import BernsteinEngine, ELFEngine, ModifiedBernsteinEngine
from services.hash_engines.crc_engine import CRC_32, CRC_PRESETS, CRCEngine, CRCParameters, crc_preset
from services.hash_engines.crypto_engines import MD5Engine, SHA1Engine, SHA256Engine
from services.hash_engines.fnv_engine import FNV1aEngine, FNV1Engine
from services.hash_engines.jenkins_engine import Jenkins1Engine, Jenkins2Engine
from services.hash_engines.metrohash_engine import MetroHash128Engine, MetroHash64Engine
from services.hash_engines.murmur_engine import MurmurHash3Engine
from services.hash_engines.spooky_engine import SpookyHashV1Engine, SpookyHashV2Engine
from services.hash_engines.table_engines import BUZHASH_TABLE, PEARSON_TABLE, BuzhashEngine, PearsonEngine
from services.hash_engines.xxhash_engine import XXHash32Engine, XXHash64Engine

ALL_ALGORITHMS = sorted(REGISTRY)
CHECK_INPUT = b"123456789"


def one_shot(engine, data):
    return engine.update(data).hexdigest()


def fed_in_pieces(engine, data, sizes):
    """Feed `data` to `engine` in consecutive pieces of the given sizes (cycling)."""
    offset = 0
    i = 0
    while offset < len(data):
        size = sizes[i % len(sizes)]
        engine.update(data[offset:offset + size])
        offset += size
        i += 1
    return engine.hexdigest()


# ────────────────────────────────────────────────
# Bit helpers
# ────────────────────────────────────────────────

def test_rotations_wrap_around():
    assert rotl32(0x80000000, 1) == 1
    assert rotl64(0x8000000000000000, 1) == 1
    assert rotr64(1, 1) == 0x8000000000000000
    assert rotr64(rotl64(0x0123456789ABCDEF, 17), 17) == 0x0123456789ABCDEF


def test_splitmix64_known_output():
    assert splitmix64(0, 1) == [0xE220A8397B1DCDAF]
    assert splitmix64(42, 3) == splitmix64(42, 3)


# ────────────────────────────────────────────────
# Contract shared by every engine
# ────────────────────────────────────────────────

@pytest.mark.parametrize("name", ALL_ALGORITHMS)
def test_empty_input_has_declared_length(name):
    descriptor = REGISTRY[name]
    digest = descriptor.create_engine().hexdigest()
    assert len(digest) == descriptor.hex_length
    assert digest == digest.upper()


@pytest.mark.parametrize("name", ALL_ALGORITHMS)
def test_update_after_finalize_raises(name):
    engine = create_engine(name)
    engine.update(b"abc")
    first = engine.finalize()
    with pytest.raises(EngineFinalizedError):
        engine.update(b"more")
    # Finalizing again returns the same digest
    assert engine.finalize() == first
    assert engine.digest() == first


def test_engine_finalized_error_is_a_runtime_error():
    engine = SHA256Engine()
    engine.hexdigest()
    with pytest.raises(RuntimeError):
        engine.update(b"x")


@pytest.mark.parametrize("name", ALL_ALGORITHMS)
def test_empty_updates_are_ignored(name):
    plain = one_shot(create_engine(name), b"payload")
    engine = create_engine(name)
    engine.update(b"")
    engine.update(b"pay")
    engine.update(bytearray())
    engine.update(memoryview(b"load"))
    assert engine.hexdigest() == plain


@pytest.mark.parametrize("name", ALL_ALGORITHMS)
def test_chunking_never_changes_digest(name):
    data = bytes(range(256)) * 3 + b"tail"
    expected = one_shot(create_engine(name), data)
    for sizes in ([1], [3], [7], [13], [31], [64], [95, 97], [191, 1, 1], [500]):
        assert fed_in_pieces(create_engine(name), data, sizes) == expected, sizes

    rng = random.Random(name)
    sizes = [rng.randint(1, 120) for _ in range(20)]
    assert fed_in_pieces(create_engine(name), data, sizes) == expected


@pytest.mark.parametrize("name", ALL_ALGORITHMS)
@pytest.mark.parametrize("length", [1, 15, 16, 31, 32, 95, 96, 97, 191, 192, 193, 287, 288])
def test_byte_at_a_time_matches_one_shot(name, length):
    data = bytes((i * 7 + 3) & 0xFF for i in range(length))
    assert fed_in_pieces(create_engine(name), data, [1]) == one_shot(create_engine(name), data)


@pytest.mark.parametrize("name", [n for n in ALL_ALGORITHMS if REGISTRY[n].output_bits >= 32])
def test_single_bit_flip_changes_digest(name):
    rng = random.Random(2024)
    trials = 40
    changed = 0
    for _ in range(trials):
        data = bytearray(rng.getrandbits(8) for _ in range(64))
        original = one_shot(create_engine(name), bytes(data))
        position = rng.randrange(len(data) * 8)
        data[position // 8] ^= 1 << (position % 8)
        if one_shot(create_engine(name), bytes(data)) != original:
            changed += 1
    assert changed >= trials * 0.95


# ────────────────────────────────────────────────
# Cryptographic engines
# ────────────────────────────────────────────────

def test_sha256_known_vectors():
    assert SHA256Engine().hexdigest() == "E3B0C44298FC1C149AFBF4C8996FB92427AE41E4649B934CA495991B7852B855"
    assert one_shot(SHA256Engine(), b"Hello world") == \
        "64EC88CA00B268E5BA1A35678A1B5316D212F4F366B2477232534A8AECA37F3C"


def test_sha1_and_md5_known_vectors():
    assert SHA1Engine().hexdigest() == "DA39A3EE5E6B4B0D3255BFEF95601890AFD80709"
    assert one_shot(SHA1Engine(), b"abc") == "A9993E364706816ABA3E25717850C26C9CD0D89D"
    assert MD5Engine().hexdigest() == "D41D8CD98F00B204E9800998ECF8427E"
    assert one_shot(MD5Engine(), b"abc") == "900150983CD24FB0D6963F7D28E17F72"


def test_sha384_and_sha512_empty_digests():
    assert create_engine("SHA384").hexdigest() == (
        "38B060A751AC96384CD9327EB1B1E36A21FDB71114BE07434C0CC7BF63F6E1DA"
        "274EDEBFE76F65FBD51AD2F14898B95B"
    )
    assert create_engine("SHA512").hexdigest() == (
        "CF83E1357EEFB8BDF1542850D66D8007D620E4050B5715DC83F4A921D36CE9CE"
        "47D0D13C5D85F2B0FF8318D2877EEC2F63B931BD47417A81A538327AF927DA3E"
    )


def test_blake2_empty_digest():
    assert create_engine("BLAKE2").hexdigest() == (
        "786A02F742015903C6C6FD852552D272912F4740E15847618A86E217F71F5419"
        "D25E1031AFEE585313896444934EB04B903A685B1448B755D56F701AFE9BE2CE"
    )


@pytest.mark.parametrize("name, reference", [
    ("SHA1", hashlib.sha1),
    ("SHA256", hashlib.sha256),
    ("SHA384", hashlib.sha384),
    ("SHA512", hashlib.sha512),
    ("BLAKE2", lambda: hashlib.blake2b(digest_size=64)),
])
def test_hashlib_backed_engines_match_hashlib(name, reference):
    data = b"The quick brown fox jumps over the lazy dog" * 5
    expected = reference()
    expected.update(data)
    assert one_shot(create_engine(name), data) == expected.hexdigest().upper()


# ────────────────────────────────────────────────
# CRC
# ────────────────────────────────────────────────

def test_crc_default_is_crc32():
    engine = CRCEngine()
    assert engine.name == "CRC"
    assert engine.parameters is CRC_32
    assert one_shot(engine, CHECK_INPUT) == "CBF43926"
    assert CRCEngine().hexdigest() == "00000000"


@pytest.mark.parametrize("preset", list(CRC_PRESETS.values()), ids=list(CRC_PRESETS))
def test_crc_presets_match_check_values(preset):
    engine = CRCEngine(preset)
    digest = engine.update(CHECK_INPUT).digest()
    assert len(digest) == (preset.width + 7) // 8
    assert int.from_bytes(digest, "big") == preset.check


def test_crc_preset_lookup_is_case_insensitive():
    assert crc_preset("crc-32c").check == 0xE3069283
    with pytest.raises(UnsupportedAlgorithmError):
        crc_preset("CRC-7/NOPE")


def test_crc32_matches_binascii_across_chunks():
    rng = random.Random(2024)
    data = bytes(rng.getrandbits(8) for _ in range(10_000))
    expected = format(binascii.crc32(data) & 0xFFFFFFFF, "08X")

    assert one_shot(CRCEngine(), data) == expected
    assert fed_in_pieces(CRCEngine(), data, [1, 63, 4096, 7]) == expected


def test_crc32_uses_binascii(mocker):
    spy = mocker.spy(binascii, "crc32")
    CRCEngine().update(CHECK_INPUT).update(b"").update(b"more").finalize()
    assert spy.call_count == 2
    # Other presets stay on the lookup table
    spy.reset_mock()
    CRCEngine(crc_preset("CRC-32C")).update(CHECK_INPUT).finalize()
    spy.assert_not_called()


def test_crc_rejects_unsupported_width():
    narrow = CRCParameters("CRC-5/USB", 5, 0x05, 0x1F, True, True, 0x1F, 0x19)
    with pytest.raises(ValueError):
        CRCEngine(narrow)


# ────────────────────────────────────────────────
# Native non-cryptographic engines
# ────────────────────────────────────────────────

@pytest.mark.parametrize("engine_cls, bits, data, expected", [
    (FNV1aEngine, 32, b"", "811C9DC5"),
    (FNV1aEngine, 32, b"a", "E40C292C"),
    (FNV1aEngine, 32, b"foobar", "BF9CF968"),
    (FNV1Engine, 32, b"a", "050C5D7E"),
    (FNV1Engine, 32, b"foobar", "31F0B262"),
    (FNV1aEngine, 64, b"", "CBF29CE484222325"),
    (FNV1aEngine, 64, b"a", "AF63DC4C8601EC8C"),
    (FNV1aEngine, 64, b"foobar", "85944171F73967E8"),
    (FNV1Engine, 64, b"", "CBF29CE484222325"),
    (FNV1Engine, 64, b"a", "AF63BD4C8601B7BE"),
    (FNV1Engine, 64, b"foobar", "340D8765A4DDA9C2"),
])
def test_fnv_vectors(engine_cls, bits, data, expected):
    assert one_shot(engine_cls(bits=bits), data) == expected


def test_fnv_rejects_unknown_width():
    with pytest.raises(ValueError):
        FNV1Engine(bits=128)


@pytest.mark.parametrize("data, seed, expected", [
    (b"", 0, "00000000"),
    (b"", 1, "514E28B7"),
    (b"", 0xFFFFFFFF, "81F16F39"),
    (b"\x00\x00\x00\x00", 0, "2362F9DE"),
    (b"foo", 0, "F6A5C420"),
    (b"aaaa", 0x9747B28C, "5A97808A"),
    (b"Hello, world!", 0x9747B28C, "24884CBA"),
    (b"The quick brown fox jumps over the lazy dog", 0x9747B28C, "2FA826CD"),
])
def test_murmurhash3_vectors(data, seed, expected):
    assert one_shot(MurmurHash3Engine(seed=seed), data) == expected


@pytest.mark.parametrize("engine_cls, data, expected", [
    (XXHash32Engine, b"", "02CC5D05"),
    (XXHash32Engine, b"a", "550D7456"),
    (XXHash32Engine, b"abc", "32D153FF"),
    (XXHash64Engine, b"", "EF46DB3751D8E999"),
    (XXHash64Engine, b"a", "D24EC4F1A98C6E5B"),
    (XXHash64Engine, b"abc", "44BC2CF5AD770999"),
])
def test_xxhash_vectors(engine_cls, data, expected):
    assert one_shot(engine_cls(), data) == expected


def test_jenkins_one_at_a_time_vectors():
    assert one_shot(Jenkins1Engine(), b"a") == "CA2E9442"
    assert one_shot(Jenkins1Engine(), b"The quick brown fox jumps over the lazy dog") == "519E91F5"
    assert Jenkins1Engine().hexdigest() == "00000000"


def test_jenkins2_empty_input():
    assert Jenkins2Engine().hexdigest() == "BD49D10D"


def test_jenkins2_initval_changes_digest():
    data = b"lookup2 keeps twelve byte blocks"
    assert one_shot(Jenkins2Engine(), data) != one_shot(Jenkins2Engine(initval=1), data)


def test_bernstein_variants():
    assert BernsteinEngine().hexdigest() == "00000000"
    assert ModifiedBernsteinEngine().hexdigest() == "00000000"
    assert one_shot(BernsteinEngine(), b"a") == "00000061"
    assert one_shot(BernsteinEngine(), b"abc") == "0001A9A6"
    assert one_shot(ModifiedBernsteinEngine(), b"abc") == "0001A920"


def test_elf_hash():
    assert ELFEngine().hexdigest() == "00000000"
    assert one_shot(ELFEngine(), b"a") == "00000061"
    assert one_shot(ELFEngine(), b"abc") == "00006783"
    # The top nibble is always folded away
    long_digest = int(one_shot(ELFEngine(), b"a fairly long symbol name"), 16)
    assert long_digest & 0xF0000000 == 0


def test_pearson_table_is_a_permutation():
    assert sorted(PEARSON_TABLE) == list(range(256))
    assert PearsonEngine().hexdigest() == "00"
    assert PearsonEngine().update(b"a").digest() == bytes((PEARSON_TABLE[0x61],))


def test_pearson_uses_published_table():
    assert PEARSON_TABLE[:8] == (251, 175, 119, 215, 81, 14, 79, 191)
    assert PEARSON_TABLE[-5:] == (68, 6, 169, 234, 151)
    assert one_shot(PearsonEngine(), b"\x00") == "FB"
    assert one_shot(PearsonEngine(), b"a") == "71"
    assert one_shot(PearsonEngine(), b"abc") == "05"
    assert one_shot(PearsonEngine(), CHECK_INPUT) == "13"


def test_buzhash_single_byte_is_table_entry():
    assert len(BUZHASH_TABLE) == 256
    assert BuzhashEngine().hexdigest() == "0000000000000000"
    assert BuzhashEngine().update(b"a").digest() == BUZHASH_TABLE[0x61].to_bytes(8, "big")


def test_spooky_versions_differ():
    for length in (0, 5, 100, 191, 192, 300):
        data = bytes(range(256))[:length] if length <= 256 else bytes(range(256)) + bytes(length - 256)
        v1 = one_shot(SpookyHashV1Engine(), data)
        v2 = one_shot(SpookyHashV2Engine(), data)
        assert len(v1) == len(v2) == 32
        if length:
            assert v1 != v2, length


def test_spooky_seeds_change_digest():
    data = b"spooky" * 10
    assert one_shot(SpookyHashV2Engine(), data) != one_shot(SpookyHashV2Engine(seed1=1, seed2=1), data)


def _spooky_hash32(engine, length):
    # Reference message: byte i is (i + 128) mod 256; Hash32 is the low word of hash1
    message = bytes((i + 128) & 0xFF for i in range(length))
    return int(one_shot(engine, message)[:16], 16) & 0xFFFFFFFF


@pytest.mark.parametrize("engine_cls, expected", [
    (SpookyHashV1Engine, [0xA24295EC, 0xFE3A05CE, 0x257FD8EF, 0x3ACD5217]),
    (SpookyHashV2Engine, [0x6BF50919, 0x70DE1D26, 0xA2B37298, 0x35BC5FBF]),
])
def test_spooky_reference_results(engine_cls, expected):
    assert [_spooky_hash32(engine_cls(), length) for length in range(len(expected))] == expected


def test_spooky_empty_hash1():
    assert SpookyHashV1Engine().hexdigest()[:16] == "7A65FEC8A24295EC"
    assert SpookyHashV2Engine().hexdigest()[:16] == "232706FC6BF50919"


METROHASH_TEST_STRING = b"012345678901234567890123456789012345678901234567890123456789012"


def test_metrohash_reference_vectors():
    assert one_shot(MetroHash64Engine(), METROHASH_TEST_STRING) == "6B753DAE06704BAD"
    assert one_shot(MetroHash128Engine(), METROHASH_TEST_STRING) == "C77CE2BFA4ED9F9B0548B2AC5074A297"


def test_metrohash_variants_and_seed():
    data = METROHASH_TEST_STRING
    h64 = one_shot(MetroHash64Engine(), data)
    h128 = one_shot(MetroHash128Engine(), data)
    assert len(h64) == 16
    assert len(h128) == 32
    assert one_shot(MetroHash64Engine(seed=1), data) != h64
    assert one_shot(MetroHash128Engine(seed=1), data) != h128


def test_repr_reports_state():
    engine = create_engine("crc")
    assert "open" in repr(engine)
    engine.finalize()
    assert "finalized" in repr(engine)
