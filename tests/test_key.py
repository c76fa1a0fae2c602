from concurrent.futures import ThreadPoolExecutor

import pytest

from aescmac import (
    Block,
    CMACKey,
    InvalidBlockLengthError,
    InvalidKeyLengthError,
    derive_subkeys,
    encrypt_block,
    expand_key,
)

NIST_KEY = "2b7e151628aed2a6abf7158809cf4f3c"


def test_subkeys_rfc4493():
    """
    Subkey generation example from RFC 4493, section 4 (same key as NIST SP 800-38B, appendix D.1).
    """
    k1, k2 = derive_subkeys(expand_key(NIST_KEY))

    assert k1 == bytes.fromhex("fbeed618357133667c85e08f7236a8de")
    assert k2 == bytes.fromhex("f7ddac306ae266ccf90bc11ee46d513b")


@pytest.mark.parametrize("seed", range(16))
def test_subkeys_self_consistency(seed):
    """
    K1 is L doubled and K2 is K1 doubled, with 0x87 folded into the last byte whenever the top bit is shifted out.
    """
    schedule = expand_key(bytes((seed * 17 + i * 29) & 0xFF for i in range(16)))
    l_value = int.from_bytes(encrypt_block(schedule, bytes(16)), "big")

    def dbl(value: int) -> int:
        value <<= 1
        if value >> 128:
            value = (value & ((1 << 128) - 1)) ^ 0x87
        return value

    k1, k2 = derive_subkeys(schedule)
    assert int.from_bytes(k1, "big") == dbl(l_value)
    assert int.from_bytes(k2, "big") == dbl(dbl(l_value))
    assert derive_subkeys(schedule) == (k1, k2)


def test_cmac_key_caches_derived_values():
    key = CMACKey(NIST_KEY)

    assert key.get_key() == bytes.fromhex(NIST_KEY)
    assert bytes(key.schedule) == bytes(expand_key(NIST_KEY))
    assert key.subkeys is key.subkeys
    assert (key.k1, key.k2) == derive_subkeys(key.schedule)
    assert NIST_KEY not in repr(key)


def test_cmac_key_rejects_wrong_length():
    with pytest.raises(InvalidKeyLengthError):
        CMACKey("00" * 15)


def test_cmac_key_shared_between_threads():
    key = CMACKey(NIST_KEY)

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda _: key.subkeys, range(64)))

    assert all(result == results[0] for result in results)
    assert results[0] == derive_subkeys(expand_key(NIST_KEY))


def test_block_shift_left():
    block = Block(bytes(15) + b"\x80")
    assert block.shift_left() == bytes(14) + b"\x01\x00"

    # Top bit is discarded, the xor value only touches the last byte
    block = Block(b"\x80" + bytes(15))
    assert block.msb
    assert block.shift_left(0x87) == bytes(15) + b"\x87"
    assert not block.shift_left().msb


def test_block_xor():
    block = Block(bytes(range(16))) ^ bytes([0xFF] * 16)

    assert isinstance(block, Block)
    assert block == bytes(0xFF - i for i in range(16))
    with pytest.raises(ValueError):
        Block.zero() ^ bytes(15)


@pytest.mark.parametrize("length", [0, 1, 15, 17, 32])
def test_block_rejects_wrong_length(length):
    with pytest.raises(InvalidBlockLengthError):
        Block(bytes(length))
