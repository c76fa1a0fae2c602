import pytest

from aescmac import CMAC, CMACException, InvalidKeyLengthError, InvalidTagLengthError, compute_cmac, truncate_tag

NIST_KEY = "2b7e151628aed2a6abf7158809cf4f3c"
EMPTY_MESSAGE_TAG = bytes.fromhex("bb1d6929e95937287fa37d129b756746")


def test_truncate_53_bits():
    """
    53 bits: six full bytes, the top five bits of byte 6 and nothing else.
    """
    expected = bytes.fromhex("bb1d6929e95930") + bytes(9)

    assert compute_cmac(NIST_KEY, b"", 53) == expected
    assert truncate_tag(EMPTY_MESSAGE_TAG, 53) == expected


@pytest.mark.parametrize("tag_length", range(0, 129))
def test_truncation_matches_full_tag(tag_length):
    """
    Truncating the full tag afterwards gives the same result as asking for the shorter tag directly,
    and only the tag_length most significant bits survive.
    """
    message = bytes(range(40))
    full = compute_cmac(NIST_KEY, message, 128)
    truncated = compute_cmac(NIST_KEY, message, tag_length)

    shift = 128 - tag_length
    expected = ((int.from_bytes(full, "big") >> shift) << shift).to_bytes(16, "big")
    assert truncated == expected
    assert truncate_tag(full, tag_length) == truncated


def test_truncation_edge_cases():
    # Whole bytes, no partial mask
    assert truncate_tag(EMPTY_MESSAGE_TAG, 64) == EMPTY_MESSAGE_TAG[:8] + bytes(8)
    assert truncate_tag(EMPTY_MESSAGE_TAG, 120) == EMPTY_MESSAGE_TAG[:15] + bytes(1)

    # Nothing is zeroed for a full length tag
    assert truncate_tag(EMPTY_MESSAGE_TAG, 128) == EMPTY_MESSAGE_TAG

    # Partial mask in the last byte
    assert truncate_tag(EMPTY_MESSAGE_TAG, 127) == EMPTY_MESSAGE_TAG[:15] + bytes([0x46])
    assert truncate_tag(EMPTY_MESSAGE_TAG, 1) == b"\x80" + bytes(15)
    assert truncate_tag(EMPTY_MESSAGE_TAG, 0) == bytes(16)


def test_default_tag_length_per_engine():
    cmac = CMAC(NIST_KEY, tag_length=32)

    assert cmac.compute(b"") == EMPTY_MESSAGE_TAG[:4] + bytes(12)
    assert cmac.compute(b"", tag_length=128) == EMPTY_MESSAGE_TAG


@pytest.mark.parametrize("tag_length", [-1, 129, 256, 64.0, "64", None, True])
def test_invalid_tag_length_rejected(tag_length):
    with pytest.raises(InvalidTagLengthError) as exc_info:
        compute_cmac(NIST_KEY, b"", tag_length)
    assert exc_info.value.tag_length is tag_length


def test_invalid_tag_length_rejected_per_call():
    cmac = CMAC(NIST_KEY)
    with pytest.raises(InvalidTagLengthError):
        cmac.compute(b"", tag_length=130)
    with pytest.raises(InvalidTagLengthError):
        truncate_tag(EMPTY_MESSAGE_TAG, -8)


def test_exception_hierarchy():
    with pytest.raises(CMACException):
        compute_cmac("00" * 17, b"")
    with pytest.raises(CMACException):
        compute_cmac(NIST_KEY, b"", 200)
    assert issubclass(InvalidKeyLengthError, CMACException)
    assert issubclass(InvalidTagLengthError, CMACException)
