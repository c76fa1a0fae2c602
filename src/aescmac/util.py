import logging

from Crypto.Util.number import bytes_to_long, long_to_bytes
from smartcard.util import toHexString

logger = logging.getLogger(__name__)


def get_list(data: list[int] | str | bytearray | bytes) -> list[int]:
    """
    Utility method to simplify the conversion of data to a list of integers.
    Each entry in the list represents one byte of the input data.

    Args:
        data (list[int] | str | bytearray | bytes): Input that should be converted to a list of integers.
            Strings are parsed as hex, whitespace between bytes is allowed.

    Tip: Parsing Crypto Keys
        This method is particularly useful when parsing keys and test vectors that are represented as hex strings.

    Raises:
        TypeError: If the data type is not supported.

    Returns:
        A list of integers (each entry representing one byte).
    """
    if isinstance(data, list):
        # Already a list. Verify that each entry is an integer between 0 and 255.
        if not all(isinstance(x, int) and 0 <= x <= 255 for x in data):
            raise ValueError("List entries must be integers between 0 and 255")
        return data
    elif isinstance(data, str):
        return list(bytearray.fromhex(data))
    elif isinstance(data, bytearray) or isinstance(data, bytes) or isinstance(data, memoryview):
        return list(data)

    logger.warning(f"Data type not recognized: {type(data)}")
    raise TypeError(f"Cannot convert {type(data).__name__} to a list of bytes")


def get_bytes(data: list[int] | str | bytearray | bytes) -> bytes:
    """
    Same as `get_list`, but returns an immutable bytes object.
    """
    if isinstance(data, bytes):
        return data
    return bytes(get_list(data))


def to_hex_string(data: list[int] | bytes) -> str:
    """
    Human readable hex representation of the data, bytes separated by spaces (``2B 7E 15 16``).
    """
    return toHexString(list(data))


def xor_bytes(data1: bytes, data2: bytes) -> bytes:
    """
    Takes two byte strings of the same length and performs a bytewise xor.
    """
    if len(data1) != len(data2):
        raise ValueError(f"Cannot xor data of different length ({len(data1)} and {len(data2)} bytes)")
    return bytes(a ^ b for a, b in zip(data1, data2))


def shift_bytes(bs: bytes, xor_lsb: int = 0) -> bytes:
    """
    Shifts the bytes to the left by one bit and xors the least significant byte with the given value.
    The bit shifted out of the most significant byte is discarded.
    """
    num = (bytes_to_long(bs) << 1) ^ xor_lsb
    return long_to_bytes(num, len(bs))[-len(bs) :]
