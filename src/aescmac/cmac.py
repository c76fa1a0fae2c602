import hmac
import logging

from .block import Block
from .enums import CMACConstant
from .exceptions import InvalidTagLengthError
from .key import CMACKey
from .util import get_bytes, to_hex_string

logger = logging.getLogger(__name__)


def check_tag_length(tag_length: int) -> int:
    """
    Validates a tag length in bits. Anything outside of [0, 128] is rejected, never clamped.

    Raises:
        InvalidTagLengthError: If the tag length is not an integer between 0 and 128.
    """
    if isinstance(tag_length, bool) or not isinstance(tag_length, int):
        msg = f"Tag length must be an integer, not {type(tag_length).__name__}"
        logger.error(msg)
        raise InvalidTagLengthError(msg, tag_length)
    if not 0 <= tag_length <= CMACConstant.MAX_TAG_LENGTH:
        msg = f"Tag length must be between 0 and {CMACConstant.MAX_TAG_LENGTH} bits, not {tag_length}"
        logger.error(msg)
        raise InvalidTagLengthError(msg, tag_length)
    return tag_length


def format_last_block(message: bytes, k1: Block, k2: Block) -> tuple[int, Block]:
    """
    Partitions the message into blocks and prepares the last one (Section 6.2, steps 2 to 4).

    If the last block is complete it is xored with K1. Otherwise it is padded with 0x80 followed by zeros and
    xored with K2. An empty message counts as one incomplete block.

    Args:
        message (bytes): The full message.
        k1 (Block): First subkey.
        k2 (Block): Second subkey.

    Returns:
        tuple[int, Block]: The number of blocks n and the final block, ready for chaining.
    """
    bs = CMACConstant.BLOCK_SIZE
    n = max(1, -(-len(message) // bs))
    complete = len(message) > 0 and len(message) % bs == 0

    if complete:
        return n, Block(message[-bs:]) ^ k1

    remainder = message[(n - 1) * bs :]
    padded = remainder + bytes([CMACConstant.PADDING]) + bytes(bs - len(remainder) - 1)
    return n, Block(padded) ^ k2


def truncate_tag(tag: bytes, tag_length: int) -> bytes:
    """
    Keeps the ``tag_length`` most significant bits of the tag and zeroes everything else.
    The returned tag is always 16 bytes long.
    """
    check_tag_length(tag_length)
    full_bytes, rem_bits = divmod(tag_length, 8)

    truncated = bytearray(tag)
    if tag_length < CMACConstant.MAX_TAG_LENGTH:
        if rem_bits:
            truncated[full_bytes] &= (0xFF << (8 - rem_bits)) & 0xFF
            full_bytes += 1
        truncated[full_bytes:] = bytes(len(truncated) - full_bytes)
    return bytes(truncated)


class CMAC:
    """
    This class implements CMAC (Cipher-based MAC) following the NIST SP 800-38B specification,
    using the AES-128 implementation of this package as the block cipher.
    """

    def __init__(self, key: CMACKey | list[int] | str | bytearray | bytes, tag_length: int = 128):
        """
        Initialize the CMAC object with a key and the default tag length.

        Args:
            key (CMACKey | list[int] | str | bytearray | bytes): Either an existing key object, which is
                shared and not copied, or raw key data.
            tag_length (int, optional): Tag length in bits used when none is given per call. Defaults to 128.

        Raises:
            InvalidKeyLengthError: If the key is not 16 bytes long.
            InvalidTagLengthError: If the tag length is outside of [0, 128].
        """
        self.key = key if isinstance(key, CMACKey) else CMACKey(key)
        self.tag_length = check_tag_length(tag_length)

    def compute(self, message: list[int] | bytearray | bytes, tag_length: int | None = None) -> bytes:
        """
        Calculates the CMAC of a message.

        Args:
            message (list[int] | bytearray | bytes): Message of any length, including zero.
            tag_length (int | None, optional): Tag length in bits, defaults to the one given on creation.

        Returns:
            bytes: 16 byte tag, bits beyond the tag length are zero.
        """
        tag_length = check_tag_length(self.tag_length if tag_length is None else tag_length)
        message = get_bytes(message)
        bs = CMACConstant.BLOCK_SIZE

        n, last_block = format_last_block(message, self.key.k1, self.key.k2)
        logger.debug(f"Calculating CMAC over {len(message)} bytes ({n} blocks)")

        x = Block.zero()
        for i in range(n - 1):
            x = self.key.encrypt(x ^ message[i * bs : (i + 1) * bs])
        x = self.key.encrypt(x ^ last_block)

        tag = truncate_tag(x, tag_length)
        logger.debug(f"CMAC ({tag_length} bits): {to_hex_string(tag)}")
        return tag

    def verify(
        self, message: list[int] | bytearray | bytes, tag: list[int] | bytes, tag_length: int | None = None
    ) -> bool:
        """
        Checks a received tag against the CMAC of the message. The comparison runs in constant time.

        The tag may either be the full 16 byte buffer or just the bytes covering the tag length.
        """
        tag_length = check_tag_length(self.tag_length if tag_length is None else tag_length)
        tag = get_bytes(tag)
        expected = self.compute(message, tag_length)

        if len(tag) != len(expected):
            expected = expected[: -(-tag_length // 8)]
        if len(tag) != len(expected):
            logger.warning(f"Tag of {len(tag)} bytes does not match a tag length of {tag_length} bits")
            return False

        return hmac.compare_digest(expected, tag)


def compute_cmac(key: CMACKey | list[int] | str | bytearray | bytes, message, tag_length: int = 128) -> bytes:
    """
    Calculates the AES-CMAC of a message in a single call.

    Args:
        key: AES-128 key, either as a key object or as raw key data (bytes, list of integers or hex string).
        message: Message of any length.
        tag_length (int, optional): Tag length in bits, between 0 and 128. Defaults to 128.

    Raises:
        InvalidKeyLengthError: If the key is not 16 bytes long.
        InvalidTagLengthError: If the tag length is outside of [0, 128].

    Returns:
        bytes: 16 byte tag, only the first ``tag_length`` bits are set.
    """
    return CMAC(key, tag_length).compute(message)


def verify_cmac(key, message, tag, tag_length: int = 128) -> bool:
    """
    Constant time verification of a tag, see `CMAC.verify`.
    """
    return CMAC(key, tag_length).verify(message, tag)
