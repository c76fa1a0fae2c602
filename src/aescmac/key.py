import logging
import threading

from .aes import KeySchedule, encrypt_block, expand_key
from .block import Block
from .enums import CMACConstant
from .util import get_bytes

logger = logging.getLogger(__name__)


def derive_subkeys(schedule: KeySchedule) -> tuple[Block, Block]:
    """
    Derives the CMAC subkeys K1 and K2 (Section 6.1 of NIST SP 800 38B).

    Args:
        schedule (KeySchedule): Expanded AES-128 key.

    Returns:
        tuple[Block, Block]: The subkeys (K1, K2).
    """
    logger.debug("Calculating K1 and K2.")

    # Encrypt a block of zeros with the key
    l = encrypt_block(schedule, Block.zero())
    k1 = l.shift_left(CMACConstant.RB if l.msb else 0)
    k2 = k1.shift_left(CMACConstant.RB if k1.msb else 0)
    return k1, k2


class CMACKey:
    """
    AES-128 key object holding everything that is derived from a root key.

    The round key schedule is expanded when the key is created, the subkeys are derived on first use.
    Both are computed only once per key and never change afterwards, so a single key object can be shared
    between threads and reused for any number of CMAC calculations.
    """

    def __init__(self, key_data: list[int] | str | bytearray | bytes):
        """
        Initializes the key object and expands the round key schedule.

        Args:
            key_data (list[int] | str | bytearray | bytes): Key data, will be parsed using the get_bytes function.

        Raises:
            InvalidKeyLengthError: If the key is not 16 bytes long.
        """
        self._key = get_bytes(key_data)
        self._schedule = expand_key(self._key)
        self._subkeys: tuple[Block, Block] | None = None
        self._lock = threading.Lock()

    @property
    def schedule(self) -> KeySchedule:
        return self._schedule

    @property
    def subkeys(self) -> tuple[Block, Block]:
        """
        The subkey pair (K1, K2), derived on first access.
        """
        if self._subkeys is None:
            with self._lock:
                if self._subkeys is None:
                    self._subkeys = derive_subkeys(self._schedule)
        return self._subkeys

    @property
    def k1(self) -> Block:
        return self.subkeys[0]

    @property
    def k2(self) -> Block:
        return self.subkeys[1]

    def get_key(self) -> bytes:
        """
        Returns the root key as a byte array.
        """
        return self._key

    def encrypt(self, block: bytes) -> Block:
        """
        Encrypts a single block with this key.
        """
        return encrypt_block(self._schedule, block)

    def __repr__(self) -> str:
        # Never expose key material
        return "CMACKey(AES-128)"
