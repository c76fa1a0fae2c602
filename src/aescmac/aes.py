"""
AES-128 block encryption (FIPS 197).

The cipher state is a 4x4 matrix of bytes stored as a tuple of four rows. Input blocks are loaded column by
column, so bytes 0, 4, 8 and 12 of a block form row 0 and bytes 0 to 3 form column 0. All round transformations
are pure functions taking and returning a state.
"""

import logging

from .block import Block
from .enums import CMACConstant
from .exceptions import InvalidKeyLengthError
from .util import get_bytes

logger = logging.getLogger(__name__)

State = tuple[tuple[int, int, int, int], ...]

# fmt: off
S_BOX: tuple[int, ...] = (
    0x63, 0x7C, 0x77, 0x7B, 0xF2, 0x6B, 0x6F, 0xC5, 0x30, 0x01, 0x67, 0x2B, 0xFE, 0xD7, 0xAB, 0x76,
    0xCA, 0x82, 0xC9, 0x7D, 0xFA, 0x59, 0x47, 0xF0, 0xAD, 0xD4, 0xA2, 0xAF, 0x9C, 0xA4, 0x72, 0xC0,
    0xB7, 0xFD, 0x93, 0x26, 0x36, 0x3F, 0xF7, 0xCC, 0x34, 0xA5, 0xE5, 0xF1, 0x71, 0xD8, 0x31, 0x15,
    0x04, 0xC7, 0x23, 0xC3, 0x18, 0x96, 0x05, 0x9A, 0x07, 0x12, 0x80, 0xE2, 0xEB, 0x27, 0xB2, 0x75,
    0x09, 0x83, 0x2C, 0x1A, 0x1B, 0x6E, 0x5A, 0xA0, 0x52, 0x3B, 0xD6, 0xB3, 0x29, 0xE3, 0x2F, 0x84,
    0x53, 0xD1, 0x00, 0xED, 0x20, 0xFC, 0xB1, 0x5B, 0x6A, 0xCB, 0xBE, 0x39, 0x4A, 0x4C, 0x58, 0xCF,
    0xD0, 0xEF, 0xAA, 0xFB, 0x43, 0x4D, 0x33, 0x85, 0x45, 0xF9, 0x02, 0x7F, 0x50, 0x3C, 0x9F, 0xA8,
    0x51, 0xA3, 0x40, 0x8F, 0x92, 0x9D, 0x38, 0xF5, 0xBC, 0xB6, 0xDA, 0x21, 0x10, 0xFF, 0xF3, 0xD2,
    0xCD, 0x0C, 0x13, 0xEC, 0x5F, 0x97, 0x44, 0x17, 0xC4, 0xA7, 0x7E, 0x3D, 0x64, 0x5D, 0x19, 0x73,
    0x60, 0x81, 0x4F, 0xDC, 0x22, 0x2A, 0x90, 0x88, 0x46, 0xEE, 0xB8, 0x14, 0xDE, 0x5E, 0x0B, 0xDB,
    0xE0, 0x32, 0x3A, 0x0A, 0x49, 0x06, 0x24, 0x5C, 0xC2, 0xD3, 0xAC, 0x62, 0x91, 0x95, 0xE4, 0x79,
    0xE7, 0xC8, 0x37, 0x6D, 0x8D, 0xD5, 0x4E, 0xA9, 0x6C, 0x56, 0xF4, 0xEA, 0x65, 0x7A, 0xAE, 0x08,
    0xBA, 0x78, 0x25, 0x2E, 0x1C, 0xA6, 0xB4, 0xC6, 0xE8, 0xDD, 0x74, 0x1F, 0x4B, 0xBD, 0x8B, 0x8A,
    0x70, 0x3E, 0xB5, 0x66, 0x48, 0x03, 0xF6, 0x0E, 0x61, 0x35, 0x57, 0xB9, 0x86, 0xC1, 0x1D, 0x9E,
    0xE1, 0xF8, 0x98, 0x11, 0x69, 0xD9, 0x8E, 0x94, 0x9B, 0x1E, 0x87, 0xE9, 0xCE, 0x55, 0x28, 0xDF,
    0x8C, 0xA1, 0x89, 0x0D, 0xBF, 0xE6, 0x42, 0x68, 0x41, 0x99, 0x2D, 0x0F, 0xB0, 0x54, 0xBB, 0x16,
)
# fmt: on

# Round constants for the key expansion, RCON[0] is a placeholder and never used
RCON: tuple[int, ...] = (0x00, 0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1B, 0x36)


class KeySchedule(tuple):
    """
    The expanded key: 11 round keys of 16 bytes each, round key 0 being the root key itself.
    """

    def __new__(cls, round_keys):
        round_keys = tuple(Block(rk) for rk in round_keys)
        if len(round_keys) != CMACConstant.ROUNDS + 1:
            raise ValueError(f"AES-128 requires {CMACConstant.ROUNDS + 1} round keys, not {len(round_keys)}")
        return super().__new__(cls, round_keys)

    def __bytes__(self) -> bytes:
        return b"".join(self)

    def __repr__(self) -> str:
        return f"KeySchedule({len(self)} round keys)"


def xtime(x: int) -> int:
    """
    Multiplication by x (i.e. 2) in GF(2^8), reduced by the AES polynomial (0x1B).
    """
    x <<= 1
    if x & 0x100:
        x ^= 0x11B
    return x


def _rot_word(word: bytes) -> bytes:
    return word[1:] + word[:1]


def _sub_word(word: bytes) -> bytes:
    return bytes(S_BOX[b] for b in word)


def expand_key(root_key: list[int] | str | bytearray | bytes) -> KeySchedule:
    """
    Expands a 16 byte AES key into the 176 byte round key schedule.

    Every word is the xor of the word 16 bytes before it and the preceding word. At the start of each
    round key the preceding word is first rotated, substituted through the S-box and its first byte is
    xored with the round constant.

    Args:
        root_key (list[int] | str | bytearray | bytes): The AES-128 key, parsed with `get_bytes`.

    Raises:
        InvalidKeyLengthError: If the key is not 16 bytes long.

    Returns:
        KeySchedule: The round keys.
    """
    key = get_bytes(root_key)
    if len(key) != CMACConstant.KEY_SIZE:
        msg = f"AES-128 requires a key of {CMACConstant.KEY_SIZE} bytes, not {len(key)}"
        logger.error(msg)
        raise InvalidKeyLengthError(msg, len(key))

    logger.debug("Expanding AES-128 key into round key schedule")
    words = [key[i : i + 4] for i in range(0, len(key), 4)]
    for i in range(len(words), CMACConstant.SCHEDULE_SIZE // 4):
        temp = words[i - 1]
        if i % 4 == 0:
            temp = _sub_word(_rot_word(temp))
            temp = bytes([temp[0] ^ RCON[i // 4]]) + temp[1:]
        words.append(bytes(a ^ b for a, b in zip(words[i - 4], temp)))

    return KeySchedule(b"".join(words[i : i + 4]) for i in range(0, len(words), 4))


def bytes_to_state(block: bytes) -> State:
    """
    Loads a flat 16 byte block into the state matrix, column by column.
    """
    return tuple(tuple(block[col * 4 + row] for col in range(4)) for row in range(4))


def state_to_bytes(state: State) -> Block:
    """
    Inverse of `bytes_to_state`.
    """
    return Block(bytes(state[row][col] for col in range(4) for row in range(4)))


def add_round_key(state: State, round_key: bytes) -> State:
    return tuple(
        tuple(value ^ key for value, key in zip(row, key_row))
        for row, key_row in zip(state, bytes_to_state(round_key))
    )


def sub_bytes(state: State) -> State:
    return tuple(tuple(S_BOX[value] for value in row) for row in state)


def shift_rows(state: State) -> State:
    """
    Row ``r`` is rotated left by ``r`` positions.
    """
    return tuple(row[r:] + row[:r] for r, row in enumerate(state))


def _mix_column(a0: int, a1: int, a2: int, a3: int) -> tuple[int, int, int, int]:
    # Multiplication with the fixed polynomial {03}x^3 + {01}x^2 + {01}x + {02}
    return (
        xtime(a0) ^ xtime(a1) ^ a1 ^ a2 ^ a3,
        a0 ^ xtime(a1) ^ xtime(a2) ^ a2 ^ a3,
        a0 ^ a1 ^ xtime(a2) ^ xtime(a3) ^ a3,
        xtime(a0) ^ a0 ^ a1 ^ a2 ^ xtime(a3),
    )


def mix_columns(state: State) -> State:
    columns = [_mix_column(*column) for column in zip(*state)]
    return tuple(zip(*columns))


def encrypt_block(schedule: KeySchedule, block: bytes) -> Block:
    """
    Encrypts a single 16 byte block with AES-128 using an expanded key.

    Args:
        schedule (KeySchedule): Round keys obtained from `expand_key`.
        block (bytes): Plaintext block.

    Returns:
        Block: Ciphertext block.
    """
    state = add_round_key(bytes_to_state(Block(block)), schedule[0])

    for round_key in schedule[1:CMACConstant.ROUNDS]:
        state = add_round_key(mix_columns(shift_rows(sub_bytes(state))), round_key)

    # Final round, no MixColumns
    state = add_round_key(shift_rows(sub_bytes(state)), schedule[CMACConstant.ROUNDS])
    return state_to_bytes(state)
