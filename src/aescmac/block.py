from .enums import CMACConstant
from .exceptions import InvalidBlockLengthError
from .util import get_bytes, shift_bytes, xor_bytes


class Block(bytes):
    """
    A single 16 byte cipher block.

    Blocks are immutable values. Every operation returns a new block, the length is checked once on
    construction so that padding and round key handling never have to do index bookkeeping.
    """

    def __new__(cls, data: list[int] | str | bytearray | bytes):
        raw = get_bytes(data)
        if len(raw) != CMACConstant.BLOCK_SIZE:
            raise InvalidBlockLengthError(f"A block must be {CMACConstant.BLOCK_SIZE} bytes long, not {len(raw)}")
        return super().__new__(cls, raw)

    @classmethod
    def zero(cls) -> "Block":
        return cls(bytes(CMACConstant.BLOCK_SIZE))

    @property
    def msb(self) -> bool:
        """
        True if the most significant bit of the block (top bit of byte 0) is set.
        """
        return bool(self[0] & 0x80)

    def shift_left(self, xor_lsb: int = 0) -> "Block":
        """
        Shifts the whole 128 bit block left by one bit, carrying from each byte into the one before it.
        The least significant byte is xored with ``xor_lsb`` afterwards.
        """
        return Block(shift_bytes(self, xor_lsb))

    def __xor__(self, other: bytes) -> "Block":
        return Block(xor_bytes(self, bytes(other)))

    __rxor__ = __xor__

    def __repr__(self) -> str:
        return f"Block({self.hex()})"
