from enum import IntEnum


class CMACConstant(IntEnum):
    """
    Fixed parameters of AES-128 and the CMAC mode built on top of it.
    """

    """
    AES operates on 16 byte blocks regardless of the key size.
    """
    BLOCK_SIZE = 16

    """
    Only AES-128 is supported, root keys are always 16 bytes.
    """
    KEY_SIZE = 16

    """
    AES-128 uses 10 rounds, the expanded key holds one round key per round plus the initial whitening key.
    """
    ROUNDS = 10
    SCHEDULE_SIZE = 176

    """
    Section 5.3 of NIST SP 800 38B, Rb for a block size of 128 bits.
    """
    RB = 0x87

    """
    A partial last block is padded with a single 1 bit followed by zeros.
    """
    PADDING = 0x80

    MAX_TAG_LENGTH = 128
