from .aes import KeySchedule, encrypt_block, expand_key
from .block import Block
from .cmac import CMAC, compute_cmac, truncate_tag, verify_cmac
from .exceptions import CMACException, InvalidBlockLengthError, InvalidKeyLengthError, InvalidTagLengthError
from .key import CMACKey, derive_subkeys
from .util import get_bytes, get_list, to_hex_string

__all__ = [
    "Block",
    "CMAC",
    "CMACException",
    "CMACKey",
    "InvalidBlockLengthError",
    "InvalidKeyLengthError",
    "InvalidTagLengthError",
    "KeySchedule",
    "compute_cmac",
    "derive_subkeys",
    "encrypt_block",
    "expand_key",
    "get_bytes",
    "get_list",
    "to_hex_string",
    "truncate_tag",
    "verify_cmac",
]
