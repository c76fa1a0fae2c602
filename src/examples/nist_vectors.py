import logging

from aescmac import compute_cmac, encrypt_block, expand_key, get_bytes

logging.basicConfig(level=logging.INFO)

NIST_KEY = "2b7e151628aed2a6abf7158809cf4f3c"
NIST_PLAINTEXT = (
    "6bc1bee22e409f96e93d7e117393172a"
    "ae2d8a571e03ac9c9eb76fac45af8e51"
    "30c81c46a35ce411e5fbc1191a0a52ef"
    "f69f2445df4f9b17ad2b417be66c3710"
)

# (key, message, tag length in bits)
test_cases = [
    (NIST_KEY, b"", 128),
    (NIST_KEY, get_bytes(NIST_PLAINTEXT)[:16], 128),
    (NIST_KEY, get_bytes(NIST_PLAINTEXT)[:40], 128),
    (NIST_KEY, get_bytes(NIST_PLAINTEXT), 128),
    (NIST_KEY, b"", 53),
    ("000102030405060708090a0b0c0d0e0f", b"The quick brown fox jumps over the lazy dog", 128),
    ("0001" * 8, get_bytes(NIST_PLAINTEXT)[:16], 53),
    ("0001" * 8, bytes([0x01, 0x00, 0x01]) + bytes(55), 53),
]

# Plain block encryption, FIPS 197 appendix C.1
schedule = expand_key("000102030405060708090a0b0c0d0e0f")
print(encrypt_block(schedule, get_bytes("00112233445566778899aabbccddeeff")).hex())

for key, message, tag_length in test_cases:
    print(compute_cmac(key, message, tag_length).hex())
