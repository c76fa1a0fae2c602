import logging

from aescmac import CMAC, CMACKey, to_hex_string

logging.basicConfig(level=logging.DEBUG)

# Derive the key schedule and subkeys once, then reuse them for every message
key = CMACKey("2B 7E 15 16 28 AE D2 A6 AB F7 15 88 09 CF 4F 3C")
print("K1:", to_hex_string(key.k1))
print("K2:", to_hex_string(key.k2))

# DESFire style 64 bit tags
cmac = CMAC(key, tag_length=64)
tag = cmac.compute(b"Hello, world!")
print("Tag:", to_hex_string(tag[:8]))

assert cmac.verify(b"Hello, world!", tag[:8])
assert not cmac.verify(b"Hello, world?", tag[:8])
