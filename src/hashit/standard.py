"""Wrappers around standard digest implementations.

Each wrapper has the registry signature `fn(data: bytes) -> bytes` and
returns the raw digest. Checksums are returned as fixed-width big-endian
bytes so their hex form matches the conventional zero-padded notation
(4 hex digits for CRC16, 8 for CRC32 and Adler-32).
"""

from __future__ import annotations

import hashlib
import zlib
from typing import Callable, Dict

import crcmod
from Crypto.Hash import RIPEMD160

DigestFunction = Callable[[bytes], bytes]

# algorithm id -> hashlib constructor name
HASHLIB_ALGORITHMS: Dict[str, str] = {
    "MD5": "md5",
    "SHA1": "sha1",
    "SHA224": "sha224",
    "SHA256": "sha256",
    "SHA384": "sha384",
    "SHA512": "sha512",
    "SHA3-224": "sha3_224",
    "SHA3-256": "sha3_256",
    "SHA3-384": "sha3_384",
    "SHA3-512": "sha3_512",
}

# CRC-16/ARC (aka CRC-16/IBM): reflected 0x8005, init 0, no final xor
_crc16_arc = crcmod.mkCrcFun(0x18005, initCrc=0x0000, rev=True, xorOut=0x0000)


def hashlib_digest(name: str) -> DigestFunction:
    """Return a digest function backed by `hashlib.new(name)`."""
    # fail at registration time, not on first use
    hashlib.new(name)

    def _digest(data: bytes) -> bytes:
        return hashlib.new(name, data).digest()

    _digest.__name__ = f"{name}_digest"
    return _digest


def crc16_digest(data: bytes) -> bytes:
    return _crc16_arc(data).to_bytes(2, "big")


def crc32_digest(data: bytes) -> bytes:
    return (zlib.crc32(data) & 0xFFFFFFFF).to_bytes(4, "big")


def adler32_digest(data: bytes) -> bytes:
    return (zlib.adler32(data) & 0xFFFFFFFF).to_bytes(4, "big")


def ripemd160_digest(data: bytes) -> bytes:
    # pycryptodome: hashlib only offers ripemd160 when OpenSSL ships it
    return RIPEMD160.new(data=data).digest()
