"""hashit.md4

Pure Python MD4 (RFC 1320).

Most hashlib builds linked against OpenSSL 3 no longer expose MD4, and
NTLM depends on it, so the digest is computed here from scratch. The
function is stateless: the whole message is padded and compressed in one
call, there is no incremental update API.
"""

from __future__ import annotations

import struct
from typing import Callable, List, Sequence, Tuple

from .bitops import add32, rotl32, round_f, round_g, round_h

DIGEST_SIZE = 16
BLOCK_SIZE = 64

_INITIAL_STATE = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

# (round function, additive constant, message word order, shift cycle)
_ROUNDS: List[Tuple[Callable[[int, int, int], int], int, Sequence[int], Sequence[int]]] = [
    (round_f, 0x00000000, tuple(range(16)), (3, 7, 11, 19)),
    (
        round_g,
        0x5A827999,
        (0, 4, 8, 12, 1, 5, 9, 13, 2, 6, 10, 14, 3, 7, 11, 15),
        (3, 5, 9, 13),
    ),
    (
        round_h,
        0x6ED9EBA1,
        (0, 8, 4, 12, 2, 10, 6, 14, 1, 9, 5, 13, 3, 11, 7, 15),
        (3, 9, 11, 15),
    ),
]


def md4_pad(message: bytes) -> bytes:
    """Return `message` with MD4 padding and the 64-bit length suffix.

    A single 0x80 byte is appended, then zero bytes up to 56 mod 64, then
    the original length in bits as a little-endian 64-bit integer. The
    result is always a non-empty multiple of 64 bytes; a message that is
    already 56 mod 64 long after the marker byte spills into a new block.
    """
    bit_length = (len(message) * 8) & 0xFFFFFFFFFFFFFFFF
    zeros = (55 - len(message)) % BLOCK_SIZE
    return bytes(message) + b"\x80" + (b"\x00" * zeros) + struct.pack("<Q", bit_length)


def _compress(state: Tuple[int, int, int, int], block: bytes) -> Tuple[int, int, int, int]:
    words = struct.unpack("<16I", block)
    a, b, c, d = state

    for fn, constant, order, shifts in _ROUNDS:
        for step in range(16):
            k = order[step]
            s = shifts[step % 4]
            t = add32(add32(add32(a, fn(b, c, d)), words[k]), constant)
            # registers rotate roles after every step
            a, b, c, d = d, rotl32(t, s), b, c

    return (
        add32(state[0], a),
        add32(state[1], b),
        add32(state[2], c),
        add32(state[3], d),
    )


def md4(message: bytes) -> bytes:
    """Compute the 16-byte MD4 digest of `message`."""
    padded = md4_pad(message)
    state = _INITIAL_STATE
    for offset in range(0, len(padded), BLOCK_SIZE):
        state = _compress(state, padded[offset : offset + BLOCK_SIZE])
    return struct.pack("<4I", *state)


def md4_hex(message: bytes) -> str:
    return md4(message).hex()
