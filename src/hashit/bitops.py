"""32-bit word helpers used by the MD4 compression function.

Python integers are unbounded, so every result is masked back to 32 bits
to emulate unsigned fixed-width overflow.
"""

from __future__ import annotations

MASK32 = 0xFFFFFFFF


def add32(a: int, b: int) -> int:
    return (a + b) & MASK32


def rotl32(value: int, amount: int) -> int:
    """Rotate a 32-bit word left by `amount` bits (0 < amount < 32)."""
    value &= MASK32
    return ((value << amount) | (value >> (32 - amount))) & MASK32


def round_f(x: int, y: int, z: int) -> int:
    # selection: y where x is set, z elsewhere
    return ((x & y) | (~x & z)) & MASK32


def round_g(x: int, y: int, z: int) -> int:
    # majority
    return (x & y) | (x & z) | (y & z)


def round_h(x: int, y: int, z: int) -> int:
    # parity
    return x ^ y ^ z
