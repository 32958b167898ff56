"""NT hash (the password hash used by NTLM).

The NT hash is MD4 over the password's UTF-16LE encoding. Python strings
are sequences of code points, and the utf-16-le codec turns code points
outside the BMP into surrogate pairs, so the unit of encoding is the
UTF-16 code unit exactly as Windows defines it. Strings holding lone
surrogates have no UTF-16 form and raise UnicodeEncodeError.
"""

from __future__ import annotations

from .md4 import md4


def ntlm(text: str) -> bytes:
    return md4(text.encode("utf-16-le"))


def ntlm_digest(data: bytes) -> bytes:
    """Registry form of `ntlm`: takes the canonical UTF-8 input bytes.

    The bytes are decoded strictly; input that is not valid UTF-8 raises
    UnicodeDecodeError, which the orchestrator records as a failure for
    this algorithm only.
    """
    return ntlm(bytes(data).decode("utf-8"))
