"""Algorithm registry.

Maps normalized (upper-case) algorithm ids to digest functions with the
uniform signature `fn(data: bytes) -> bytes`. The registry does not know
whether a function is implemented here (MD4, NTLM) or delegated to a
library; both are plain callables.

A registry is filled once, then frozen. Reads on a frozen registry are
safe from several threads at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Union

from .errors import RegistryError
from .md4 import md4
from .ntlm import ntlm_digest
from .standard import (
    HASHLIB_ALGORITHMS,
    DigestFunction,
    adler32_digest,
    crc16_digest,
    crc32_digest,
    hashlib_digest,
    ripemd160_digest,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotFound:
    """Returned by `AlgorithmRegistry.resolve` for an unregistered id."""

    algorithm_id: str

    def __bool__(self) -> bool:
        return False


def normalize_id(algorithm_id: str) -> str:
    if not isinstance(algorithm_id, str):
        raise TypeError(f"algorithm id must be a string, not {type(algorithm_id).__name__}")
    return algorithm_id.strip().upper()


class AlgorithmRegistry:
    def __init__(self):
        self._functions: Dict[str, DigestFunction] = {}
        self._frozen = False

    def register(self, algorithm_id: str, fn: DigestFunction) -> str:
        """Register `fn` under `algorithm_id`; returns the normalized id."""
        if self._frozen:
            raise RegistryError(f"registry is frozen; cannot register {algorithm_id!r}")
        key = normalize_id(algorithm_id)
        if not key:
            raise RegistryError("algorithm id must not be empty")
        if not callable(fn):
            raise RegistryError(f"digest function for {key} is not callable")
        if key in self._functions:
            raise RegistryError(f"algorithm {key} is already registered")
        self._functions[key] = fn
        return key

    def resolve(self, algorithm_id: str) -> Union[DigestFunction, NotFound]:
        key = normalize_id(algorithm_id)
        fn = self._functions.get(key)
        if fn is None:
            return NotFound(key)
        return fn

    def list_ids(self) -> List[str]:
        return sorted(self._functions)

    def freeze(self) -> "AlgorithmRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, algorithm_id) -> bool:
        try:
            return normalize_id(algorithm_id) in self._functions
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._functions)

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_ids())

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"AlgorithmRegistry({len(self)} algorithms, {state})"


def build_default_registry() -> AlgorithmRegistry:
    """Build and freeze the registry of every algorithm hash-it supports."""
    reg = AlgorithmRegistry()
    for algorithm_id, name in HASHLIB_ALGORITHMS.items():
        reg.register(algorithm_id, hashlib_digest(name))

    reg.register("MD4", md4)
    reg.register("NTLM", ntlm_digest)
    reg.register("RIPEMD160", ripemd160_digest)
    reg.register("CRC16", crc16_digest)
    reg.register("CRC32", crc32_digest)
    reg.register("ADLER32", adler32_digest)

    logger.debug("built default registry with %d algorithms", len(reg))
    return reg.freeze()
