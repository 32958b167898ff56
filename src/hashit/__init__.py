"""hash-it: generate many digests of one input at once.

The engine computes MD4 and NTLM with a built-in MD4 implementation and
delegates the other algorithms (MD5, SHA-1, SHA-2, SHA-3, RIPEMD-160,
CRC16, CRC32, Adler-32) to hashlib, pycryptodome, crcmod and zlib.
"""

from .engine import HashEngine, compute_digests, list_supported_algorithms
from .errors import (
    AlgorithmFailure,
    HashItError,
    InvalidInput,
    RegistryError,
    UnsupportedAlgorithm,
)
from .md4 import md4
from .ntlm import ntlm
from .orchestrator import DigestResult, FailureMarker, ResultSet
from .registry import AlgorithmRegistry, NotFound, build_default_registry

__version__ = "1.0.0"

__all__ = [
    "AlgorithmFailure",
    "AlgorithmRegistry",
    "DigestResult",
    "FailureMarker",
    "HashEngine",
    "HashItError",
    "InvalidInput",
    "NotFound",
    "RegistryError",
    "ResultSet",
    "UnsupportedAlgorithm",
    "build_default_registry",
    "compute_digests",
    "list_supported_algorithms",
    "md4",
    "ntlm",
]
