"""Exception types raised by hash-it.

Every error the package raises derives from HashItError so callers (the
CLI in particular) can catch one base class.
"""

from __future__ import annotations

from typing import Iterable, Optional


class HashItError(Exception):
    """Base class for all hash-it errors."""


class InvalidInput(HashItError, ValueError):
    """The input was absent or empty; no algorithm was run."""


class UnsupportedAlgorithm(HashItError, LookupError):
    """The caller asked for an algorithm id that is not registered."""

    def __init__(self, algorithm: str, supported: Optional[Iterable[str]] = None):
        self.algorithm = algorithm
        self.supported = list(supported or [])
        super().__init__(
            f"Unsupported algorithm: {algorithm}. "
            "Use --list to see supported algorithms."
        )


class AlgorithmFailure(HashItError):
    """A single digest function raised while computing its digest.

    These never escape a batch run; the orchestrator turns them into a
    FailureMarker entry for the algorithm concerned.
    """

    def __init__(self, algorithm: str, cause: BaseException):
        self.algorithm = algorithm
        self.cause = cause
        super().__init__(f"Failed to generate {algorithm} hash: {cause}")


class RegistryError(HashItError):
    """Invalid registry mutation (duplicate id, or registry is frozen)."""


class SettingsError(HashItError):
    """The settings file exists but does not match the settings schema."""


class OutputError(HashItError):
    """Formatted results could not be written to the requested file."""
