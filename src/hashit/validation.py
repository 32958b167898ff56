"""Input validation helpers.

`validate_input` mirrors the checks the CLI performs before hashing and
returns a result object instead of raising, so callers can report every
problem the same way. `require_valid_input` is the raising variant used
by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .errors import InvalidInput
from .registry import AlgorithmRegistry

OUTPUT_FORMATS = ("table", "json", "plain")

EMPTY_INPUT_MESSAGE = "Input text cannot be empty"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None


def _is_empty(data: Union[str, bytes, None]) -> bool:
    if data is None:
        return True
    if isinstance(data, str):
        return not data.strip()
    return len(bytes(data)) == 0


def validate_input(
    text: Union[str, bytes, None],
    algorithm: Optional[str] = None,
    output_format: Optional[str] = None,
    registry: Optional[AlgorithmRegistry] = None,
) -> ValidationResult:
    if _is_empty(text):
        return ValidationResult(False, EMPTY_INPUT_MESSAGE)

    if algorithm:
        if registry is None:
            from .engine import default_engine

            registry = default_engine().registry
        if algorithm not in registry:
            return ValidationResult(
                False,
                f"Unsupported algorithm: {algorithm}. "
                "Use --list to see supported algorithms.",
            )

    if output_format and output_format not in OUTPUT_FORMATS:
        return ValidationResult(
            False,
            f"Invalid format: {output_format}. "
            f"Supported formats: {', '.join(OUTPUT_FORMATS)}",
        )

    return ValidationResult(True)


def require_valid_input(data: Union[str, bytes, None]) -> bytes:
    """Return the canonical byte form of `data` or raise InvalidInput.

    Text is encoded as UTF-8 here, once per call. Text made only of
    whitespace counts as empty; byte input is only rejected when it has
    length zero.
    """
    if data is not None and not isinstance(data, (str, bytes, bytearray, memoryview)):
        raise InvalidInput(f"Unsupported input type: {type(data).__name__}")
    if _is_empty(data):
        raise InvalidInput(EMPTY_INPUT_MESSAGE)
    if isinstance(data, str):
        # lone surrogates pass through so only NTLM, which needs real text,
        # fails on them
        return data.encode("utf-8", "surrogatepass")
    return bytes(data)
