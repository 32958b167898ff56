import pytest

from hashit.errors import InvalidInput
from hashit.registry import build_default_registry
from hashit.validation import EMPTY_INPUT_MESSAGE, require_valid_input, validate_input


@pytest.fixture(scope="module")
def registry():
    return build_default_registry()


def test_valid_input(registry):
    res = validate_input("hello", algorithm="sha256", output_format="json", registry=registry)
    assert res.valid
    assert res.error is None


@pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
def test_empty_text(registry, text):
    res = validate_input(text, registry=registry)
    assert not res.valid
    assert res.error == EMPTY_INPUT_MESSAGE


def test_unknown_algorithm(registry):
    res = validate_input("hello", algorithm="whirlpool", registry=registry)
    assert not res.valid
    assert res.error == (
        "Unsupported algorithm: whirlpool. Use --list to see supported algorithms."
    )


def test_unknown_format(registry):
    res = validate_input("hello", output_format="xml", registry=registry)
    assert not res.valid
    assert res.error == "Invalid format: xml. Supported formats: table, json, plain"


def test_empty_checked_before_algorithm(registry):
    res = validate_input("", algorithm="whirlpool", registry=registry)
    assert res.error == EMPTY_INPUT_MESSAGE


def test_default_registry_used_when_none_given():
    assert validate_input("hello", algorithm="md4").valid
    assert not validate_input("hello", algorithm="md2").valid


def test_require_valid_input_encodes_text():
    assert require_valid_input("héllo") == "héllo".encode("utf-8")
    assert require_valid_input(bytearray(b"\x00")) == b"\x00"
    # whitespace in bytes is still content
    assert require_valid_input(b"   ") == b"   "


@pytest.mark.parametrize("bad", ["", "  ", b"", None, 42, ["a"]])
def test_require_valid_input_rejects(bad):
    with pytest.raises(InvalidInput):
        require_valid_input(bad)


def test_non_string_algorithm_is_reported(registry):
    res = validate_input("hello", algorithm=5, registry=registry)
    assert not res.valid
    assert res.error.startswith("Unsupported algorithm: 5.")
