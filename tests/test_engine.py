import pytest

from hashit import (
    FailureMarker,
    HashEngine,
    InvalidInput,
    UnsupportedAlgorithm,
    compute_digests,
    list_supported_algorithms,
)
from hashit.md4 import md4


def test_list_supported_algorithms_is_sorted_upper_case():
    algos = list_supported_algorithms()
    assert algos == sorted(algos)
    assert all(a == a.upper() for a in algos)
    assert "MD5" in algos and "SHA256" in algos and "NTLM" in algos


def test_single_selector():
    rs = compute_digests("Hello, World!", selector="md5")
    assert list(rs) == ["MD5"]
    assert rs["MD5"] == "65a8e27d8879283831b664bd8b7f0ad4"


def test_all_algorithms_match_supported_list():
    rs = compute_digests("test")
    assert list(rs) == list_supported_algorithms()
    assert len(set(rs)) == len(rs)
    assert not rs.failures()


def test_ntlm_and_md4_selectors():
    assert compute_digests("password", selector="ntlm")["NTLM"] == (
        "8846f7eaee8fb117ad06bdd830b7586c"
    )
    assert compute_digests("abc", selector="MD4")["MD4"] == (
        "a448017aaf21d8525fc10ae87aa6729d"
    )


def test_uppercase_option():
    rs = compute_digests("test", uppercase=True)
    for value in rs.values():
        assert value == value.upper()
    lower = compute_digests("test")
    assert {k: v.upper() for k, v in lower.items()} == dict(rs)


def test_unknown_selector():
    with pytest.raises(UnsupportedAlgorithm):
        compute_digests("test", selector="NOPE")


@pytest.mark.parametrize("empty", ["", "   \n\t", b"", None])
def test_empty_input_rejected(empty):
    with pytest.raises(InvalidInput):
        compute_digests(empty)
    with pytest.raises(InvalidInput):
        compute_digests(empty, selector="MD5")


def test_empty_input_rejected_before_selector_lookup():
    with pytest.raises(InvalidInput):
        compute_digests("", selector="NOPE")


def test_wrong_input_type_rejected():
    with pytest.raises(InvalidInput):
        compute_digests(12345)


def test_deterministic():
    assert compute_digests("same input") == compute_digests("same input")


def test_text_and_utf8_bytes_agree():
    assert compute_digests("héllo") == compute_digests("héllo".encode("utf-8"))


def test_invalid_utf8_bytes_only_fail_ntlm():
    data = b"\xff\xfe\xfd"
    rs = compute_digests(data)
    assert list(rs.failures()) == ["NTLM"]
    assert isinstance(rs["NTLM"], FailureMarker)
    assert rs["MD4"] == md4(data).hex()


def test_lone_surrogate_only_fails_ntlm():
    rs = compute_digests("a\ud800b")
    assert list(rs.failures()) == ["NTLM"]
    assert rs["MD5"]


def test_uppercase_keeps_failure_markers():
    rs = compute_digests(b"\xff\xfe\xfd", uppercase=True)
    assert isinstance(rs["NTLM"], FailureMarker)
    assert "Failed to generate NTLM hash" in rs["NTLM"].reason
    assert rs["MD5"] == rs["MD5"].upper()


def test_parallel_engine_matches_sequential():
    seq = HashEngine().compute_digests("parallel check")
    par = HashEngine(workers=4).compute_digests("parallel check")
    assert par == seq
    assert list(par) == list(seq)


def test_engine_freezes_custom_registry():
    from hashit.registry import AlgorithmRegistry

    reg = AlgorithmRegistry()
    reg.register("md4", md4)
    engine = HashEngine(reg)
    assert reg.frozen
    assert engine.list_supported_algorithms() == ["MD4"]
    assert engine.compute_digests("abc")["MD4"] == "a448017aaf21d8525fc10ae87aa6729d"


@pytest.mark.parametrize("selector", [5, b"MD5", ["MD5"]])
def test_non_string_selector_is_unsupported(selector):
    with pytest.raises(UnsupportedAlgorithm) as info:
        compute_digests("test", selector=selector)
    assert info.value.algorithm == repr(selector)
