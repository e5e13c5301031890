import base64
import hashlib

import pytest

from sricheck import (
    DEFAULT_ALGORITHMS,
    DescriptorError,
    DescriptorToken,
    EmptyOrInvalidDescriptor,
    InvalidEncoding,
    InvalidLength,
    MalformedToken,
    UnknownAlgorithm,
    new_checker,
    parse,
    parse_tokens,
)
from sricheck.descriptor import build_expectations, decode_value, split_token
from tests.vectors import SHA256_OK, SHA384_BAD, SHA512_OK


def test_split_token_on_first_separator():
    assert split_token("sha256-abc") == DescriptorToken("sha256", "abc")
    assert split_token("x-y-z") == DescriptorToken("x", "y-z")
    assert split_token("sha256-") == DescriptorToken("sha256", "")


def test_parse_tokens_any_whitespace():
    toks = list(parse_tokens("  a-1\tb-2\n\n c-3  "))
    assert [t.name for t in toks] == ["a", "b", "c"]
    assert list(parse_tokens(" \n\t ")) == []


def test_not_base64():
    with pytest.raises(InvalidEncoding) as ei:
        new_checker("sha256-wibblewibblewibble")
    assert ei.value.name == "sha256"
    assert ei.value.value == "wibblewibblewibble"


def test_invalid_hash_length():
    with pytest.raises(InvalidLength) as ei:
        new_checker(f"sha256-{SHA384_BAD}")
    assert (ei.value.name, ei.value.expected, ei.value.actual) == ("sha256", 32, 48)


def test_invalid_hash_length_second_time():
    # No new accumulator is made for a repeat, but its value is still validated.
    with pytest.raises(InvalidLength) as ei:
        new_checker(f"sha256-{SHA256_OK} sha256-{SHA384_BAD}")
    assert ei.value.actual == 48


def test_invalid_encoding_second_time():
    with pytest.raises(InvalidEncoding):
        new_checker(f"sha256-{SHA256_OK} sha256-not!base64")


def test_empty_value_is_wrong_length():
    with pytest.raises(InvalidLength) as ei:
        new_checker("sha256-")
    assert ei.value.actual == 0


def test_nonsense_input():
    with pytest.raises(MalformedToken) as ei:
        new_checker("wibble wibble wibble")
    assert ei.value.token == "wibble"


@pytest.mark.parametrize("descriptor", ["", "   ", "\n\t\n"])
def test_no_input(descriptor):
    with pytest.raises(EmptyOrInvalidDescriptor):
        new_checker(descriptor)


def test_unknown_algorithm():
    with pytest.raises(UnknownAlgorithm) as ei:
        new_checker(f"md5-{SHA256_OK}")
    assert ei.value.name == "md5"


def test_empty_algorithm_name_is_unknown():
    with pytest.raises(UnknownAlgorithm) as ei:
        new_checker(f"-{SHA256_OK}")
    assert ei.value.name == ""


def test_algorithm_names_are_case_sensitive():
    with pytest.raises(UnknownAlgorithm):
        new_checker(f"SHA256-{SHA256_OK}")


def test_error_order_is_by_token_then_check():
    # Lookup happens before the value is decoded.
    with pytest.raises(UnknownAlgorithm):
        new_checker("md5-not!base64")
    # Decoding happens before the length check.
    with pytest.raises(InvalidEncoding):
        new_checker("sha256-not!base64")
    # The first defective token decides, whatever follows it.
    with pytest.raises(UnknownAlgorithm):
        new_checker("md5-xx wibble")
    with pytest.raises(MalformedToken):
        new_checker(f"sha256-{SHA256_OK} wibble md5-xx")


def test_all_parse_errors_are_value_errors():
    for descriptor in ["", "wibble", "md5-xx", "sha256-###", "sha256-AAAA"]:
        with pytest.raises(DescriptorError):
            new_checker(descriptor)
        with pytest.raises(ValueError):
            new_checker(descriptor)


def test_decode_value_requires_padding():
    raw = hashlib.sha256(b"").digest()
    value = base64.b64encode(raw).decode()
    assert decode_value("sha256", value, 32) == raw
    with pytest.raises(InvalidEncoding):
        decode_value("sha256", value.rstrip("="), 32)


def test_one_accumulator_per_algorithm():
    made = []

    def factory():
        h = hashlib.sha256()
        made.append(h)
        return h

    expected, hashes = build_expectations(
        f"sha256-{SHA256_OK} sha256-{SHA256_OK} sha256-{SHA256_OK}", {"sha256": factory}
    )
    assert len(made) == 1
    assert expected == {"sha256": [SHA256_OK] * 3}
    assert list(hashes) == ["sha256"]


def test_maps_share_keys_in_descriptor_order():
    expected, hashes = build_expectations(
        f"sha512-{SHA512_OK} sha256-{SHA256_OK} sha512-{SHA512_OK}", DEFAULT_ALGORITHMS
    )
    assert list(expected) == list(hashes) == ["sha512", "sha256"]


def test_parse_with_explicit_table():
    c = parse(f"sha256-{SHA256_OK}", DEFAULT_ALGORITHMS)
    assert c.algorithms == ("sha256",)
