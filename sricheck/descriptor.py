from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Tuple
import base64
import binascii

from .errors import EmptyOrInvalidDescriptor, InvalidEncoding, InvalidLength, MalformedToken, UnknownAlgorithm
from .integrity import Accumulator, DigestFactory

# Integrity descriptors are the W3C SRI metadata format:
#   sha256-<base64> sha384-<base64> ...
# Tokens are separated by any whitespace; there is no quoting or escaping.

SEPARATOR = "-"


@dataclass(frozen=True)
class DescriptorToken:
    name: str
    value: str


def split_token(token: str) -> DescriptorToken:
    idx = token.find(SEPARATOR)
    if idx == -1:
        raise MalformedToken(token)
    return DescriptorToken(name=token[:idx], value=token[idx + 1 :])


def parse_tokens(descriptor: str) -> Iterator[DescriptorToken]:
    for field in descriptor.split():
        yield split_token(field)


def decode_value(name: str, value: str, size: int) -> bytes:
    """
    Strictly base64-decode a digest value and check it is exactly `size` bytes long.

    Padding is required and characters outside the standard alphabet are rejected.
    """
    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncoding(name, value, str(e)) from e
    if len(raw) != size:
        raise InvalidLength(name, value, size, len(raw))
    return raw


def build_expectations(
    descriptor: str,
    algorithms: Mapping[str, DigestFactory],
) -> Tuple[Dict[str, List[str]], Dict[str, Accumulator]]:
    """
    Resolve a descriptor into (expected values, accumulators), both keyed by algorithm name.

    Both dicts share the same keys in first-appearance order. Each algorithm gets exactly one
    accumulator however many tokens name it; every value is validated, including repeats.
    Checks run separator, lookup, decoding, length, so multiple defects fail deterministically.
    """
    expected: Dict[str, List[str]] = {}
    hashes: Dict[str, Accumulator] = {}

    for tok in parse_tokens(descriptor):
        h = hashes.get(tok.name)
        if h is not None:
            decode_value(tok.name, tok.value, h.digest_size)
            expected[tok.name].append(tok.value)
            continue

        factory = algorithms.get(tok.name)
        if factory is None:
            raise UnknownAlgorithm(tok.name)
        h = factory()
        decode_value(tok.name, tok.value, h.digest_size)
        expected[tok.name] = [tok.value]
        hashes[tok.name] = h

    if not hashes:
        raise EmptyOrInvalidDescriptor(descriptor)
    return expected, hashes
