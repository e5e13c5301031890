from __future__ import annotations

from typing import Iterable, List
import base64


def to_hex(values: Iterable[str]) -> List[str]:
    """
    Re-encode base64 digest values as lowercase hex.

    Values are expected to have been validated by the descriptor parser already.
    """
    return [base64.b64decode(v).hex() for v in values]


def describe_expected(expected: List[str]) -> str:
    if len(expected) == 1:
        return expected[0]
    return "one of [" + ", ".join(expected) + "]"


def describe_mismatch(
    name: str,
    actual: str,
    actual_hex: str,
    expected: List[str],
    expected_hex: List[str],
) -> str:
    return (
        f"violated {name} integrity check; was {actual}, expected {describe_expected(expected)} "
        f"(a.k.a. was {actual_hex}, expected {describe_expected(expected_hex)})"
    )
