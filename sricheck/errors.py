from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .checker import DigestMismatch


class IntegrityError(Exception):
    """Base class for every error raised by sricheck."""


class DescriptorError(IntegrityError, ValueError):
    """The integrity descriptor string could not be parsed."""


class MalformedToken(DescriptorError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Invalid subresource integrity substring: {token}")


class UnknownAlgorithm(DescriptorError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown hash type {name}")


class InvalidEncoding(DescriptorError):
    def __init__(self, name: str, value: str, reason: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid base64 string for {name}: {reason}")


class InvalidLength(DescriptorError):
    def __init__(self, name: str, value: str, expected: int, actual: int) -> None:
        self.name = name
        self.value = value
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Value {value} is not valid for hash type {name}; should be {expected} bytes, was {actual}"
        )


class EmptyOrInvalidDescriptor(DescriptorError):
    def __init__(self, descriptor: str) -> None:
        self.descriptor = descriptor
        super().__init__(f"Invalid subresource integrity string (empty?): {descriptor}")


class VerificationFailed(IntegrityError):
    """
    Content did not match the descriptor.

    Carries one DigestMismatch per failing algorithm, not just the first.
    """

    def __init__(self, mismatches: List["DigestMismatch"]) -> None:
        self.mismatches = list(mismatches)
        detail = "; ".join(m.describe() for m in self.mismatches)
        super().__init__(f"subresource integrity failed: {detail}")

    @property
    def algorithms(self) -> List[str]:
        return [m.name for m in self.mismatches]


class CheckerFinalized(IntegrityError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("check() has already been called on this Checker; create a new one")
