from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
import base64

from .descriptor import build_expectations
from .errors import CheckerFinalized, EmptyOrInvalidDescriptor, VerificationFailed
from .integrity import DEFAULT_ALGORITHMS, SHA1_ALGORITHMS, Accumulator, Buffer, DigestFactory
from .render import describe_mismatch, to_hex


class MultiWriter:
    """
    Fan-out sink: every write is forwarded, in order, to each underlying writer.

    Writers need only a `write(data)` method, e.g. a binary file object and a Checker,
    to store content and verify it in the same pass.
    """

    def __init__(self, *writers: Any) -> None:
        self._writers = list(writers)

    def write(self, data: Buffer) -> int:
        size = memoryview(data).nbytes
        for w in self._writers:
            n = w.write(data)
            # None means the writer reports no count; take it as complete.
            if n is not None and n < size:
                raise OSError(f"short write: {n} of {size} bytes")
        return size


class _AccumulatorWriter:
    # Adapts Accumulator.update to the write() shape MultiWriter forwards to.
    __slots__ = ("_h",)

    def __init__(self, h: Accumulator) -> None:
        self._h = h

    def write(self, data: Buffer) -> int:
        self._h.update(data)
        return memoryview(data).nbytes


@dataclass(frozen=True)
class DigestMismatch:
    name: str
    actual: str
    actual_hex: str
    expected: Tuple[str, ...]
    expected_hex: Tuple[str, ...]

    def describe(self) -> str:
        return describe_mismatch(
            self.name, self.actual, self.actual_hex, list(self.expected), list(self.expected_hex)
        )


class Checker:
    """
    Checks a resource against a subresource integrity descriptor.

    Write the content to it (any number of calls, any chunking), then call check() once.
    Only the algorithms the descriptor names are computed, each exactly once.

    Not safe for concurrent use and not reusable: check() finalizes the digests, and a
    second call raises CheckerFinalized. Callers must not mutate a buffer while it is
    being written.
    """

    def __init__(self, expected: Dict[str, List[str]], hashes: Dict[str, Accumulator]) -> None:
        if not hashes:
            raise EmptyOrInvalidDescriptor("")
        if expected.keys() != hashes.keys():
            raise ValueError("expected values and accumulators must name the same algorithms")
        self._expected = expected
        self._hashes = hashes
        writers = [_AccumulatorWriter(h) for h in hashes.values()]
        self._w = writers[0] if len(writers) == 1 else MultiWriter(*writers)
        self._checked = False

    @classmethod
    def from_descriptor(cls, descriptor: str, algorithms: Mapping[str, DigestFactory]) -> "Checker":
        expected, hashes = build_expectations(descriptor, algorithms)
        return cls(expected, hashes)

    @property
    def algorithms(self) -> Tuple[str, ...]:
        return tuple(self._hashes)

    @property
    def checked(self) -> bool:
        return self._checked

    def write(self, data: Buffer) -> int:
        # Never fails; returns the byte count like a file object so it composes with copyfileobj.
        return self._w.write(data)

    def check(self) -> None:
        """Raise VerificationFailed listing every algorithm whose digest matched none of its values."""
        if self._checked:
            raise CheckerFinalized()
        self._checked = True

        mismatches: List[DigestMismatch] = []
        for name, h in self._hashes.items():
            raw = h.digest()
            value = base64.b64encode(raw).decode("ascii")
            expected = self._expected[name]
            if value not in expected:
                mismatches.append(
                    DigestMismatch(
                        name=name,
                        actual=value,
                        actual_hex=raw.hex(),
                        expected=tuple(expected),
                        expected_hex=tuple(to_hex(expected)),
                    )
                )
        if mismatches:
            raise VerificationFailed(mismatches)

    def expected(self, name: str) -> List[str]:
        """Base64 values the descriptor gave for `name`, in descriptor order; [] if absent."""
        return list(self._expected.get(name, ()))

    def expected_hex(self, name: str) -> List[str]:
        return to_hex(self._expected.get(name, ()))


@dataclass(frozen=True)
class CheckerConfig:
    allow_sha1: bool = False  # legacy, not recommended by the SRI standard
    extra_algorithms: Mapping[str, DigestFactory] = field(default_factory=dict)

    def algorithms(self) -> Mapping[str, DigestFactory]:
        base = SHA1_ALGORITHMS if self.allow_sha1 else DEFAULT_ALGORITHMS
        if not self.extra_algorithms:
            return base
        return MappingProxyType({**base, **self.extra_algorithms})


def parse(descriptor: str, algorithms: Mapping[str, DigestFactory]) -> Checker:
    return Checker.from_descriptor(descriptor, algorithms)


def new_checker(sri: str, config: Optional[CheckerConfig] = None) -> Checker:
    """
    Create a Checker supporting SHA256, SHA384 and SHA512.

    Only the hashes the descriptor names are computed. Pass a CheckerConfig to allow SHA1 or
    register further algorithms.
    """
    cfg = config or CheckerConfig()
    return parse(sri, cfg.algorithms())


def new_checker_with_sha1(sri: str) -> Checker:
    """Like new_checker, but also accepts the legacy sha1 algorithm. Use at your own risk."""
    return parse(sri, SHA1_ALGORITHMS)


def new_checker_for_hashes(sri: str, algorithms: Mapping[str, DigestFactory]) -> Checker:
    # No defaults are added: only `algorithms` is consulted.
    return parse(sri, algorithms)


def verify_chunks(chunks: Iterable[Buffer], sri: str, config: Optional[CheckerConfig] = None) -> None:
    c = new_checker(sri, config)
    for chunk in chunks:
        c.write(chunk)
    c.check()
