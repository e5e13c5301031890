from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from types import MappingProxyType
from typing import Callable, Mapping, Protocol, Union
import hashlib

# Digest accumulators and the algorithm tables a descriptor is resolved against.
# Any hashlib hash object already satisfies Accumulator, so custom tables can map
# names straight to constructors such as hashlib.md5.

Buffer = Union[bytes, bytearray, memoryview]


class Accumulator(Protocol):
    digest_size: int

    def update(self, data: Buffer) -> None: ...

    def digest(self) -> bytes: ...


DigestFactory = Callable[[], Accumulator]


@dataclass
class RunningDigest:
    algo: str
    _h: "hashlib._Hash" = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._h = hashlib.new(self.algo)

    @property
    def digest_size(self) -> int:
        return self._h.digest_size

    def update(self, data: Buffer) -> None:
        self._h.update(data)

    def digest(self) -> bytes:
        return self._h.digest()

    def hexdigest(self) -> str:
        return self._h.hexdigest()


def digest_factory(algo: str) -> DigestFactory:
    """
    Return a zero-argument constructor of RunningDigest for a hashlib algorithm name.

    Raises ValueError up front for names hashlib does not know, rather than on first use.
    """
    if algo not in hashlib.algorithms_available:
        raise ValueError(f"hashlib does not provide {algo!r}")
    return partial(RunningDigest, algo)


# The three functions the SRI recommendation requires user agents to support.
DEFAULT_ALGORITHMS: Mapping[str, DigestFactory] = MappingProxyType(
    {
        "sha256": digest_factory("sha256"),
        "sha384": digest_factory("sha384"),
        "sha512": digest_factory("sha512"),
    }
)

# SHA-1 is not recommended by the standard; only for compatibility with old descriptors.
SHA1_ALGORITHMS: Mapping[str, DigestFactory] = MappingProxyType(
    {"sha1": digest_factory("sha1"), **DEFAULT_ALGORITHMS}
)
