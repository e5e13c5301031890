"""Subresource Integrity (SRI) checking for byte streams.

A Checker is built from an integrity descriptor such as
``sha256-y1v31NktLrKLVp1gbS7zjWtYgDICENEw7hKLJHcw4E0=``, fed content through ``write``
as it arrives, and verified once with ``check``. See https://www.w3.org/TR/SRI/.

The package has no dependencies beyond the standard library's hashlib; further digest
algorithms can be registered through a caller-supplied table.
"""

from .checker import (
    Checker,
    CheckerConfig,
    DigestMismatch,
    MultiWriter,
    new_checker,
    new_checker_for_hashes,
    new_checker_with_sha1,
    parse,
    verify_chunks,
)
from .descriptor import DescriptorToken, parse_tokens
from .errors import (
    CheckerFinalized,
    DescriptorError,
    EmptyOrInvalidDescriptor,
    IntegrityError,
    InvalidEncoding,
    InvalidLength,
    MalformedToken,
    UnknownAlgorithm,
    VerificationFailed,
)
from .integrity import DEFAULT_ALGORITHMS, SHA1_ALGORITHMS, Accumulator, RunningDigest, digest_factory

__all__ = [
    "Checker",
    "CheckerConfig",
    "DigestMismatch",
    "MultiWriter",
    "new_checker",
    "new_checker_for_hashes",
    "new_checker_with_sha1",
    "parse",
    "verify_chunks",
    "DescriptorToken",
    "parse_tokens",
    "IntegrityError",
    "DescriptorError",
    "MalformedToken",
    "UnknownAlgorithm",
    "InvalidEncoding",
    "InvalidLength",
    "EmptyOrInvalidDescriptor",
    "VerificationFailed",
    "CheckerFinalized",
    "Accumulator",
    "RunningDigest",
    "digest_factory",
    "DEFAULT_ALGORITHMS",
    "SHA1_ALGORITHMS",
]
