"""Error taxonomy for the identity codec."""

from __future__ import annotations


class CodecError(Exception):
    """Base class for every encode/decode failure."""


class TruncatedInput(CodecError):
    """The stream ended before the format required it to."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual


class UnsupportedAlgorithm(CodecError):
    """A signing or crypto key wire id is not in the registry."""

    def __init__(self, kind: str, wire_id: int) -> None:
        super().__init__(f"Unknown {kind} key type {wire_id}")
        self.kind = kind
        self.wire_id = wire_id


class UnknownCertificateType(CodecError):
    """The certificate envelope carries an unrecognised type tag."""

    def __init__(self, tag: int) -> None:
        super().__init__(f"Unexpected cert type {tag} found")
        self.tag = tag


class InvalidEncoding(CodecError):
    """A HashCash certificate payload is not valid UTF-8."""


class LengthMismatch(CodecError):
    """Key material length disagrees with the algorithm registry."""


class IoFailure(CodecError):
    """The underlying byte stream raised an error."""


__all__ = [
    "CodecError",
    "InvalidEncoding",
    "IoFailure",
    "LengthMismatch",
    "TruncatedInput",
    "UnknownCertificateType",
    "UnsupportedAlgorithm",
]
