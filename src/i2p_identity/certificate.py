"""Certificate envelope and Key certificate payload codecs.

Envelope layout: 1-byte type tag, 2-byte big-endian payload length ``L``,
then exactly ``L`` payload bytes.  A Key certificate payload is the 2-byte
signing key wire id, the 2-byte crypto key wire id, then the signing-key
bytes that overflow the legacy slot.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import BinaryIO

from i2p_identity.errors import (
    InvalidEncoding,
    LengthMismatch,
    UnknownCertificateType,
)
from i2p_identity.models import (
    MAX_PAYLOAD_SIZE,
    Certificate,
    CertificateType,
    HashCashCertificate,
    HiddenCertificate,
    KeyCertificate,
    MultipleCertificate,
    NullCertificate,
    SignedCertificate,
)
from i2p_identity.registry import (
    padding_size,
    public_algorithm_from_wire_id,
    signing_algorithm_from_wire_id,
)
from i2p_identity.wire import pack_u8, pack_u16, read_exact, read_u8, read_u16, write_all

# ---------------------------------------------------------------------------
# Key certificate payload
# ---------------------------------------------------------------------------


def encode_key_certificate(key_certificate: KeyCertificate) -> bytes:
    """Return the payload bytes of *key_certificate*."""
    return (
        pack_u16(key_certificate.signing_key_algorithm.value)
        + pack_u16(key_certificate.crypto_key_algorithm.value)
        + key_certificate.extra_bytes
    )


def decode_key_certificate(payload: bytes) -> KeyCertificate:
    """Parse a Key certificate from the complete envelope *payload*.

    Everything after the two algorithm ids is taken as ``extra_bytes``.

    Raises:
        TruncatedInput: if *payload* is too short to hold both ids.
        UnsupportedAlgorithm: if either id is unknown.
        LengthMismatch: if the extra bytes disagree with the signing
            algorithm's overflow.
    """
    reader = io.BytesIO(payload)
    signing_key_algorithm = signing_algorithm_from_wire_id(read_u16(reader))
    crypto_key_algorithm = public_algorithm_from_wire_id(read_u16(reader))
    extra_bytes = reader.read()

    _, overflow = padding_size(signing_key_algorithm)
    if len(extra_bytes) != overflow:
        raise LengthMismatch(
            f"{signing_key_algorithm.name} Key certificate must carry {overflow} "
            f"extra bytes, found {len(extra_bytes)}"
        )
    return KeyCertificate(
        signing_key_algorithm=signing_key_algorithm,
        crypto_key_algorithm=crypto_key_algorithm,
        extra_bytes=extra_bytes,
    )


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


def certificate_payload(certificate: Certificate) -> bytes:
    """Return the payload bytes that follow the envelope header."""
    if isinstance(certificate, KeyCertificate):
        return encode_key_certificate(certificate)
    if isinstance(certificate, HashCashCertificate):
        return certificate.text.encode("utf-8")
    if isinstance(certificate, (SignedCertificate, MultipleCertificate)):
        return certificate.payload
    return b""


def encode_certificate(certificate: Certificate, writer: BinaryIO) -> int:
    """Write *certificate* as a tag/length/payload envelope.

    Returns:
        The number of bytes written.
    """
    payload = certificate_payload(certificate)
    if len(payload) > MAX_PAYLOAD_SIZE:
        raise LengthMismatch(
            f"Certificate payload of {len(payload)} bytes exceeds {MAX_PAYLOAD_SIZE}"
        )
    header = pack_u8(certificate.cert_type.value) + pack_u16(len(payload))
    return write_all(writer, header + payload)


def _decode_hash_cash(payload: bytes) -> HashCashCertificate:
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidEncoding(f"HashCash certificate is not UTF-8: {exc}") from exc
    return HashCashCertificate(text=text)


# Null and Hidden carry no payload; any bytes announced for them are dropped.
_PAYLOAD_DECODERS: dict[int, Callable[[bytes], Certificate]] = {
    CertificateType.NULL: lambda _payload: NullCertificate(),
    CertificateType.HASH_CASH: _decode_hash_cash,
    CertificateType.HIDDEN: lambda _payload: HiddenCertificate(),
    CertificateType.SIGNED: lambda payload: SignedCertificate(payload=payload),
    CertificateType.MULTIPLE: lambda payload: MultipleCertificate(payload=payload),
    CertificateType.KEY: decode_key_certificate,
}


def decode_certificate(reader: BinaryIO) -> Certificate:
    """Read one certificate envelope from *reader*.

    Exactly the announced payload is consumed, so bytes that follow the
    certificate in the stream are left untouched.

    Raises:
        TruncatedInput: if the stream ends inside the envelope.
        UnknownCertificateType: if the tag is not recognised.
        InvalidEncoding: if a HashCash payload is not UTF-8.
    """
    tag = read_u8(reader)
    length = read_u16(reader)
    payload = read_exact(reader, length)

    decoder = _PAYLOAD_DECODERS.get(tag)
    if decoder is None:
        raise UnknownCertificateType(tag)
    return decoder(payload)


__all__ = [
    "certificate_payload",
    "decode_certificate",
    "decode_key_certificate",
    "encode_certificate",
    "encode_key_certificate",
]
