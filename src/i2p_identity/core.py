"""Key codecs and the KeysAndCert (router identity) encoder/decoder."""

from __future__ import annotations

import io
from typing import BinaryIO

from i2p_identity.certificate import decode_certificate, encode_certificate
from i2p_identity.errors import LengthMismatch
from i2p_identity.models import (
    KeyCertificate,
    KeysAndCert,
    PublicKey,
    SigningPublicKey,
    signing_algorithm_for,
)
from i2p_identity.registry import (
    LEGACY_SLOT_SIZE,
    PublicKeyAlgorithm,
    SigningKeyAlgorithm,
    padding_size,
    public_key_length,
    signing_key_length,
)
from i2p_identity.wire import read_exact, write_all

#: Public key plus legacy signing-key slot, read before the certificate.
STAGING_SIZE = public_key_length(PublicKeyAlgorithm.ElGamal) + LEGACY_SLOT_SIZE

# ---------------------------------------------------------------------------
# Key value codecs
# ---------------------------------------------------------------------------


def decode_public_key(reader: BinaryIO) -> PublicKey:
    """Read an ElGamal public key (256 bytes) from *reader*."""
    algorithm = PublicKeyAlgorithm.ElGamal
    data = read_exact(reader, public_key_length(algorithm))
    return PublicKey(algorithm=algorithm, data=data)


def encode_public_key(public_key: PublicKey, writer: BinaryIO) -> int:
    return write_all(writer, public_key.data)


def decode_signing_public_key(
    algorithm: SigningKeyAlgorithm, reader: BinaryIO
) -> SigningPublicKey:
    """Read a signing key of *algorithm* from *reader*.

    Keys shorter than the legacy slot are preceded by filler bytes, which are
    skipped without inspection.
    """
    padding, _ = padding_size(algorithm)
    length = signing_key_length(algorithm)
    read_exact(reader, padding)
    data = read_exact(reader, length)
    if len(data) != length:
        raise LengthMismatch(
            f"Expected signing public key of length {length}, "
            f"got one of length {len(data)}"
        )
    return SigningPublicKey(algorithm=algorithm, data=data)


def encode_signing_public_key(signing_key: SigningPublicKey, writer: BinaryIO) -> int:
    """Write the raw key bytes only; slot placement is the identity's concern."""
    return write_all(writer, signing_key.data)


# ---------------------------------------------------------------------------
# KeysAndCert
# ---------------------------------------------------------------------------


def reconstitute_keys(
    algorithm: SigningKeyAlgorithm,
    staging: bytes,
    extra_bytes: bytes = b"",
) -> tuple[PublicKey, SigningPublicKey]:
    """Rebuild both keys from the 384-byte staging buffer and overflow bytes.

    *staging* is the public key followed by the legacy signing-key slot, as
    read off the wire.  *extra_bytes* are the signing-key bytes carried by
    the Key certificate; appending them restores the full key material.
    """
    if len(staging) != STAGING_SIZE:
        raise LengthMismatch(
            f"Staging buffer must be {STAGING_SIZE} bytes, got {len(staging)}"
        )
    reader = io.BytesIO(staging + extra_bytes)
    public_key = decode_public_key(reader)
    signing_key = decode_signing_public_key(algorithm, reader)
    return public_key, signing_key


def decode_keys_and_cert(reader: BinaryIO) -> KeysAndCert:
    """Decode a router identity from *reader*.

    Raises:
        CodecError: any subclass, on the first failure; nothing is returned
            for a partially read identity.
    """
    staging = read_exact(reader, STAGING_SIZE)
    certificate = decode_certificate(reader)

    extra_bytes = b""
    if isinstance(certificate, KeyCertificate):
        extra_bytes = certificate.extra_bytes
    algorithm = signing_algorithm_for(certificate)

    public_key, signing_key = reconstitute_keys(algorithm, staging, extra_bytes)
    return KeysAndCert(
        public_key=public_key,
        signing_key=signing_key,
        certificate=certificate,
    )


def keys_and_cert_to_bytes(identity: KeysAndCert) -> bytes:
    """Return the wire encoding of *identity*.

    The legacy slot holds zero filler followed by the leading bytes of the
    signing key; whatever does not fit is written into a Key certificate
    whose ``extra_bytes`` are recomputed here from the signing key.
    """
    algorithm = signing_algorithm_for(identity.certificate)
    padding, overflow = padding_size(algorithm)
    length = signing_key_length(algorithm)
    in_slot = length - overflow

    certificate = identity.certificate
    if isinstance(certificate, KeyCertificate):
        certificate = KeyCertificate(
            signing_key_algorithm=certificate.signing_key_algorithm,
            crypto_key_algorithm=certificate.crypto_key_algorithm,
            extra_bytes=KeyCertificate.overflow_bytes(identity.signing_key),
        )
        carried = len(certificate.extra_bytes)
    else:
        carried = 0

    if in_slot > LEGACY_SLOT_SIZE or in_slot + carried != length:
        raise LengthMismatch(
            f"{algorithm.name} key split {in_slot}+{carried} does not cover "
            f"{length} bytes within a {LEGACY_SLOT_SIZE}-byte slot"
        )

    buffer = io.BytesIO()
    encode_public_key(identity.public_key, buffer)
    buffer.write(bytes(padding))
    buffer.write(identity.signing_key.data[:in_slot])
    encode_certificate(certificate, buffer)
    return buffer.getvalue()


def encode_keys_and_cert(identity: KeysAndCert, writer: BinaryIO) -> int:
    """Write *identity* to *writer* in a single write.

    Returns:
        The number of bytes written.
    """
    return write_all(writer, keys_and_cert_to_bytes(identity))


def keys_and_cert_from_bytes(data: bytes) -> KeysAndCert:
    """Decode an identity that must occupy all of *data*."""
    reader = io.BytesIO(data)
    identity = decode_keys_and_cert(reader)
    trailing = len(data) - reader.tell()
    if trailing:
        raise LengthMismatch(f"{trailing} trailing bytes after router identity")
    return identity


__all__ = [
    "STAGING_SIZE",
    "decode_keys_and_cert",
    "decode_public_key",
    "decode_signing_public_key",
    "encode_keys_and_cert",
    "encode_public_key",
    "encode_signing_public_key",
    "keys_and_cert_from_bytes",
    "keys_and_cert_to_bytes",
    "reconstitute_keys",
]
