"""Algorithm registry for signing and crypto (encryption) public keys.

Both registries are constant lookup tables keyed by wire id.  Adding an
algorithm means adding an enum member and its length here; nothing else in
the codec branches on individual algorithms.
"""

from __future__ import annotations

from enum import IntEnum

from i2p_identity.errors import UnsupportedAlgorithm

#: Size of the signing-key slot in the legacy 384-byte layout.
LEGACY_SLOT_SIZE = 128


class SigningKeyAlgorithm(IntEnum):
    """Signing public key types, valued by their wire id."""

    DSA_SHA1 = 0
    ECDSA_SHA256_P256 = 1
    ECDSA_SHA384_P384 = 2
    ECDSA_SHA512_P521 = 3
    RSA_SHA256_2048 = 4
    RSA_SHA384_3072 = 5
    RSA_SHA512_4096 = 6
    EdDSA_SHA512_Ed25519 = 7
    EdDSA_SHA512_Ed25519ph = 8


class PublicKeyAlgorithm(IntEnum):
    """Crypto (encryption) public key types, valued by their wire id."""

    ElGamal = 0


_SIGNING_KEY_LENGTHS: dict[SigningKeyAlgorithm, int] = {
    SigningKeyAlgorithm.DSA_SHA1: 128,
    SigningKeyAlgorithm.ECDSA_SHA256_P256: 64,
    SigningKeyAlgorithm.ECDSA_SHA384_P384: 96,
    SigningKeyAlgorithm.ECDSA_SHA512_P521: 132,
    SigningKeyAlgorithm.RSA_SHA256_2048: 256,
    SigningKeyAlgorithm.RSA_SHA384_3072: 384,
    SigningKeyAlgorithm.RSA_SHA512_4096: 512,
    SigningKeyAlgorithm.EdDSA_SHA512_Ed25519: 32,
    SigningKeyAlgorithm.EdDSA_SHA512_Ed25519ph: 32,
}

_PUBLIC_KEY_LENGTHS: dict[PublicKeyAlgorithm, int] = {
    PublicKeyAlgorithm.ElGamal: 256,
}

#: Algorithm assumed when an identity carries no Key certificate.
DEFAULT_SIGNING_ALGORITHM = SigningKeyAlgorithm.DSA_SHA1


# ---------------------------------------------------------------------------
# Signing keys
# ---------------------------------------------------------------------------


def signing_key_length(algorithm: SigningKeyAlgorithm) -> int:
    """Return the fixed byte length of a signing public key for *algorithm*."""
    return _SIGNING_KEY_LENGTHS[algorithm]


def signing_algorithm_from_wire_id(wire_id: int) -> SigningKeyAlgorithm:
    """Map a 16-bit wire id to its :class:`SigningKeyAlgorithm`.

    Raises:
        UnsupportedAlgorithm: if *wire_id* is not a known signing key type.
    """
    try:
        return SigningKeyAlgorithm(wire_id)
    except ValueError:
        raise UnsupportedAlgorithm("signing public", wire_id) from None


def padding_size(algorithm: SigningKeyAlgorithm) -> tuple[int, int]:
    """Return ``(padding, overflow)`` for placing *algorithm*'s key in the legacy slot.

    ``padding`` is the filler that precedes a key shorter than the slot and
    ``overflow`` is the number of trailing key bytes that do not fit in it and
    travel in the Key certificate instead.  At most one of them is non-zero.
    """
    size = LEGACY_SLOT_SIZE - signing_key_length(algorithm)
    if size < 0:
        return 0, -size
    return size, 0


# ---------------------------------------------------------------------------
# Crypto keys
# ---------------------------------------------------------------------------


def public_key_length(algorithm: PublicKeyAlgorithm) -> int:
    """Return the fixed byte length of a crypto public key for *algorithm*."""
    return _PUBLIC_KEY_LENGTHS[algorithm]


def public_algorithm_from_wire_id(wire_id: int) -> PublicKeyAlgorithm:
    """Map a 16-bit wire id to its :class:`PublicKeyAlgorithm`.

    Raises:
        UnsupportedAlgorithm: if *wire_id* is not a known crypto key type.
    """
    try:
        return PublicKeyAlgorithm(wire_id)
    except ValueError:
        raise UnsupportedAlgorithm("crypto public", wire_id) from None


__all__ = [
    "DEFAULT_SIGNING_ALGORITHM",
    "LEGACY_SLOT_SIZE",
    "PublicKeyAlgorithm",
    "SigningKeyAlgorithm",
    "padding_size",
    "public_algorithm_from_wire_id",
    "public_key_length",
    "signing_algorithm_from_wire_id",
    "signing_key_length",
]
