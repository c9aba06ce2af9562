"""Shared test fixtures for i2p-identity."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed25519, rsa

from i2p_identity.core import keys_and_cert_to_bytes
from i2p_identity.models import KeysAndCert, PublicKey, SigningPublicKey
from i2p_identity.registry import SigningKeyAlgorithm

#: wire id, key length, legacy-slot padding, overflow, as published for each type.
LAYOUT: dict[SigningKeyAlgorithm, tuple[int, int, int, int]] = {
    SigningKeyAlgorithm.DSA_SHA1: (0, 128, 0, 0),
    SigningKeyAlgorithm.ECDSA_SHA256_P256: (1, 64, 64, 0),
    SigningKeyAlgorithm.ECDSA_SHA384_P384: (2, 96, 32, 0),
    SigningKeyAlgorithm.ECDSA_SHA512_P521: (3, 132, 0, 4),
    SigningKeyAlgorithm.RSA_SHA256_2048: (4, 256, 0, 128),
    SigningKeyAlgorithm.RSA_SHA384_3072: (5, 384, 0, 256),
    SigningKeyAlgorithm.RSA_SHA512_4096: (6, 512, 0, 384),
    SigningKeyAlgorithm.EdDSA_SHA512_Ed25519: (7, 32, 96, 0),
    SigningKeyAlgorithm.EdDSA_SHA512_Ed25519ph: (8, 32, 96, 0),
}

ALL_ALGORITHMS = list(SigningKeyAlgorithm)

# ---------------------------------------------------------------------------
# Raw key material, one real public key per algorithm
# ---------------------------------------------------------------------------


def _ec_point(curve: ec.EllipticCurve, coordinate_size: int) -> bytes:
    numbers = ec.generate_private_key(curve).public_key().public_numbers()
    return numbers.x.to_bytes(coordinate_size, "big") + numbers.y.to_bytes(
        coordinate_size, "big"
    )


def _rsa_modulus(key_size: int) -> bytes:
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
    return private_key.public_key().public_numbers().n.to_bytes(key_size // 8, "big")


def _ed25519() -> bytes:
    return ed25519.Ed25519PrivateKey.generate().public_key().public_bytes_raw()


@pytest.fixture(scope="session")
def signing_key_bytes() -> dict[SigningKeyAlgorithm, bytes]:
    """Raw signing public key bytes for every algorithm."""
    dsa_key = dsa.generate_private_key(key_size=1024)
    return {
        SigningKeyAlgorithm.DSA_SHA1: dsa_key.public_key()
        .public_numbers()
        .y.to_bytes(128, "big"),
        SigningKeyAlgorithm.ECDSA_SHA256_P256: _ec_point(ec.SECP256R1(), 32),
        SigningKeyAlgorithm.ECDSA_SHA384_P384: _ec_point(ec.SECP384R1(), 48),
        SigningKeyAlgorithm.ECDSA_SHA512_P521: _ec_point(ec.SECP521R1(), 66),
        SigningKeyAlgorithm.RSA_SHA256_2048: _rsa_modulus(2048),
        SigningKeyAlgorithm.RSA_SHA384_3072: _rsa_modulus(3072),
        SigningKeyAlgorithm.RSA_SHA512_4096: _rsa_modulus(4096),
        SigningKeyAlgorithm.EdDSA_SHA512_Ed25519: _ed25519(),
        SigningKeyAlgorithm.EdDSA_SHA512_Ed25519ph: _ed25519(),
    }


@pytest.fixture(scope="session")
def public_key_bytes() -> bytes:
    """Stand-in 256-byte ElGamal public key."""
    return bytes(range(256))


@pytest.fixture(scope="session")
def public_key(public_key_bytes: bytes) -> PublicKey:
    return PublicKey(data=public_key_bytes)


@pytest.fixture(scope="session")
def signing_keys(
    signing_key_bytes: dict[SigningKeyAlgorithm, bytes],
) -> dict[SigningKeyAlgorithm, SigningPublicKey]:
    return {
        algorithm: SigningPublicKey(algorithm=algorithm, data=data)
        for algorithm, data in signing_key_bytes.items()
    }


@pytest.fixture(scope="session")
def identities(
    public_key: PublicKey,
    signing_keys: dict[SigningKeyAlgorithm, SigningPublicKey],
) -> dict[SigningKeyAlgorithm, KeysAndCert]:
    """One well-formed identity per signing algorithm."""
    return {
        algorithm: KeysAndCert.from_keys(public_key, signing_key)
        for algorithm, signing_key in signing_keys.items()
    }


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


@pytest.fixture()
def ed25519_identity_file(
    tmp_path: Path, identities: dict[SigningKeyAlgorithm, KeysAndCert]
) -> Path:
    """An encoded Ed25519 identity written to tmp_path/ed25519.dat."""
    path = tmp_path / "ed25519.dat"
    path.write_bytes(
        keys_and_cert_to_bytes(identities[SigningKeyAlgorithm.EdDSA_SHA512_Ed25519])
    )
    return path


@pytest.fixture()
def rsa4096_identity_file(
    tmp_path: Path, identities: dict[SigningKeyAlgorithm, KeysAndCert]
) -> Path:
    """An encoded RSA_SHA512_4096 identity written to tmp_path/rsa4096.dat."""
    path = tmp_path / "rsa4096.dat"
    path.write_bytes(
        keys_and_cert_to_bytes(identities[SigningKeyAlgorithm.RSA_SHA512_4096])
    )
    return path


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers installed by ``setup_logging`` so streams don't leak between tests."""
    yield
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root_logger.removeHandler(handler)
