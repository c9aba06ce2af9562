"""Pydantic models for i2p-identity.

Every model is frozen: identities are value objects built either from fresh
key material or by decoding a byte stream, and never mutated afterwards.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from i2p_identity.registry import (
    DEFAULT_SIGNING_ALGORITHM,
    LEGACY_SLOT_SIZE,
    PublicKeyAlgorithm,
    SigningKeyAlgorithm,
    padding_size,
    public_key_length,
    signing_key_length,
)

#: Largest payload a certificate envelope can describe (u16 length field).
MAX_PAYLOAD_SIZE = 0xFFFF
#: Tag byte plus the two length bytes.
ENVELOPE_HEADER_SIZE = 3
#: Signing and crypto wire ids that open a Key certificate payload.
KEY_CERTIFICATE_HEADER_SIZE = 4

_VALUE_CONFIG = ConfigDict(
    frozen=True,
    ser_json_bytes="base64",
    val_json_bytes="base64",
)


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------


class PublicKey(BaseModel):
    """Crypto (encryption) public key, held as an opaque blob."""

    model_config = _VALUE_CONFIG

    algorithm: PublicKeyAlgorithm = PublicKeyAlgorithm.ElGamal
    data: bytes

    @model_validator(mode="after")
    def _check_length(self) -> PublicKey:
        expected = public_key_length(self.algorithm)
        if len(self.data) != expected:
            raise ValueError(
                f"{self.algorithm.name} public key must be {expected} bytes, "
                f"got {len(self.data)}"
            )
        return self


class SigningPublicKey(BaseModel):
    """Signing public key tagged with the algorithm that fixes its length."""

    model_config = _VALUE_CONFIG

    algorithm: SigningKeyAlgorithm
    data: bytes

    @model_validator(mode="after")
    def _check_length(self) -> SigningPublicKey:
        expected = signing_key_length(self.algorithm)
        if len(self.data) != expected:
            raise ValueError(
                f"Expected signing public key of length {expected}, "
                f"got one of length {len(self.data)}"
            )
        return self

    @property
    def length(self) -> int:
        return len(self.data)


# ---------------------------------------------------------------------------
# Certificates
# ---------------------------------------------------------------------------


class CertificateType(IntEnum):
    """Certificate envelope type tags."""

    NULL = 0
    HASH_CASH = 1
    HIDDEN = 2
    SIGNED = 3
    MULTIPLE = 4
    KEY = 5


class NullCertificate(BaseModel):
    """No certificate: the identity uses the legacy DSA_SHA1 layout."""

    model_config = _VALUE_CONFIG
    cert_type: ClassVar[CertificateType] = CertificateType.NULL

    kind: Literal["null"] = "null"

    @property
    def payload_size(self) -> int:
        return 0


class HashCashCertificate(BaseModel):
    """Proof-of-work stamp carried as UTF-8 text."""

    model_config = _VALUE_CONFIG
    cert_type: ClassVar[CertificateType] = CertificateType.HASH_CASH

    kind: Literal["hash_cash"] = "hash_cash"
    text: str

    @model_validator(mode="after")
    def _check_size(self) -> HashCashCertificate:
        if self.payload_size > MAX_PAYLOAD_SIZE:
            raise ValueError(
                f"HashCash text encodes to {self.payload_size} bytes; "
                f"the limit is {MAX_PAYLOAD_SIZE}"
            )
        return self

    @property
    def payload_size(self) -> int:
        return len(self.text.encode("utf-8"))


class HiddenCertificate(BaseModel):
    """Marks a router that does not want to be published."""

    model_config = _VALUE_CONFIG
    cert_type: ClassVar[CertificateType] = CertificateType.HIDDEN

    kind: Literal["hidden"] = "hidden"

    @property
    def payload_size(self) -> int:
        return 0


class SignedCertificate(BaseModel):
    """Opaque signed payload."""

    model_config = _VALUE_CONFIG
    cert_type: ClassVar[CertificateType] = CertificateType.SIGNED

    kind: Literal["signed"] = "signed"
    payload: bytes = Field(default=b"", max_length=MAX_PAYLOAD_SIZE)

    @property
    def payload_size(self) -> int:
        return len(self.payload)


class MultipleCertificate(BaseModel):
    """Opaque payload holding several certificates."""

    model_config = _VALUE_CONFIG
    cert_type: ClassVar[CertificateType] = CertificateType.MULTIPLE

    kind: Literal["multiple"] = "multiple"
    payload: bytes = Field(default=b"", max_length=MAX_PAYLOAD_SIZE)

    @property
    def payload_size(self) -> int:
        return len(self.payload)


class KeyCertificate(BaseModel):
    """Declares the real key algorithms and carries signing-key overflow bytes.

    ``extra_bytes`` holds the trailing bytes of a signing key longer than the
    128-byte legacy slot.  For keys that fit in the slot it is empty.
    """

    model_config = _VALUE_CONFIG
    cert_type: ClassVar[CertificateType] = CertificateType.KEY

    kind: Literal["key"] = "key"
    signing_key_algorithm: SigningKeyAlgorithm
    crypto_key_algorithm: PublicKeyAlgorithm = PublicKeyAlgorithm.ElGamal
    extra_bytes: bytes = b""

    @model_validator(mode="after")
    def _check_extra_bytes(self) -> KeyCertificate:
        _, overflow = padding_size(self.signing_key_algorithm)
        if len(self.extra_bytes) != overflow:
            raise ValueError(
                f"{self.signing_key_algorithm.name} overflows the legacy slot by "
                f"{overflow} bytes, got {len(self.extra_bytes)} extra bytes"
            )
        return self

    @property
    def payload_size(self) -> int:
        return KEY_CERTIFICATE_HEADER_SIZE + len(self.extra_bytes)

    @staticmethod
    def overflow_bytes(signing_key: SigningPublicKey) -> bytes:
        """Return the bytes of *signing_key* that spill past the legacy slot."""
        _, overflow = padding_size(signing_key.algorithm)
        if overflow == 0:
            return b""
        length = signing_key_length(signing_key.algorithm)
        return signing_key.data[length - overflow : length]

    @classmethod
    def for_keys(
        cls, public_key: PublicKey, signing_key: SigningPublicKey
    ) -> KeyCertificate:
        """Build the Key certificate describing *public_key* and *signing_key*."""
        return cls(
            signing_key_algorithm=signing_key.algorithm,
            crypto_key_algorithm=public_key.algorithm,
            extra_bytes=cls.overflow_bytes(signing_key),
        )


Certificate = Annotated[
    NullCertificate
    | HashCashCertificate
    | HiddenCertificate
    | SignedCertificate
    | MultipleCertificate
    | KeyCertificate,
    Field(discriminator="kind"),
]


def signing_algorithm_for(certificate: Certificate) -> SigningKeyAlgorithm:
    """Return the signing algorithm an identity with *certificate* must use."""
    if isinstance(certificate, KeyCertificate):
        return certificate.signing_key_algorithm
    return DEFAULT_SIGNING_ALGORITHM


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


class KeysAndCert(BaseModel):
    """A router's public identity: crypto key, signing key and certificate."""

    model_config = _VALUE_CONFIG

    public_key: PublicKey
    signing_key: SigningPublicKey
    certificate: Certificate = Field(default_factory=NullCertificate)

    @model_validator(mode="after")
    def _check_certificate(self) -> KeysAndCert:
        declared = signing_algorithm_for(self.certificate)
        if declared != self.signing_key.algorithm:
            raise ValueError(
                f"Certificate declares {declared.name} but the signing key is "
                f"{self.signing_key.algorithm.name}"
            )
        if (
            isinstance(self.certificate, KeyCertificate)
            and self.certificate.crypto_key_algorithm != self.public_key.algorithm
        ):
            raise ValueError(
                f"Certificate declares {self.certificate.crypto_key_algorithm.name} "
                f"but the public key is {self.public_key.algorithm.name}"
            )
        if isinstance(self.certificate, KeyCertificate):
            extra_bytes = KeyCertificate.overflow_bytes(self.signing_key)
            if self.certificate.extra_bytes != extra_bytes:
                # The certificate always carries the signing key's own tail.
                object.__setattr__(
                    self,
                    "certificate",
                    self.certificate.model_copy(update={"extra_bytes": extra_bytes}),
                )
        return self

    @classmethod
    def from_keys(
        cls, public_key: PublicKey, signing_key: SigningPublicKey
    ) -> KeysAndCert:
        """Pair two keys with the certificate their algorithms require.

        DSA_SHA1 identities get a Null certificate; every other signing
        algorithm must be declared by a Key certificate.
        """
        certificate: Certificate
        if signing_key.algorithm == DEFAULT_SIGNING_ALGORITHM:
            certificate = NullCertificate()
        else:
            certificate = KeyCertificate.for_keys(public_key, signing_key)
        return cls(
            public_key=public_key,
            signing_key=signing_key,
            certificate=certificate,
        )

    @property
    def serialized_size(self) -> int:
        """Number of bytes the wire encoding of this identity occupies."""
        return (
            public_key_length(self.public_key.algorithm)
            + LEGACY_SLOT_SIZE
            + ENVELOPE_HEADER_SIZE
            + self.certificate.payload_size
        )


RouterIdentity = KeysAndCert


__all__ = [
    "Certificate",
    "CertificateType",
    "HashCashCertificate",
    "HiddenCertificate",
    "KeyCertificate",
    "KeysAndCert",
    "MultipleCertificate",
    "NullCertificate",
    "PublicKey",
    "RouterIdentity",
    "SignedCertificate",
    "SigningPublicKey",
    "signing_algorithm_for",
]
