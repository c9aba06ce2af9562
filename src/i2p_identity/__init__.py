"""i2p-identity: wire codec for router identities (keys and certificate)."""

from i2p_identity.core import (
    decode_keys_and_cert,
    encode_keys_and_cert,
    keys_and_cert_from_bytes,
    keys_and_cert_to_bytes,
    reconstitute_keys,
)
from i2p_identity.errors import (
    CodecError,
    InvalidEncoding,
    IoFailure,
    LengthMismatch,
    TruncatedInput,
    UnknownCertificateType,
    UnsupportedAlgorithm,
)
from i2p_identity.models import (
    CertificateType,
    HashCashCertificate,
    HiddenCertificate,
    KeyCertificate,
    KeysAndCert,
    MultipleCertificate,
    NullCertificate,
    PublicKey,
    RouterIdentity,
    SignedCertificate,
    SigningPublicKey,
)
from i2p_identity.registry import PublicKeyAlgorithm, SigningKeyAlgorithm
from i2p_identity.store import IdentityStore

__version__ = "0.1.0"

__all__ = [
    "CertificateType",
    "CodecError",
    "HashCashCertificate",
    "HiddenCertificate",
    "IdentityStore",
    "InvalidEncoding",
    "IoFailure",
    "KeyCertificate",
    "KeysAndCert",
    "LengthMismatch",
    "MultipleCertificate",
    "NullCertificate",
    "PublicKey",
    "PublicKeyAlgorithm",
    "RouterIdentity",
    "SignedCertificate",
    "SigningKeyAlgorithm",
    "SigningPublicKey",
    "TruncatedInput",
    "UnknownCertificateType",
    "UnsupportedAlgorithm",
    "decode_keys_and_cert",
    "encode_keys_and_cert",
    "keys_and_cert_from_bytes",
    "keys_and_cert_to_bytes",
    "reconstitute_keys",
]
