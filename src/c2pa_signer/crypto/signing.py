from __future__ import annotations

import re

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

from c2pa_signer.exceptions import CryptoError

_PRIVATE_KEY_PEM = re.compile(
    r"-----BEGIN (EC PRIVATE KEY|PRIVATE KEY)-----[\s\S]+?-----END (EC PRIVATE KEY|PRIVATE KEY)-----"
)
_CERTIFICATE_PEM = re.compile(r"-----BEGIN CERTIFICATE-----[\s\S]+?-----END CERTIFICATE-----")


def extract_private_key_pem(pem_content: str) -> str:
    match = _PRIVATE_KEY_PEM.search(pem_content)
    if not match:
        raise CryptoError("Invalid private key format")
    return match.group(0)


def split_certificate_chain(pem_content: str) -> list[str]:
    certificates = _CERTIFICATE_PEM.findall(pem_content)
    if not certificates:
        raise CryptoError("No certificates found in PEM content")
    return certificates


class EcdsaSigner:
    """Thin wrapper around ECDSA with SHA-256 that normalizes error handling"""

    def __init__(
        self,
        *,
        private_key: ec.EllipticCurvePrivateKey | None = None,
        public_key: ec.EllipticCurvePublicKey | None = None,
    ) -> None:
        if not private_key and not public_key:
            raise CryptoError("At least one of private_key or public_key is required")
        self._private_key = private_key
        self._public_key = public_key or private_key.public_key()  # type: ignore[union-attr]

    @classmethod
    def from_pem(cls, pem_content: str) -> EcdsaSigner:
        block = extract_private_key_pem(pem_content)
        try:
            key = serialization.load_pem_private_key(block.encode("utf-8"), password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise CryptoError(f"Unable to load private key: {exc}") from exc
        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise CryptoError("Private key is not an EC key")
        return cls(private_key=key)

    @classmethod
    def generate(cls) -> EcdsaSigner:
        return cls(private_key=ec.generate_private_key(ec.SECP256R1()))

    @property
    def public_key(self) -> ec.EllipticCurvePublicKey:
        return self._public_key

    def private_pem_pkcs8(self) -> str:
        if not self._private_key:
            raise CryptoError("No private key material to serialize")
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode("ascii")

    def sign(self, message: bytes) -> bytes:
        """Return a DER-encoded ECDSA signature over SHA-256 of ``message``"""
        if not self._private_key:
            raise CryptoError("Signing requested without private key material")
        return self._private_key.sign(message, ec.ECDSA(hashes.SHA256()))

    def verify(self, message: bytes, signature: bytes) -> None:
        try:
            self._public_key.verify(signature, message, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature as exc:
            raise CryptoError("Signature verification failed") from exc
