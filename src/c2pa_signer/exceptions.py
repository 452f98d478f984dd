"""Central exception hierarchy"""
from __future__ import annotations


class SigningServerError(Exception):
    """Base exception for all failures surfaced to API callers"""

    status_code: int = 500


class ValidationError(SigningServerError):
    """Raised for malformed JSON, missing fields or an unrecognisable CSR"""

    status_code = 400


class AuthorizationError(SigningServerError):
    """Status code for a missing or wrong bearer token.

    The gate reports rejections as ``Unauthorized`` results instead of raising,
    so the router only reads this class for the status code.
    """

    status_code = 401


class NotFoundError(SigningServerError):
    """Raised when no route matches the request"""

    status_code = 404


class OperationError(SigningServerError):
    """Raised when a downstream operation fails"""

    status_code = 500


class ConfigurationError(OperationError):
    """Raised when a required setting is missing for the selected mode"""


class CredentialError(OperationError):
    """Raised when signing or CA credentials cannot be resolved"""


class SigningError(OperationError):
    """Raised when a claim cannot be signed"""


class CertificateIssuanceError(OperationError):
    """Raised when the certificate authority stub cannot issue a chain"""


class CryptoError(OperationError):
    """Raised for cryptographic misuse or verification failures"""


__all__ = [
    "SigningServerError",
    "ValidationError",
    "AuthorizationError",
    "NotFoundError",
    "OperationError",
    "ConfigurationError",
    "CredentialError",
    "SigningError",
    "CertificateIssuanceError",
    "CryptoError",
]
