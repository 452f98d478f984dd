# Certificate authority stand-in: validates a CSR and returns a mock chain.
from __future__ import annotations

import secrets
import uuid
from datetime import datetime, timezone
from typing import Callable

import structlog

from ..credentials import CredentialProvider
from ..crypto.placeholder import placeholder_leaf_certificate
from ..exceptions import CertificateIssuanceError, ValidationError
from ..models import CACredentials, SignedCertificateResponse

logger = structlog.get_logger(__name__)

CSR_MARKER = "BEGIN CERTIFICATE REQUEST"
_SERIAL_BYTES = 8


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def add_one_year(moment: datetime) -> datetime:
    try:
        return moment.replace(year=moment.year + 1)
    except ValueError:
        # Feb 29 has no counterpart next year.
        return moment.replace(year=moment.year + 1, day=28)


def generate_serial_number() -> str:
    return secrets.token_bytes(_SERIAL_BYTES).hex().upper()


class CertificateService:
    """Issues placeholder certificate chains for PEM certificate requests.

    The leaf certificate is templated text, not an X.509 structure; see
    ``crypto.placeholder``.
    """

    def __init__(self, credentials: CredentialProvider, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self.credentials = credentials
        self._clock = clock

    async def issue(self, csr_pem: str) -> SignedCertificateResponse:
        if CSR_MARKER not in csr_pem:
            raise ValidationError("Invalid CSR format")

        try:
            ca = await self.credentials.resolve_ca_credentials()
            serial_number = generate_serial_number()
            expires_at = add_one_year(self._clock())
            chain = self._build_chain(ca, serial_number, expires_at)
        except Exception as exc:
            logger.error("certificate.issue.failed", error=str(exc))
            raise CertificateIssuanceError(f"Failed to sign CSR: {str(exc) or 'Unknown error'}") from exc

        logger.info("certificate.issued", serial_number=serial_number)
        return SignedCertificateResponse(
            certificate_id=str(uuid.uuid4()),
            certificate_chain=chain,
            expires_at=expires_at,
            serial_number=serial_number,
        )

    @staticmethod
    def _build_chain(ca: CACredentials, serial_number: str, expires_at: datetime) -> str:
        leaf = placeholder_leaf_certificate(serial_number, expires_at)
        return "\n".join([leaf, ca.intermediate_ca, ca.root_ca])
