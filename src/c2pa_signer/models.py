# Typed models: credential records and request/response bodies.

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_serializer


@dataclass(frozen=True, slots=True)
class SigningCredentials:
    """Certificate chain plus the optional key used for local signing"""
    certificate_chain: str
    private_key: Optional[str] = None

    def can_sign_locally(self) -> bool:
        return bool(self.private_key)


@dataclass(frozen=True, slots=True)
class CACredentials:
    """Root and intermediate CA material; valid only when all four are present"""
    root_ca: str
    root_ca_private_key: str
    intermediate_ca: str
    intermediate_ca_private_key: str


class SigningRequest(BaseModel):
    claim: str  # base64 bytes to sign

    model_config = ConfigDict(extra="ignore")


class SigningResponse(BaseModel):
    signature: str


class CertificateSigningRequest(BaseModel):
    csr: str

    model_config = ConfigDict(extra="ignore")


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix"""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SignedCertificateResponse(BaseModel):
    certificate_id: str
    certificate_chain: str
    expires_at: datetime
    serial_number: str

    @field_serializer("expires_at")
    def _serialize_expiry(self, value: datetime) -> str:
        return format_timestamp(value)


class C2PAConfiguration(BaseModel):
    algorithm: str
    timestamp_url: str
    signing_url: str
    certificate_chain: str


class HealthCheckResponse(BaseModel):
    status: str
    version: str
    mode: str
    c2pa_version: str


__all__ = [
    "CACredentials",
    "C2PAConfiguration",
    "CertificateSigningRequest",
    "HealthCheckResponse",
    "SignedCertificateResponse",
    "SigningCredentials",
    "SigningRequest",
    "SigningResponse",
    "format_timestamp",
]
