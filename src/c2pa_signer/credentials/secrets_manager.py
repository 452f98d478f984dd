from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

import boto3
import structlog

from c2pa_signer.exceptions import CredentialError
from c2pa_signer.models import CACredentials, SigningCredentials

from .base import CredentialProvider

logger = structlog.get_logger(__name__)

_CA_FIELDS = {
    "rootCA": "root_ca",
    "rootCAPrivateKey": "root_ca_private_key",
    "intermediateCA": "intermediate_ca",
    "intermediateCAPrivateKey": "intermediate_ca_private_key",
}


class SecretsManagerProvider(CredentialProvider):
    """Reads JSON-encoded credentials from AWS Secrets Manager.

    Signing secret layout: ``{"certificateChain": ..., "privateKey": ...}``
    (private key optional). CA secret layout: ``rootCA``, ``rootCAPrivateKey``,
    ``intermediateCA`` and ``intermediateCAPrivateKey``, all required.
    """

    def __init__(
        self,
        *,
        signing_secret_name: str = "c2pa-signing-credentials",
        ca_secret_name: str = "c2pa-ca-credentials",
        region_name: str = "us-east-1",
        client: Any = None,
    ) -> None:
        self.signing_secret_name = signing_secret_name
        self.ca_secret_name = ca_secret_name
        self._region_name = region_name
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("secretsmanager", region_name=self._region_name)
        return self._client

    async def resolve_signing_credentials(self) -> SigningCredentials:
        try:
            secret = await self._fetch(self.signing_secret_name)
            if not secret.get("certificateChain"):
                raise CredentialError("Certificate chain not found in secret")
            return SigningCredentials(
                certificate_chain=secret["certificateChain"],
                private_key=secret.get("privateKey") or None,
            )
        except Exception as exc:
            logger.error("credentials.signing.failed", secret_name=self.signing_secret_name, error=str(exc))
            raise CredentialError(f"Failed to get signing credentials: {exc}") from exc

    async def resolve_ca_credentials(self) -> CACredentials:
        try:
            secret = await self._fetch(self.ca_secret_name)
            if not all(secret.get(field) for field in _CA_FIELDS):
                raise CredentialError("CA credentials incomplete in secret")
            return CACredentials(**{attr: secret[field] for field, attr in _CA_FIELDS.items()})
        except Exception as exc:
            logger.error("credentials.ca.failed", secret_name=self.ca_secret_name, error=str(exc))
            raise CredentialError(f"Failed to get CA credentials: {exc}") from exc

    async def _fetch(self, secret_id: str) -> Dict[str, Any]:
        response = await asyncio.to_thread(self.client.get_secret_value, SecretId=secret_id)
        secret_string: Optional[str] = response.get("SecretString")
        if not secret_string:
            raise CredentialError("Secret value is empty")
        secret = json.loads(secret_string)
        if not isinstance(secret, dict):
            raise CredentialError("Secret value is not a JSON object")
        logger.info("credentials.secret.loaded", secret_name=secret_id)
        return secret
