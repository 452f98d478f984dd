from __future__ import annotations

import asyncio
from typing import Any, Optional

import boto3
import structlog

from c2pa_signer.exceptions import ConfigurationError, SigningError

from .base import KMSClient

logger = structlog.get_logger(__name__)


class AwsKmsClient(KMSClient):
    """Signs with an asymmetric ECC_NIST_P256 key held in AWS KMS.

    The boto3 client is only created on the first signing call, after the key
    id has been checked, so a misconfigured deployment fails without touching
    the network.
    """

    def __init__(self, key_id: Optional[str], *, region_name: str = "us-east-1", client: Any = None) -> None:
        self._key_id = key_id
        self._region_name = region_name
        self._client = client

    def _kms(self) -> Any:
        if self._client is None:
            self._client = boto3.client("kms", region_name=self._region_name)
        return self._client

    async def sign(self, message: bytes) -> bytes:
        if not self._key_id:
            raise ConfigurationError("KMS_KEY_ID environment variable is not set")

        try:
            response = await asyncio.to_thread(
                self._kms().sign,
                KeyId=self._key_id,
                Message=message,
                MessageType="RAW",
                SigningAlgorithm=self.signing_algorithm,
            )
        except Exception as exc:
            logger.error("kms.sign.failed", key_id=self._key_id, error=str(exc))
            raise SigningError(f"KMS signing failed: {exc}") from exc

        signature = response.get("Signature")
        if not signature:
            raise SigningError("KMS signing failed: no signature returned")
        return bytes(signature)
