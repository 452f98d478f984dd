# Sign C2PA manifest claims with AWS KMS or a locally loaded EC key.
from __future__ import annotations

import base64

import structlog

from ..config import AppConfig
from ..credentials import CredentialProvider, provider_from_config
from ..crypto.signing import EcdsaSigner
from ..exceptions import SigningError
from ..models import SigningRequest, SigningResponse
from ..plugins.kms import AwsKmsClient, KMSClient
from ..utils import b64d, b64e

logger = structlog.get_logger(__name__)


class SignerService:
    def __init__(
        self,
        credentials: CredentialProvider,
        *,
        use_kms: bool = False,
        kms: KMSClient | None = None,
    ) -> None:
        self.credentials = credentials
        self.use_kms = use_kms
        self.kms = kms

    @classmethod
    def from_config(cls, config: AppConfig, credentials: CredentialProvider | None = None) -> SignerService:
        signing = config.signing
        kms = AwsKmsClient(signing.kms_key_id, region_name=signing.aws_region) if signing.use_kms else None
        return cls(credentials or provider_from_config(config), use_kms=signing.use_kms, kms=kms)

    async def certificate_chain_b64(self) -> str:
        credentials = await self.credentials.resolve_signing_credentials()
        return base64.b64encode(credentials.certificate_chain.encode("utf-8")).decode("ascii")

    async def sign(self, request: SigningRequest) -> SigningResponse:
        logger.info("signing.request.received")
        try:
            data = b64d(request.claim)
            logger.info("signing.claim.decoded", size=len(data))

            if self.use_kms:
                logger.info("signing.kms.selected")
                signature = await self._sign_with_kms(data)
            else:
                logger.info("signing.local.selected")
                signature = await self._sign_with_local_key(data)
        except Exception as exc:
            logger.error("signing.failed", error=str(exc))
            raise SigningError(f"C2PA signing failed: {str(exc) or 'Unknown error'}") from exc

        logger.info("signing.completed", signature_size=len(signature))
        return SigningResponse(signature=b64e(signature))

    async def _sign_with_kms(self, data: bytes) -> bytes:
        if self.kms is None:
            raise SigningError("KMS signing requested but no KMS client is configured")
        return await self.kms.sign(data)

    async def _sign_with_local_key(self, data: bytes) -> bytes:
        credentials = await self.credentials.resolve_signing_credentials()
        if not credentials.can_sign_locally():
            raise SigningError("Private key not available for local signing")
        signer = EcdsaSigner.from_pem(credentials.private_key or "")
        return signer.sign(data)
