from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from c2pa_signer.crypto.placeholder import placeholder_ca_certificate
from c2pa_signer.crypto.signing import EcdsaSigner
from c2pa_signer.exceptions import CredentialError
from c2pa_signer.models import CACredentials, SigningCredentials

from .base import CredentialProvider

logger = structlog.get_logger(__name__)


class LocalFileProvider(CredentialProvider):
    """Loads the es256 chain and key from disk and mints an ephemeral test CA"""

    def __init__(self, certificate_chain_path: Path, private_key_path: Path) -> None:
        self.certificate_chain_path = Path(certificate_chain_path)
        self.private_key_path = Path(private_key_path)

    async def resolve_signing_credentials(self) -> SigningCredentials:
        try:
            certificate_chain = await asyncio.to_thread(self.certificate_chain_path.read_text, encoding="utf-8")
            private_key = await asyncio.to_thread(self.private_key_path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("credentials.files.failed", error=str(exc))
            raise CredentialError("Failed to load signing certificates from files") from exc
        logger.info("credentials.files.loaded", path=str(self.certificate_chain_path))
        return SigningCredentials(certificate_chain=certificate_chain, private_key=private_key)

    async def resolve_ca_credentials(self) -> CACredentials:
        # Fresh key pairs on every call.
        root = EcdsaSigner.generate()
        intermediate = EcdsaSigner.generate()
        logger.info("credentials.test_ca.generated")
        return CACredentials(
            root_ca=placeholder_ca_certificate("C2PA Test Root CA"),
            root_ca_private_key=root.private_pem_pkcs8(),
            intermediate_ca=placeholder_ca_certificate("C2PA Test Intermediate CA"),
            intermediate_ca_private_key=intermediate.private_pem_pkcs8(),
        )
