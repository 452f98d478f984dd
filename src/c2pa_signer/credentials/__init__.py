"""Credential providers for signing and certificate issuance."""
from __future__ import annotations

from c2pa_signer.config import AppConfig

from .base import CredentialProvider
from .local import LocalFileProvider
from .secrets_manager import SecretsManagerProvider


def provider_from_config(config: AppConfig) -> CredentialProvider:
    creds = config.credentials
    if creds.use_secrets_manager:
        return SecretsManagerProvider(
            signing_secret_name=creds.signing_secret_name,
            ca_secret_name=creds.ca_secret_name,
            region_name=config.signing.aws_region,
        )
    return LocalFileProvider(creds.certificate_chain_path(), creds.private_key_path())


__all__ = ["CredentialProvider", "LocalFileProvider", "SecretsManagerProvider", "provider_from_config"]
