from __future__ import annotations

from abc import ABC, abstractmethod

from c2pa_signer.models import CACredentials, SigningCredentials


class CredentialProvider(ABC):
    """Resolves signing and CA credentials.

    Implementations resolve again on every call; nothing is cached and a
    failed lookup is not retried.
    """

    @abstractmethod
    async def resolve_signing_credentials(self) -> SigningCredentials:
        raise NotImplementedError

    @abstractmethod
    async def resolve_ca_credentials(self) -> CACredentials:
        raise NotImplementedError
