from __future__ import annotations


class KMSClient:
    """A minimal interface for external key managers that sign without exposing keys"""

    signing_algorithm: str = "ECDSA_SHA_256"

    async def sign(self, message: bytes) -> bytes:
        """Sign ``message`` as a raw message; the service performs the hashing"""
        raise NotImplementedError
