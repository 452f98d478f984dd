"""Bearer-token gate for the C2PA endpoints."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Union

import structlog

logger = structlog.get_logger(__name__)

_SCHEME = "Bearer "


@dataclass(frozen=True, slots=True)
class Authorized:
    pass


@dataclass(frozen=True, slots=True)
class Unauthorized:
    reason: str


AuthResult = Union[Authorized, Unauthorized]


def header_value(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup for plain mappings"""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


class BearerTokenGate:
    """Compares the presented bearer token with the configured one.

    An unset or empty token leaves the gate open. The comparison is plain
    string equality.
    """

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token or None

    @property
    def enabled(self) -> bool:
        return self._token is not None

    def check(self, headers: Mapping[str, str]) -> AuthResult:
        if self._token is None:
            logger.debug("auth.open", reason="no token configured")
            return Authorized()

        authorization = header_value(headers, "Authorization")
        if not authorization:
            return Unauthorized("Missing Authorization header")
        if not authorization.startswith(_SCHEME):
            return Unauthorized("Invalid Authorization header format")
        if authorization[len(_SCHEME):] != self._token:
            return Unauthorized("Invalid bearer token")
        return Authorized()


__all__ = ["AuthResult", "Authorized", "BearerTokenGate", "Unauthorized", "header_value"]
