"""HTTP surfaces for the signing server."""
from .auth import Authorized, BearerTokenGate, Unauthorized
from .router import RequestRouter, RouterResponse

__all__ = ["Authorized", "BearerTokenGate", "RequestRouter", "RouterResponse", "Unauthorized"]
