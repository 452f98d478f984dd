"""Framework-independent request dispatch.

Every hosting surface (FastAPI, API Gateway) hands the raw method, path,
headers and body to :class:`RequestRouter` and sends back whatever
:class:`RouterResponse` it returns.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Type, TypeVar, Union

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..config import AppConfig
from ..credentials import provider_from_config
from ..exceptions import AuthorizationError, NotFoundError, SigningServerError, ValidationError
from ..models import (
    C2PAConfiguration,
    CertificateSigningRequest,
    HealthCheckResponse,
    SigningRequest,
)
from ..services import CertificateService, SignerService
from ..version import C2PA_VERSION, __version__
from .auth import BearerTokenGate, Unauthorized, header_value

logger = structlog.get_logger(__name__)

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}

C2PA_PREFIX = "/api/v1/c2pa/"
SIGNING_ALGORITHM = "es256"
_FALLBACK_BASE_URL = "http://localhost:3000"

ModelT = TypeVar("ModelT", bound=BaseModel)
Body = Union[bytes, str, None]


@dataclass(frozen=True)
class RouterResponse:
    status_code: int
    body: Dict[str, Any]
    route: str = "unmatched"
    headers: Dict[str, str] = field(
        default_factory=lambda: {"Content-Type": "application/json", **CORS_HEADERS}
    )


class RequestRouter:
    def __init__(
        self,
        config: AppConfig,
        *,
        signer: SignerService,
        certificates: CertificateService,
        gate: BearerTokenGate,
    ) -> None:
        self.config = config
        self.signer = signer
        self.certificates = certificates
        self.gate = gate

    @classmethod
    def from_config(cls, config: AppConfig) -> RequestRouter:
        credentials = provider_from_config(config)
        gate = BearerTokenGate(config.auth.token)
        logger.info(
            "router.configured",
            mode=config.server.mode(),
            auth_enabled=gate.enabled,
            use_kms=config.signing.use_kms,
            use_secrets_manager=config.credentials.use_secrets_manager,
        )
        return cls(
            config,
            signer=SignerService.from_config(config, credentials),
            certificates=CertificateService(credentials),
            gate=gate,
        )

    def strip_prefix(self, path: str) -> str:
        prefix = self.config.server.route_prefix
        if prefix and (path == prefix or path.startswith(prefix + "/")):
            path = path[len(prefix):]
        return path or "/"

    async def handle(self, method: str, path: str, headers: Mapping[str, str], body: Body) -> RouterResponse:
        method = method.upper()
        logger.info("request.received", method=method, path=path)

        if method == "OPTIONS":
            return RouterResponse(200, {}, route="preflight")

        route = self.strip_prefix(path)
        try:
            return await self._dispatch(method, route, headers, body)
        except SigningServerError as exc:
            if exc.status_code >= 500:
                logger.exception("request.failed", method=method, path=route)
            else:
                logger.info("request.rejected", method=method, path=route, error=str(exc))
            label = "unmatched" if isinstance(exc, NotFoundError) else route
            return RouterResponse(exc.status_code, {"error": str(exc) or "Internal server error"}, route=label)
        except Exception as exc:
            logger.exception("request.failed", method=method, path=route)
            return RouterResponse(500, {"error": str(exc) or "Internal server error"}, route=route)

    async def _dispatch(self, method: str, route: str, headers: Mapping[str, str], body: Body) -> RouterResponse:
        if route == "/" and method == "GET":
            return RouterResponse(200, self._health_payload(), route="/")

        if route == "/health" and method == "GET":
            return RouterResponse(200, {"status": "healthy"}, route="/health")

        if route == "/api/v1/certificates/sign" and method == "POST":
            request = _parse_body(body, CertificateSigningRequest)
            issued = await self.certificates.issue(request.csr)
            return RouterResponse(200, issued.model_dump(mode="json"), route=route)

        if route.startswith(C2PA_PREFIX):
            verdict = self.gate.check(headers)
            if isinstance(verdict, Unauthorized):
                logger.info("auth.rejected", path=route, reason=verdict.reason)
                return RouterResponse(AuthorizationError.status_code, {"error": verdict.reason}, route=route)

            if route == C2PA_PREFIX + "configuration" and method == "GET":
                configuration = await self._configuration_payload(headers)
                logger.info("configuration.served", signing_url=configuration.signing_url)
                return RouterResponse(200, configuration.model_dump(), route=route)

            if route == C2PA_PREFIX + "sign" and method == "POST":
                request = _parse_body(body, SigningRequest)
                signed = await self.signer.sign(request)
                return RouterResponse(200, signed.model_dump(), route=route)

        raise NotFoundError("Not found")

    def _health_payload(self) -> Dict[str, Any]:
        return HealthCheckResponse(
            status="C2PA Signing Server is running",
            version=__version__,
            mode=self.config.server.mode(),
            c2pa_version=C2PA_VERSION,
        ).model_dump()

    def signing_url(self, headers: Mapping[str, str]) -> str:
        server = self.config.server
        base = server.signing_server_url
        if not base:
            host = header_value(headers, "Host")
            base = f"https://{host}" if host else _FALLBACK_BASE_URL
        return f"{base.rstrip('/')}{server.route_prefix}{C2PA_PREFIX}sign"

    async def _configuration_payload(self, headers: Mapping[str, str]) -> C2PAConfiguration:
        return C2PAConfiguration(
            algorithm=SIGNING_ALGORITHM,
            timestamp_url=self.config.server.timestamp_url,
            signing_url=self.signing_url(headers),
            certificate_chain=await self.signer.certificate_chain_b64(),
        )


def _parse_body(body: Body, model: Type[ModelT]) -> ModelT:
    if body is None or (isinstance(body, (bytes, str)) and not body.strip()):
        raise ValidationError("Request body is required")
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError("Invalid JSON in request body") from exc
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc)) from exc


def _describe(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ())) or "body"
    if error.get("type") == "missing":
        return f"Missing required field: {location}"
    return f"Invalid value for field {location}: {error.get('msg', 'invalid')}"


__all__ = ["CORS_HEADERS", "RequestRouter", "RouterResponse"]
