"""AWS Lambda entrypoint for API Gateway proxy events."""
from __future__ import annotations

import asyncio
import base64
import json
from functools import lru_cache
from typing import Any, Dict

import structlog

from c2pa_signer.config import load_config
from c2pa_signer.logging import configure_logging

from .router import RequestRouter, RouterResponse

logger = structlog.get_logger(__name__)


@lru_cache(maxsize=1)
def default_router() -> RequestRouter:
    """Router built from the process environment, once per container"""
    config = load_config()
    configure_logging(config.logging.normalized_level())
    return RequestRouter.from_config(config)


def _event_body(event: Dict[str, Any]) -> bytes | str | None:
    body = event.get("body")
    if body is not None and event.get("isBase64Encoded"):
        return base64.b64decode(body)
    return body


def dispatch_event(router: RequestRouter, event: Dict[str, Any]) -> Dict[str, Any]:
    try:
        body = _event_body(event)
    except ValueError as exc:
        # binascii.Error, or a body that is not ASCII
        logger.info("request.rejected", path=event.get("path"), error=str(exc))
        result = RouterResponse(400, {"error": "Invalid JSON in request body"})
    else:
        result = asyncio.run(
            router.handle(
                event.get("httpMethod") or "GET",
                event.get("path") or "/",
                event.get("headers") or {},
                body,
            )
        )
    return {
        "statusCode": result.status_code,
        "headers": result.headers,
        "body": json.dumps(result.body),
    }


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    return dispatch_event(default_router(), event)
