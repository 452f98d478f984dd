from __future__ import annotations

import time
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from c2pa_signer.config import AppConfig, load_config
from c2pa_signer.version import __version__

from .router import CORS_HEADERS, RequestRouter

# ---- Metrics ----
REQS = Counter("c2pa_requests_total", "Total API requests", ["route", "method", "status"])
LAT = Histogram("c2pa_request_seconds", "Request latency", ["route", "method"])

_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def create_app(config: Optional[AppConfig] = None, router: Optional[RequestRouter] = None) -> FastAPI:
    if config is None:
        config = load_config()
    if router is None:
        router = RequestRouter.from_config(config)

    app = FastAPI(title="C2PA Signing Server", version=__version__, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.config = config
    app.state.router = router

    if config.server.metrics_enabled:

        @app.get("/metrics")
        def metrics() -> Response:
            return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.api_route("/{full_path:path}", methods=_METHODS)
    async def dispatch(request: Request) -> JSONResponse:
        started = time.perf_counter()
        body = await request.body()
        result = await router.handle(request.method, request.url.path, request.headers, body or None)
        LAT.labels(result.route, request.method).observe(time.perf_counter() - started)
        REQS.labels(result.route, request.method, str(result.status_code)).inc()
        return JSONResponse(result.body, status_code=result.status_code, headers=CORS_HEADERS)

    return app
