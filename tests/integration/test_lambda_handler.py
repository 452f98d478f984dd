import base64
import json

import pytest

from c2pa_signer.api import lambda_handler
from c2pa_signer.api.router import RequestRouter
from c2pa_signer.utils import b64e

from conftest import make_config


def _event(method: str, path: str, body=None, headers=None, encoded: bool = False) -> dict:
    return {"httpMethod": method, "path": path, "headers": headers, "body": body, "isBase64Encoded": encoded}


def test_dispatch_event_shapes_proxy_response(credential_dir):
    router = RequestRouter.from_config(make_config(credential_dir=credential_dir))
    response = lambda_handler.dispatch_event(router, _event("GET", "/dev/health"))
    assert response["statusCode"] == 200
    assert json.loads(response["body"]) == {"status": "healthy"}
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"


def test_dispatch_event_decodes_base64_bodies(credential_dir):
    router = RequestRouter.from_config(make_config(credential_dir=credential_dir))
    raw = json.dumps({"claim": b64e(b"digest")}).encode()
    event = _event("POST", "/api/v1/c2pa/sign", base64.b64encode(raw).decode(), encoded=True)
    response = lambda_handler.dispatch_event(router, event)
    assert response["statusCode"] == 200
    assert "signature" in json.loads(response["body"])


def test_dispatch_event_rejects_malformed_base64_body(credential_dir):
    router = RequestRouter.from_config(make_config(credential_dir=credential_dir))
    response = lambda_handler.dispatch_event(router, _event("POST", "/api/v1/c2pa/sign", "abc", encoded=True))
    assert response["statusCode"] == 400
    assert json.loads(response["body"]) == {"error": "Invalid JSON in request body"}
    assert response["headers"]["Access-Control-Allow-Origin"] == "*"
    assert response["headers"]["Content-Type"] == "application/json"


@pytest.fixture
def fresh_router():
    lambda_handler.default_router.cache_clear()
    yield
    lambda_handler.default_router.cache_clear()


def test_handler_reads_environment_once(monkeypatch, credential_dir, fresh_router):
    monkeypatch.setenv("SIGNING_SERVER_TOKEN", "s3cret")
    monkeypatch.setenv("C2PA_CREDENTIALS_DIR", str(credential_dir))
    response = lambda_handler.handler(_event("GET", "/dev/api/v1/c2pa/configuration"), None)
    assert response["statusCode"] == 401
    assert json.loads(response["body"]) == {"error": "Missing Authorization header"}

    monkeypatch.setenv("SIGNING_SERVER_TOKEN", "")
    response = lambda_handler.handler(_event("GET", "/dev/api/v1/c2pa/configuration"), None)
    assert response["statusCode"] == 401
