import pytest

from c2pa_signer.api.auth import Authorized, BearerTokenGate, Unauthorized


@pytest.mark.parametrize("token", [None, ""])
def test_gate_is_open_without_configured_token(token):
    gate = BearerTokenGate(token)
    assert not gate.enabled
    assert gate.check({}) == Authorized()
    assert gate.check({"Authorization": "Bearer whatever"}) == Authorized()


def test_missing_header_is_rejected():
    assert BearerTokenGate("s3cret").check({}) == Unauthorized("Missing Authorization header")


@pytest.mark.parametrize("header", ["Basic s3cret", "bearer s3cret", "Bearer", "s3cret"])
def test_wrong_scheme_is_rejected(header: str):
    verdict = BearerTokenGate("s3cret").check({"Authorization": header})
    assert verdict == Unauthorized("Invalid Authorization header format")


@pytest.mark.parametrize("token", ["S3CRET", "s3cret ", "s3cre", ""])
def test_token_must_match_exactly(token: str):
    verdict = BearerTokenGate("s3cret").check({"Authorization": f"Bearer {token}"})
    assert verdict == Unauthorized("Invalid bearer token")


def test_matching_token_passes_with_any_header_case():
    gate = BearerTokenGate("s3cret")
    assert gate.check({"Authorization": "Bearer s3cret"}) == Authorized()
    assert gate.check({"authorization": "Bearer s3cret"}) == Authorized()
