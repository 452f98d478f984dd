from __future__ import annotations

import base64
from pathlib import Path

import pytest

pytest.importorskip("typer")

from typer.testing import CliRunner

from c2pa_signer.cli import app
from c2pa_signer.crypto import EcdsaSigner

runner = CliRunner()


def test_cli_reports_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "c2pa-signer 1.0.0"


def test_cli_prints_effective_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "staging")
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "environment: staging" in result.stdout


def test_cli_writes_config_file(tmp_path: Path) -> None:
    target = tmp_path / "out" / "config.yaml"
    result = runner.invoke(app, ["config", "-o", str(target)])
    assert result.exit_code == 0
    assert "route_prefix: /dev" in target.read_text(encoding="utf-8")


def test_cli_writes_config_file_with_long_option(tmp_path: Path) -> None:
    target = tmp_path / "config.yaml"
    result = runner.invoke(app, ["config", "--output", str(target)])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == f"Wrote {target}"
    assert "route_prefix: /dev" in target.read_text(encoding="utf-8")


def test_cli_signs_claim_file(
    monkeypatch: pytest.MonkeyPatch, credential_dir: Path, ec_signer: EcdsaSigner, tmp_path: Path
) -> None:
    monkeypatch.setenv("C2PA_CREDENTIALS_DIR", str(credential_dir))
    monkeypatch.setenv("USE_KMS", "false")
    claim = tmp_path / "claim.bin"
    claim.write_bytes(b"\x00\x01manifest")
    result = runner.invoke(app, ["sign", "--claim-file", str(claim)])
    assert result.exit_code == 0, result.output
    lines = result.stdout.strip().splitlines()
    assert len(lines) == 1, result.stdout
    ec_signer.verify(b"\x00\x01manifest", base64.b64decode(lines[0]))


def test_cli_sign_reports_failures(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("C2PA_CREDENTIALS_DIR", str(tmp_path / "empty"))
    monkeypatch.setenv("USE_KMS", "false")
    claim = tmp_path / "claim.bin"
    claim.write_bytes(b"manifest")
    result = runner.invoke(app, ["sign", "--claim-file", str(claim)])
    assert result.exit_code == 1
