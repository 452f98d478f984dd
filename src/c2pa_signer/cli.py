# CLI implementation using Typer for serving the API and signing claims offline.
from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer

from .config import dump_config, load_config
from .exceptions import SigningServerError
from .logging import configure_logging
from .models import SigningRequest
from .services import SignerService
from .utils import b64e
from .version import __version__

app = typer.Typer(help="C2PA signing server")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"c2pa-signer {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Certificate issuance stub and C2PA claim signing"""


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind"),
    port: int = typer.Option(3000, help="Port to listen on"),
    config_path: Optional[Path] = typer.Option(None, "--config", exists=True, readable=True, help="YAML config file"),
):
    """Run the HTTP API with uvicorn"""
    import uvicorn

    from .api.main import create_app

    config = load_config(config_path)
    configure_logging(config.logging.normalized_level())
    uvicorn.run(create_app(config), host=host, port=port, log_config=None)


@app.command("config")
def show_config(
    config_path: Optional[Path] = typer.Option(None, "--config", exists=True, readable=True, help="YAML config file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
):
    """Print the effective configuration as YAML"""
    rendered = dump_config(load_config(config_path))
    if output is None:
        typer.echo(rendered, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding="utf-8")
    typer.echo(f"Wrote {output}")


@app.command("sign")
def sign(
    claim_file: Path = typer.Option(..., "--claim-file", "-i", exists=True, readable=True, help="Raw claim bytes"),
    config_path: Optional[Path] = typer.Option(None, "--config", exists=True, readable=True, help="YAML config file"),
):
    """Sign a claim file with the configured KMS key or local key"""
    config = load_config(config_path)
    # stdout carries only the signature
    configure_logging(config.logging.normalized_level(), stream=sys.stderr)
    service = SignerService.from_config(config)
    request = SigningRequest(claim=b64e(claim_file.read_bytes()))
    try:
        response = asyncio.run(service.sign(request))
    except SigningServerError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(response.signature)


if __name__ == "__main__":
    app()
