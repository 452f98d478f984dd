"""Configuration loading utilities for the signing server."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

_CONFIG_PATH_ENV = "C2PA_SIGNER_CONFIG"

# (section, field) -> environment variable
_ENV_FIELDS: Dict[tuple[str, str], str] = {
    ("server", "environment"): "ENVIRONMENT",
    ("server", "signing_server_url"): "SIGNING_SERVER_URL",
    ("server", "route_prefix"): "ROUTE_PREFIX",
    ("server", "timestamp_url"): "TIMESTAMP_URL",
    ("server", "metrics_enabled"): "METRICS_ENABLED",
    ("auth", "token"): "SIGNING_SERVER_TOKEN",
    ("signing", "use_kms"): "USE_KMS",
    ("signing", "kms_key_id"): "KMS_KEY_ID",
    ("signing", "aws_region"): "AWS_REGION",
    ("credentials", "use_secrets_manager"): "USE_AWS_SECRETS",
    ("credentials", "signing_secret_name"): "SIGNING_CREDENTIALS_SECRET",
    ("credentials", "ca_secret_name"): "CA_CREDENTIALS_SECRET",
    ("credentials", "directory"): "C2PA_CREDENTIALS_DIR",
    ("logging", "level"): "LOG_LEVEL",
}

_BOOL_FIELDS = {"metrics_enabled", "use_kms", "use_secrets_manager"}


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ServerConfig(_Frozen):
    environment: Optional[str] = Field(default=None, description="Deployment environment label")
    signing_server_url: Optional[str] = Field(
        default=None, description="Public base URL advertised in the configuration payload"
    )
    route_prefix: str = Field(default="/dev", description="Stage prefix stripped before routing")
    timestamp_url: str = Field(default="http://timestamp.digicert.com")
    metrics_enabled: bool = Field(default=False, description="Expose GET /metrics")

    @field_validator("route_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value

    def mode(self) -> str:
        return self.environment or "production"


class AuthConfig(_Frozen):
    token: Optional[str] = Field(default=None, description="Required bearer token; empty disables auth")


class SigningConfig(_Frozen):
    use_kms: bool = Field(default=False, description="Sign with AWS KMS instead of a local key")
    kms_key_id: Optional[str] = Field(default=None)
    aws_region: str = Field(default="us-east-1")


class CredentialsConfig(_Frozen):
    use_secrets_manager: bool = Field(default=False, description="Resolve credentials from AWS Secrets Manager")
    signing_secret_name: str = Field(default="c2pa-signing-credentials")
    ca_secret_name: str = Field(default="c2pa-ca-credentials")
    directory: Path = Field(default_factory=Path.cwd, description="Directory holding the local PEM files")
    certificate_chain_file: str = Field(default="es256_certs.pem")
    private_key_file: str = Field(default="es256_private.key")

    def certificate_chain_path(self) -> Path:
        return self.directory / self.certificate_chain_file

    def private_key_path(self) -> Path:
        return self.directory / self.private_key_file


class LoggingConfig(_Frozen):
    level: str = Field(default="INFO", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()


class AppConfig(_Frozen):
    server: ServerConfig = Field(default_factory=ServerConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    signing: SigningConfig = Field(default_factory=SigningConfig)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _parse_flag(value: str) -> bool:
    return value.strip().lower() == "true"


def env_overrides(environ: Mapping[str, str]) -> Dict[str, Dict[str, Any]]:
    overrides: Dict[str, Dict[str, Any]] = {}
    for (section, name), variable in _ENV_FIELDS.items():
        if variable not in environ:
            continue
        raw = environ[variable]
        value: Any = _parse_flag(raw) if name in _BOOL_FIELDS else raw
        overrides.setdefault(section, {})[name] = value
    return overrides


def _merge(base: Dict[str, Any], overrides: Mapping[str, Mapping[str, Any]]) -> Dict[str, Any]:
    merged = {key: dict(value) if isinstance(value, Mapping) else value for key, value in base.items()}
    for section, values in overrides.items():
        merged.setdefault(section, {}).update(values)
    return merged


def load_config(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Build the application configuration.

    Values come from an optional YAML file (``path`` or ``$C2PA_SIGNER_CONFIG``)
    with environment variables layered on top. The result is frozen and meant
    to be passed to components at construction time.
    """

    env = os.environ if environ is None else environ
    source = path or (Path(env[_CONFIG_PATH_ENV]) if env.get(_CONFIG_PATH_ENV) else None)

    data: Dict[str, Any] = {}
    if source is not None:
        with Path(source).open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid configuration in {source}: expected a mapping")

    try:
        return AppConfig.model_validate(_merge(data, env_overrides(env)))
    except ValidationError as exc:
        origin = source or "environment"
        raise ValueError(f"Invalid configuration in {origin}: {exc}") from exc


def dump_config(config: AppConfig) -> str:
    return yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False)


__all__ = [
    "AppConfig",
    "AuthConfig",
    "CredentialsConfig",
    "LoggingConfig",
    "ServerConfig",
    "SigningConfig",
    "dump_config",
    "env_overrides",
    "load_config",
]
