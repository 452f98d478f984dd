from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from c2pa_signer.config import AppConfig, AuthConfig, CredentialsConfig, ServerConfig, SigningConfig
from c2pa_signer.credentials import CredentialProvider
from c2pa_signer.crypto.placeholder import placeholder_ca_certificate
from c2pa_signer.crypto.signing import EcdsaSigner
from c2pa_signer.exceptions import CredentialError
from c2pa_signer.models import CACredentials, SigningCredentials
from c2pa_signer.plugins.kms import KMSClient

CERT_CHAIN = "\n".join(
    [
        placeholder_ca_certificate("C2PA Test Signer"),
        placeholder_ca_certificate("C2PA Test Intermediate CA"),
    ]
)


class StaticProvider(CredentialProvider):
    """In-memory provider; a ``None`` value makes the lookup fail"""

    def __init__(self, signing: Optional[SigningCredentials] = None, ca: Optional[CACredentials] = None) -> None:
        self.signing = signing
        self.ca = ca
        self.calls = 0

    async def resolve_signing_credentials(self) -> SigningCredentials:
        self.calls += 1
        if self.signing is None:
            raise CredentialError("Failed to load signing certificates from files")
        return self.signing

    async def resolve_ca_credentials(self) -> CACredentials:
        self.calls += 1
        if self.ca is None:
            raise CredentialError("Failed to get CA credentials: boom")
        return self.ca


class RecordingKMS(KMSClient):
    def __init__(self, signer: EcdsaSigner) -> None:
        self.signer = signer
        self.messages: List[bytes] = []

    async def sign(self, message: bytes) -> bytes:
        self.messages.append(message)
        return self.signer.sign(message)


class FakeSecretsClient:
    """Mimics ``boto3.client("secretsmanager").get_secret_value``"""

    def __init__(self, secrets: Dict[str, Optional[str]]) -> None:
        self.secrets = secrets
        self.requested: List[str] = []

    def get_secret_value(self, *, SecretId: str) -> Dict[str, Any]:
        self.requested.append(SecretId)
        if SecretId not in self.secrets:
            raise RuntimeError(f"Secrets Manager can't find the specified secret: {SecretId}")
        value = self.secrets[SecretId]
        return {"Name": SecretId} if value is None else {"Name": SecretId, "SecretString": value}


@pytest.fixture
def ec_signer() -> EcdsaSigner:
    return EcdsaSigner.generate()


@pytest.fixture
def signing_credentials(ec_signer: EcdsaSigner) -> SigningCredentials:
    return SigningCredentials(certificate_chain=CERT_CHAIN, private_key=ec_signer.private_pem_pkcs8())


@pytest.fixture
def ca_credentials() -> CACredentials:
    return CACredentials(
        root_ca=placeholder_ca_certificate("Root"),
        root_ca_private_key=EcdsaSigner.generate().private_pem_pkcs8(),
        intermediate_ca=placeholder_ca_certificate("Intermediate"),
        intermediate_ca_private_key=EcdsaSigner.generate().private_pem_pkcs8(),
    )


@pytest.fixture
def static_provider(signing_credentials: SigningCredentials, ca_credentials: CACredentials) -> StaticProvider:
    return StaticProvider(signing_credentials, ca_credentials)


@pytest.fixture
def credential_dir(tmp_path: Path, ec_signer: EcdsaSigner) -> Path:
    (tmp_path / "es256_certs.pem").write_text(CERT_CHAIN, encoding="utf-8")
    (tmp_path / "es256_private.key").write_text(ec_signer.private_pem_pkcs8(), encoding="utf-8")
    return tmp_path


@pytest.fixture
def csr_pem() -> str:
    key = ec.generate_private_key(ec.SECP256R1())
    csr = (
        x509.CertificateSigningRequestBuilder()
        .subject_name(x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "c2pa-client.example")]))
        .sign(key, hashes.SHA256())
    )
    return csr.public_bytes(serialization.Encoding.PEM).decode("ascii")


@pytest.fixture
def aws_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


def make_config(
    *,
    token: Optional[str] = None,
    credential_dir: Optional[Path] = None,
    use_kms: bool = False,
    kms_key_id: Optional[str] = None,
    signing_server_url: Optional[str] = None,
    environment: Optional[str] = None,
    metrics_enabled: bool = False,
) -> AppConfig:
    credentials = CredentialsConfig(directory=credential_dir) if credential_dir else CredentialsConfig()
    return AppConfig(
        server=ServerConfig(
            environment=environment,
            signing_server_url=signing_server_url,
            metrics_enabled=metrics_enabled,
        ),
        auth=AuthConfig(token=token),
        signing=SigningConfig(use_kms=use_kms, kms_key_id=kms_key_id),
        credentials=credentials,
    )
