from .certificate_service import CertificateService
from .signer_service import SignerService

__all__ = ["CertificateService", "SignerService"]
