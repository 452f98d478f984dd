from .signing import EcdsaSigner, extract_private_key_pem, split_certificate_chain

__all__ = ["EcdsaSigner", "extract_private_key_pem", "split_certificate_chain"]
