"""Placeholder certificate text for the certificate authority stub.

None of these blocks is a valid X.509 structure. They keep the PEM armour so
clients can split the chain, and embed the values a caller may want to see
(common name, serial number, expiry) as plain substrings.
"""
from __future__ import annotations

from datetime import datetime

from c2pa_signer.models import format_timestamp

_BEGIN = "-----BEGIN CERTIFICATE-----"
_END = "-----END CERTIFICATE-----"

_SUBJECT_LINES = (
    "MRMwEQYDVQQIDApDYWxpZm9ybmlhMSEwHwYDVQQKDBhDMlBBIFNpZ25pbmcgU2Vy",
    "dmVyIFRlc3QwHhcNMjQwMTAxMDAwMDAwWhcN",
)
_TRAILER_LINES = (
    "VQQGEwJVUzETMBEGA1UECAwKQ2FsaWZvcm5pYTEhMB8GA1UECgwYQzJQQSBTaWdu",
    "aW5nIFNlcnZlciBUZXN0MFkwEwYHKoZIzj0CAQYIKoZIzj0DAQcDQgAE",
)


def _armour(lines: list[str]) -> str:
    return "\n".join([_BEGIN, *lines, _END])


def placeholder_ca_certificate(common_name: str) -> str:
    return _armour(
        [
            "MIIBkTCB+wIJAKHZ8Z3Y5Z3YMA0GCSqGSIb3DQEBCwUAMEUxCzAJBgNVBAYTAlVT",
            _SUBJECT_LINES[0],
            _SUBJECT_LINES[1] + "MzQwMTAxMDAwMDAwWjBFMQswCQYD",
            _TRAILER_LINES[0],
            _TRAILER_LINES[1] + common_name,
        ]
    )


def placeholder_leaf_certificate(serial_number: str, expires_at: datetime) -> str:
    return _armour(
        [
            f"MIIBkTCB+wIJA{serial_number}MA0GCSqGSIb3DQEBCwUAMEUxCzAJBgNVBAYTAlVT",
            _SUBJECT_LINES[0],
            _SUBJECT_LINES[1] + f"{format_timestamp(expires_at)}WjBFMQswCQYD",
            _TRAILER_LINES[0],
            _TRAILER_LINES[1] + "SignedCert",
        ]
    )
