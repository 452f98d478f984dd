from __future__ import annotations

import base64
import re

_NON_ALPHABET = re.compile(r"[^A-Za-z0-9+/]")


def b64e(data: bytes) -> str:
    """Standard base64 encode with padding"""
    return base64.b64encode(data).decode("ascii")


def b64d(value: str) -> bytes:
    """Lenient base64 decode.

    Accepts both the standard and the URL-safe alphabet. Decoding stops at the
    first ``=``. Every other character is discarded, and a trailing character
    that cannot complete a byte is ignored. Never raises on malformed input.
    """
    data = value.split("=", 1)[0]
    cleaned = _NON_ALPHABET.sub("", data.replace("-", "+").replace("_", "/"))
    if len(cleaned) % 4 == 1:
        cleaned = cleaned[:-1]
    pad = "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned + pad)
