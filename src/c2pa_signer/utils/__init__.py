from __future__ import annotations

from .encoding import b64d, b64e

__all__ = ["b64d", "b64e"]
