"""C2PA signing server: certificate issuance stub and manifest claim signing."""
from __future__ import annotations

from .version import __version__

__all__ = ["__version__"]
