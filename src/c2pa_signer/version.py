"""Version information for the C2PA signing server."""

__version__ = "1.0.0"
C2PA_VERSION = "1.0.0"
