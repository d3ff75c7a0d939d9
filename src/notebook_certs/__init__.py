"""Certificate bundle resolution for HTTPS downloads in the example notebooks."""
from __future__ import annotations

__version__ = "0.1.0"

from .download import DownloadError, download, fetch
from .logging_setup import configure_logging
from .tls import CertBundleResolver, get_verify

__all__ = [
    "CertBundleResolver",
    "DownloadError",
    "__version__",
    "configure_logging",
    "download",
    "fetch",
    "get_verify",
]
