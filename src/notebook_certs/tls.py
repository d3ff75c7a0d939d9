"""Helpers for resolving the certificate bundle passed to ``requests``."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Mapping, Union

LOGGER = logging.getLogger(__name__)

CA_BUNDLE_ENV_VAR = "SSL_CERT_FILE"
DEFAULT_CA_BUNDLE = Path(".certs") / "ca-bundle.crt"

VerifyType = Union[bool, str]
VerifySource = Literal["env", "default", "system"]


def resolve_ca_bundle_path(raw_path: str | None) -> str | None:
    """Return ``raw_path`` (with ``~`` expanded) if it points at an existing file."""

    if not raw_path or not raw_path.strip():
        return None
    candidate = os.path.expanduser(raw_path.strip())
    try:
        exists = Path(candidate).exists()
    except (OSError, ValueError):
        return None
    return candidate if exists else None


def default_ca_bundle_path(home: Path | None = None) -> Path:
    """Return ``<home>/.certs/ca-bundle.crt``."""

    base = home if home is not None else Path.home()
    return base / DEFAULT_CA_BUNDLE


@dataclass(frozen=True)
class Resolution:
    """Outcome of a bundle lookup: the ``verify`` value and where it came from."""

    verify: VerifyType
    source: VerifySource
    candidate: str | None = None

    def __str__(self) -> str:
        return f"{self.verify} ({self.source})"


class CertBundleResolver:
    """Decide which ``verify`` value an HTTPS call should use.

    ``SSL_CERT_FILE`` wins when it is set. Otherwise ``~/.certs/ca-bundle.crt``
    is tried. When the chosen candidate does not exist the default trust store
    is used (``True``). The result is never an empty string or a missing path.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        home: Path | None = None,
    ) -> None:
        self._environ = environ
        self._home = home

    @property
    def environ(self) -> Mapping[str, str]:
        return self._environ if self._environ is not None else os.environ

    def _candidate(self) -> tuple[str | None, VerifySource]:
        raw_path = (self.environ.get(CA_BUNDLE_ENV_VAR) or "").strip()
        if raw_path:
            return raw_path, "env"
        try:
            return str(default_ca_bundle_path(self._home)), "default"
        except (KeyError, RuntimeError):
            # Path.home() raises when no home directory can be determined.
            return None, "default"

    def describe(self) -> Resolution:
        candidate, source = self._candidate()
        resolved = resolve_ca_bundle_path(candidate)
        if resolved is None:
            LOGGER.debug(
                "No CA bundle at %s candidate %r; using the system trust store",
                source,
                candidate,
            )
            return Resolution(verify=True, source="system", candidate=candidate)
        LOGGER.debug("Using CA bundle %s from %s", resolved, source)
        return Resolution(verify=resolved, source=source, candidate=candidate)

    def resolve(self) -> VerifyType:
        """Return the value to pass as ``verify=`` to ``requests``."""

        return self.describe().verify


def get_verify(
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> VerifyType:
    """Return the ``verify`` value for the current process environment."""

    return CertBundleResolver(environ=environ, home=home).resolve()


__all__ = [
    "CA_BUNDLE_ENV_VAR",
    "DEFAULT_CA_BUNDLE",
    "CertBundleResolver",
    "Resolution",
    "VerifySource",
    "VerifyType",
    "default_ca_bundle_path",
    "get_verify",
    "resolve_ca_bundle_path",
]
