"""HTTPS downloads for the example notebooks.

Every request made here passes the certificate bundle chosen by
:class:`~notebook_certs.tls.CertBundleResolver` as ``verify=``, so notebooks
behind a TLS inspection proxy work once ``SSL_CERT_FILE`` (or
``~/.certs/ca-bundle.crt``) points at the proxy's root certificate.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from urllib.parse import unquote, urlsplit

import requests

from notebook_certs.config import DownloadSettings, get_settings
from notebook_certs.tls import CertBundleResolver, VerifyType

LOGGER = logging.getLogger(__name__)

_FALLBACK_FILENAME = "download"


class DownloadError(RuntimeError):
    """Raised when a download fails for reasons other than TLS verification."""


def build_session(
    *,
    verify: VerifyType | None = None,
    settings: DownloadSettings | None = None,
) -> requests.Session:
    """Return a session configured with the resolved certificate bundle."""

    settings = settings if settings is not None else get_settings().download
    session = requests.Session()
    session.verify = verify if verify is not None else CertBundleResolver().resolve()
    session.headers["User-Agent"] = settings.user_agent
    return session


def _filename_from_url(url: str) -> str:
    name = unquote(urlsplit(url).path.rstrip("/").rsplit("/", 1)[-1])
    return name or _FALLBACK_FILENAME


def _names_directory(destination: str | Path) -> bool:
    raw = str(destination)
    return raw.endswith(("/", os.sep)) or Path(raw).expanduser().is_dir()


def _target_path(url: str, destination: str | Path) -> Path:
    target = Path(destination).expanduser()
    if _names_directory(destination):
        target = target / _filename_from_url(url)
    return target


def _effective_verify(session: requests.Session, verify: VerifyType | None) -> VerifyType:
    # REQUESTS_CA_BUNDLE and CURL_CA_BUNDLE override session.verify unless
    # verify= is passed per call. A session at the requests default gets the
    # resolved bundle.
    if verify is not None:
        return verify
    if session.verify is not True:
        return session.verify
    return CertBundleResolver().resolve()


def _get(
    session: requests.Session,
    url: str,
    *,
    verify: VerifyType | None,
    timeout: float,
    stream: bool,
) -> requests.Response:
    effective = _effective_verify(session, verify)

    LOGGER.info("Downloading %s (verify=%s)", url, effective)
    try:
        response = session.get(url, timeout=timeout, stream=stream, verify=effective)
        response.raise_for_status()
    except requests.exceptions.SSLError:
        LOGGER.warning("TLS verification failed for %s", url)
        raise
    except requests.RequestException as exc:
        LOGGER.warning("Download of %s failed: %s", url, exc)
        raise DownloadError(f"Failed to download {url}: {exc}") from exc
    return response


def fetch(
    url: str,
    *,
    verify: VerifyType | None = None,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> bytes:
    """Return the body of ``url``.

    ``verify`` overrides the resolved certificate bundle. TLS verification
    errors are raised unchanged as :class:`requests.exceptions.SSLError`; all
    other request failures raise :class:`DownloadError`.
    """

    settings = get_settings().download
    owned = session is None
    active = build_session(verify=verify, settings=settings) if owned else session
    try:
        response = _get(
            active,
            url,
            verify=verify,
            timeout=timeout if timeout is not None else settings.timeout_seconds,
            stream=False,
        )
        return response.content
    finally:
        if owned:
            active.close()


def download(
    url: str,
    destination: str | Path = ".",
    *,
    verify: VerifyType | None = None,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> Path:
    """Stream ``url`` to ``destination`` and return the written path.

    When ``destination`` is an existing directory, or ends with a path
    separator, the file name is taken from the URL. Missing parent directories
    are created once the server has answered. Data is written to
    ``<name>.part`` first and renamed on success.
    """

    settings = get_settings().download
    target = _target_path(url, destination)
    partial = target.with_name(f"{target.name}.part")

    owned = session is None
    active = build_session(verify=verify, settings=settings) if owned else session
    try:
        response = _get(
            active,
            url,
            verify=verify,
            timeout=timeout if timeout is not None else settings.timeout_seconds,
            stream=True,
        )
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with partial.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=settings.chunk_size):
                    if chunk:
                        handle.write(chunk)
            partial.replace(target)
        except requests.RequestException as exc:
            partial.unlink(missing_ok=True)
            raise DownloadError(f"Failed to download {url}: {exc}") from exc
        except OSError:
            partial.unlink(missing_ok=True)
            raise
        finally:
            response.close()
    finally:
        if owned:
            active.close()

    LOGGER.info("Saved %s to %s", url, target)
    return target


__all__ = ["DownloadError", "build_session", "download", "fetch"]
