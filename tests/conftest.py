"""Pytest configuration for the notebook-certs test-suite."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from notebook_certs.config import get_settings
from notebook_certs.tls import CA_BUNDLE_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    """Keep the developer's real certificate configuration out of the tests.

    ``HOME`` points at an empty directory so ``~/.certs/ca-bundle.crt`` does
    not exist unless a test creates it.
    """

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CA_BUNDLE_ENV_VAR, raising=False)
    for name in list(os.environ):
        if name.startswith("NOTEBOOK_CERTS_"):
            monkeypatch.delenv(name, raising=False)

    get_settings.cache_clear()
    yield home
    get_settings.cache_clear()


@pytest.fixture
def home_dir(isolated_environment: Path) -> Path:
    return isolated_environment


@pytest.fixture
def default_bundle(home_dir: Path) -> Path:
    """Create ``~/.certs/ca-bundle.crt`` inside the isolated home directory."""

    bundle = home_dir / ".certs" / "ca-bundle.crt"
    bundle.parent.mkdir()
    bundle.write_text("-----BEGIN CERTIFICATE-----\ndefault\n-----END CERTIFICATE-----\n")
    return bundle
