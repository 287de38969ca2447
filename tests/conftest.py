"""Shared pytest fixtures and configuration for the jwp-wrap test suite.

Guidelines
----------
* No internet access in any test.
* The transport is mocked at the core boundary; httpx is driven
  through ``httpx.MockTransport`` at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on the caller's ``JWP_*`` environment.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from jwp_wrap.core.platform_api import PlatformApi

SITE_KEY = "site1"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Strip JWP_* variables and run from an empty directory (no .env)."""
    for variable in (
        "JWP_API_SECRET",
        "JWP_SITE_KEY",
        "JWP_V1_BASE_URL",
        "JWP_V2_BASE_URL",
        "JWP_CDN_BASE_URL",
        "JWP_TIMEOUT",
    ):
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def transport() -> MagicMock:
    """A mock :class:`PlatformTransport`."""
    return MagicMock()


@pytest.fixture()
def storage(tmp_path: Path) -> MagicMock:
    """A mock :class:`ScratchStorage` returning a fixed path."""
    mock = MagicMock()
    mock.write.return_value = tmp_path / "thumb.jpg"
    return mock


@pytest.fixture()
def api(transport: MagicMock, storage: MagicMock) -> PlatformApi:
    return PlatformApi(transport, SITE_KEY, storage)
