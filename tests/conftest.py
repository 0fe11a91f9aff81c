"""
Global pytest configuration and fixtures.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from the developer's config files and credentials.

    HOME and the working directory point at a temporary directory so that
    ``~/.oauthx/config.yml`` and ``./oauthx.yml`` are never picked up, and
    the oauthx environment variables are cleared.
    """
    for var in (
        "OAUTHX_CONFIG",
        "OAUTHX_DEBUG",
        "OAUTHX_CLIENT_ID",
        "OAUTHX_CLIENT_SECRET",
        "OAUTHX_REFRESH_TOKEN",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
