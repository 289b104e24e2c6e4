"""Shared fixtures for behaviour-driven tests."""

from __future__ import annotations

import pytest


@pytest.fixture
def cli_invocation() -> dict[str, object]:
    """Collect the result of running the CLI within a scenario."""
    return {}


@pytest.fixture
def url_state() -> dict[str, object]:
    """Scenario state shared between URL steps."""
    return {}


@pytest.fixture(autouse=True)
def isolated_config_home(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    """Keep the user's real config file out of scenarios."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
