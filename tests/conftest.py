"""Shared pytest fixtures for numeval tests."""

import pytest

from numeval.core.environment import MAX_DEPTH_VAR


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's NUMEVAL_MAX_DEPTH from leaking into tests."""
    monkeypatch.delenv(MAX_DEPTH_VAR, raising=False)
