"""Shared fixtures: isolate tests from the runner environment."""

import os

import pytest


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove INPUT_*, GITHUB_*, LOGGING_* and RUNNER_* variables set by a CI runner."""
    for key in list(os.environ):
        if key.startswith(("INPUT_", "GITHUB_", "LOGGING_", "RUNNER_")):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
