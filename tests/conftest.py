"""Pytest configuration and fixtures.

Provides environment isolation, settings cache resets and small test doubles.
Fixtures here are autouse unless noted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import pytest

from pipehelpers.config import reset_settings

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class Recorder:
    """Callable double that records every payload it is called with.

    One-argument by default; use ``Recorder.nullary()`` for a zero-argument
    callback sharing the same call log.
    """

    returns: Any = None
    calls: list[Any] = field(default_factory=list)

    def __call__(self, payload: Any) -> Any:
        self.calls.append(payload)
        return self.returns

    def nullary(self):
        def _call() -> Any:
            self.calls.append(None)
            return self.returns

        return _call

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def recorder() -> Recorder:
    """Return a fresh one-argument ``Recorder``."""
    return Recorder()


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setattr(
        "pipehelpers.config.load_dotenv", lambda *_args, **_kwargs: False
    )


@pytest.fixture(autouse=True)
def isolate_env(request, monkeypatch):
    """Clear PIPEHELPERS_* variables so settings start from defaults.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("PIPEHELPERS_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings before and after each test."""
    reset_settings()
    yield
    reset_settings()
