"""Pytest configuration and fixtures.

Provides environment isolation and config cache hygiene. All fixtures here are
autouse unless noted.
"""

from __future__ import annotations

import logging
import os

import pytest

from systematics.config import clear_config_cache

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def isolate_systematics_env(request, monkeypatch):
    """Ensure a clean configuration environment for each test.

    Clears SYSTEMATICS_* env vars and the cached environment config so one
    test's settings never leak into another.
    Opt-out: @pytest.mark.allow_env_pollution
    """
    if not request.node.get_closest_marker("allow_env_pollution"):
        for key in list(os.environ.keys()):
            if key.startswith("SYSTEMATICS_"):
                monkeypatch.delenv(key, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def capture_debug(caplog):
    """Capture systematics log records at DEBUG and above."""
    caplog.set_level(logging.DEBUG, logger="systematics")
    return caplog
