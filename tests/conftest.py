"""
Shared test configuration.

Clears CARAVAN_CONFIG_PATH for every test so a developer's local .env
cannot change the defaults the API tests rely on.
"""

import pytest


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Run every test against the built-in default config."""
    monkeypatch.delenv("CARAVAN_CONFIG_PATH", raising=False)
    yield
