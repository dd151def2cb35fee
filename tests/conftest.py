"""
Pytest configuration and shared fixtures for Yildiz client tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

# Import fixture modules
_common = importlib.import_module("fixtures.common")
_stub = importlib.import_module("fixtures.stub_server")

# Extract factory functions
make_config = _common.make_config
make_http_client = _common.make_http_client
make_yildiz_client = _common.make_yildiz_client
start_stub_server = _stub.start_stub_server


_YILDIZ_ENV_VARS = (
    "YILDIZ_PREFIX",
    "YILDIZ_TOKEN",
    "YILDIZ_PROTO",
    "YILDIZ_HOST",
    "YILDIZ_PORT",
    "YILDIZ_DISABLE_KEEP_ALIVE",
    "YILDIZ_ENABLE_TIMINGS",
    "YILDIZ_TIMEOUT_MS",
)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def clean_env(monkeypatch):
    """Remove every YILDIZ_* variable so config tests start from defaults."""
    for name in _YILDIZ_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def config():
    """Provide a default ClientConfig for tests."""
    return make_config()


@pytest.fixture
def stub_server():
    """Provide a running stub Yildiz server, stopped after the test."""
    server = start_stub_server()
    try:
        yield server
    finally:
        server.stop()


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
