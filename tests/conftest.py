"""
Pytest configuration and shared fixtures for Autotrace tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Isolates tests from AUTOTRACE_* environment variables
3. Configures pytest markers
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from autotrace.config.runtime import LimitsConfig, RuntimeConfig, set_default_config
from autotrace.crypto.hashing import sha256


ENV_VARS = (
    "AUTOTRACE_LOG_LEVEL",
    "AUTOTRACE_LOG_FILE",
    "AUTOTRACE_MAX_LEAVES",
    "AUTOTRACE_MAX_PAYLOAD_BYTES",
    "AUTOTRACE_MAX_REQUEST_BYTES",
    "AUTOTRACE_API_HOST",
    "AUTOTRACE_API_PORT",
)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Run every test without AUTOTRACE_* variables and outside the repo root."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def limited_config():
    """RuntimeConfig with small limits for resource tests."""
    return RuntimeConfig(limits=LimitsConfig(
        max_leaves=3,
        max_payload_bytes=8,
        max_request_bytes=128,
    ))


@pytest.fixture
def leaf_digests():
    """Seven leaf digests (odd count exercises padding at several levels)."""
    return [sha256(f"leaf{i}".encode()) for i in range(7)]


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
