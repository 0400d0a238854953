"""
Pytest configuration and shared fixtures for the airdrop commitment tests.

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

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_common = importlib.import_module("fixtures.common")

make_records = _common.make_records
make_lcd_delegation = _common.make_lcd_delegation
write_json = _common.write_json


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def two_records():
    """The addr1/addr2 pair used throughout the reference vectors."""
    return _common.TWO_RECORDS


@pytest.fixture
def three_records():
    """Three records: exercises the odd-node carry rule."""
    return _common.THREE_RECORDS


@pytest.fixture
def five_records():
    """Five records: carry-up on two different levels."""
    return _common.FIVE_RECORDS


@pytest.fixture
def many_records():
    """A larger snapshot for property-style checks."""
    return make_records(17)


@pytest.fixture(autouse=True)
def clean_airdrop_env(monkeypatch):
    """Keep AIRDROP_* variables from the host environment out of tests."""
    import os
    for key in list(os.environ):
        if key.startswith("AIRDROP_"):
            monkeypatch.delenv(key, raising=False)
    from airdrop_core.config import set_default_config
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
