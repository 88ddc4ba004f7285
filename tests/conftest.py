"""
Shared fixtures for the pool ledger test suite
"""

import pytest

from pool_ledger.config import reload_config
from pool_ledger.treasury import Treasury
from pool_ledger.users import User


@pytest.fixture(autouse=True)
def fresh_config():
    """Reload configuration after each test so env overrides do not leak"""
    reload_config()
    yield
    reload_config()


@pytest.fixture
def configure(monkeypatch):
    """Override configuration values through POOL_LEDGER_* environment variables"""
    def _configure(**values):
        for key, value in values.items():
            monkeypatch.setenv(f"POOL_LEDGER_{key.upper()}", str(value))
        return reload_config()
    return _configure


@pytest.fixture
def treasury():
    return Treasury()


@pytest.fixture
def alice():
    return User(id=1, name="Alice")


@pytest.fixture
def bob():
    return User(id=2, name="Bob")
