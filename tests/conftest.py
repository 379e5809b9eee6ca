"""
Shared fixtures for the TOTP service tests
"""
from functools import partial

import pytest

from auth.config_manager import ConfigManager, ConfigRegistry
from auth.secret_store import Secret

# RFC 4226 / RFC 6238 SHA1 test key
RFC_SECRET = Secret(b'12345678901234567890')


class FixedClock:
    """Callable clock the tests move by hand"""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def rfc_secret():
    return RFC_SECRET


@pytest.fixture
def clock():
    # Middle of a 30 second window
    return FixedClock(1_700_000_015)


@pytest.fixture
def manager(clock):
    return ConfigManager(clock=clock)


@pytest.fixture
def client(monkeypatch, clock):
    import app as app_module

    monkeypatch.setattr(app_module, 'registry', ConfigRegistry(partial(ConfigManager, clock=clock)))
    app_module.app.config['TESTING'] = True
    with app_module.app.test_client() as test_client:
        yield test_client
