"""
TOTP configuration lifecycle

A ConfigManager holds at most one current AccountConfig. generate()
replaces it wholesale; current_code() and verify() read whatever
configuration is current when they start.

States: Empty -> Configured (generate() may be called again at any time)
"""
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone

from auth import verifier
from auth.errors import InvalidInput, NotConfigured
from auth.secret_store import Secret, SecretStore
from crypto.hotp import ALGORITHM, CODE_DIGITS, TIME_STEP_SECONDS, derive, time_step
from provisioning import uri as provisioning_uri

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountConfig:
    account_name: str
    issuer: str
    secret: Secret
    created_at: datetime
    provisioning_uri: str

    def info(self):
        """Human-readable summary, without the secret"""
        return (
            f'Account: {self.account_name}, Issuer: {self.issuer}, '
            f'Algorithm: {ALGORITHM}, Digits: {CODE_DIGITS}, Period: {TIME_STEP_SECONDS}s'
        )


@dataclass(frozen=True)
class GenerateResult:
    config: AccountConfig
    current_code: str


def totp_info():
    """Fixed protocol parameters shared by every configuration"""
    return {
        'algorithm': ALGORITHM,
        'digits': CODE_DIGITS,
        'period': TIME_STEP_SECONDS,
    }


def _require_text(value, field_name):
    if value is None or not str(value).strip():
        raise InvalidInput(f'{field_name} must not be empty')
    return str(value).strip()


class ConfigManager:
    """Single-slot TOTP configuration: generate, show, verify, refresh"""

    def __init__(self, secret_store=None, clock=time.time,
                 tolerance_steps=verifier.DEFAULT_TOLERANCE_STEPS):
        self.secret_store = secret_store or SecretStore()
        self.clock = clock
        self.tolerance_steps = tolerance_steps
        self._config = None
        self._lock = threading.Lock()

    @property
    def current_config(self):
        return self._config

    @property
    def is_configured(self):
        return self._config is not None

    def _snapshot(self):
        config = self._config
        if config is None:
            raise NotConfigured()
        return config

    def generate(self, account_name, issuer):
        """
        Create a new secret and make it the current configuration

        Any previous secret is discarded; its codes stop verifying.
        """
        account_name = _require_text(account_name, 'accountName')
        issuer = _require_text(issuer, 'issuer')

        with self._lock:
            secret = self.secret_store.generate()
            now = self.clock()
            config = AccountConfig(
                account_name=account_name,
                issuer=issuer,
                secret=secret,
                created_at=datetime.fromtimestamp(now, tz=timezone.utc),
                provisioning_uri=provisioning_uri.build(account_name, issuer, secret),
            )
            self._config = config

        logger.info('Generated TOTP configuration for %r (issuer %r)', account_name, issuer)
        return GenerateResult(config=config, current_code=derive(secret, time_step(now)))

    def current(self):
        """Current configuration and its code, read from one snapshot"""
        config = self._snapshot()
        return config, derive(config.secret, time_step(self.clock()))

    def current_code(self):
        """Code for the current time step, recomputed on every call"""
        return self.current()[1]

    def verify(self, user_code):
        """Check a user-submitted code against the current configuration"""
        config = self._snapshot()
        result = verifier.verify(config.secret, user_code, self.clock(), self.tolerance_steps)
        logger.info('Verification for %r: %s', config.account_name, 'valid' if result.is_valid else 'invalid')
        return result


class ConfigRegistry:
    """
    One ConfigManager per opaque key (session id, account id, ...)

    Removes the process-wide singleton when several users share the
    service; each key keeps the exact single-slot semantics above.
    """

    DEFAULT_KEY = 'default'
    DEFAULT_MAX_SLOTS = 1000

    def __init__(self, manager_factory=ConfigManager, max_slots=DEFAULT_MAX_SLOTS):
        if max_slots < 1:
            raise ValueError('max_slots must be at least 1')
        self._manager_factory = manager_factory
        self.max_slots = max_slots
        self._managers = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key=DEFAULT_KEY):
        """
        Return the manager for a key, creating an empty one if needed

        When the registry is full the least recently used slot is evicted.
        """
        with self._lock:
            manager = self._managers.get(key)
            if manager is not None:
                self._managers.move_to_end(key)
                return manager

            manager = self._manager_factory()
            self._managers[key] = manager
            while len(self._managers) > self.max_slots:
                evicted, _ = self._managers.popitem(last=False)
                logger.info('Evicted TOTP slot %s, registry full (%d)', evicted, self.max_slots)
            return manager

    def find(self, key=DEFAULT_KEY):
        """Return the manager for a key, or None; never creates a slot"""
        if key is None:
            return None
        with self._lock:
            manager = self._managers.get(key)
            if manager is not None:
                self._managers.move_to_end(key)
            return manager

    def discard(self, key):
        """Forget a key and its secret; returns True if it existed"""
        with self._lock:
            return self._managers.pop(key, None) is not None

    def __contains__(self, key):
        with self._lock:
            return key in self._managers

    def __len__(self):
        with self._lock:
            return len(self._managers)
