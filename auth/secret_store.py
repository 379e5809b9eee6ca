"""
Shared secret generation for TOTP enrollment
"""
import logging
import os
from dataclasses import dataclass, field

from auth.errors import EntropyExhaustion, InvalidInput
from utils.encoding import decode_base32, encode_base32

logger = logging.getLogger(__name__)

SECRET_BYTES = 20  # 160 bits, the HMAC-SHA1 block recommendation of RFC 4226


@dataclass(frozen=True)
class Secret:
    """Raw key material shared with the authenticator app"""

    value: bytes = field(repr=False)

    def __post_init__(self):
        if not self.value:
            raise ValueError('Secret must not be empty')

    def __repr__(self):
        return f'Secret(<{len(self.value) * 8} bits>)'

    @property
    def base32(self):
        return encode_base32(self.value)

    @classmethod
    def from_base32(cls, encoded):
        """Rebuild a secret from its base32 form"""
        try:
            value = decode_base32(encoded)
        except ValueError as e:
            raise InvalidInput('Secret is not valid base32') from e
        if not value:
            raise InvalidInput('Secret must not be empty')
        return cls(value)


class SecretStore:
    """Produces independent secrets from the OS random source"""

    def __init__(self, size=SECRET_BYTES, random_source=os.urandom):
        if size < SECRET_BYTES:
            raise ValueError(f'Secrets must be at least {SECRET_BYTES * 8} bits')
        self.size = size
        self._random_source = random_source

    def generate(self):
        """Generate a fresh secret, never derived from a previous one"""
        try:
            value = self._random_source(self.size)
        except (OSError, NotImplementedError) as e:
            logger.error('Secure random source failed: %s', e)
            raise EntropyExhaustion('Could not generate a secret: random source unavailable') from e

        if len(value) != self.size:
            raise EntropyExhaustion('Could not generate a secret: random source returned short data')

        return Secret(value)
