"""Tests for secret generation."""

import pytest

from auth.errors import EntropyExhaustion, InvalidInput
from auth.secret_store import SECRET_BYTES, Secret, SecretStore


def test_generate_is_160_bits():
    secret = SecretStore().generate()
    assert len(secret.value) == SECRET_BYTES == 20
    assert len(secret.base32) == 32


def test_generate_returns_independent_secrets():
    store = SecretStore()
    values = {store.generate().value for _ in range(50)}
    assert len(values) == 50


def test_repr_hides_key_material():
    secret = Secret(b'12345678901234567890')
    assert repr(secret) == 'Secret(<160 bits>)'
    assert secret.base32 not in repr(secret)
    assert '1234' not in str(secret)


def test_base32_round_trip():
    secret = Secret(b'12345678901234567890')
    assert secret.base32 == 'GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ'
    assert Secret.from_base32(secret.base32) == secret
    assert Secret.from_base32('gezd gnbv gy3t qojq gezd gnbv gy3t qojq') == secret


@pytest.mark.parametrize('encoded', ['not base32!', '', '1111'])
def test_from_base32_rejects_garbage(encoded):
    with pytest.raises(InvalidInput):
        Secret.from_base32(encoded)


def test_short_secrets_are_refused():
    with pytest.raises(ValueError):
        SecretStore(size=10)


def test_random_source_failure():
    def broken(size):
        raise OSError('no entropy')

    with pytest.raises(EntropyExhaustion) as exc:
        SecretStore(random_source=broken).generate()
    assert exc.value.status_code == 500


def test_short_read_from_random_source():
    with pytest.raises(EntropyExhaustion):
        SecretStore(random_source=lambda size: b'\x00' * (size - 1)).generate()
