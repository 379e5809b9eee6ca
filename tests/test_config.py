"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from config import Settings


def test_settings_defaults():
    s = Settings(_env_file=None)
    assert s.port == 5000
    assert s.tolerance_steps == 1
    assert s.per_session_slots is False
    assert s.cors_allow_origin == '*'
    assert s.max_slots == 1000
    assert len(s.secret_key) == 48


def test_secret_key_is_random_per_instance():
    assert Settings(_env_file=None).secret_key != Settings(_env_file=None).secret_key


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv('TOTP_TOLERANCE_STEPS', '2')
    monkeypatch.setenv('TOTP_PER_SESSION_SLOTS', 'true')
    s = Settings(_env_file=None)
    assert s.tolerance_steps == 2
    assert s.per_session_slots is True


def test_negative_tolerance_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, tolerance_steps=-1)
