"""
Service settings, read from TOTP_* environment variables or a .env file
"""
import secrets

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='TOTP_', env_file='.env', env_file_encoding='utf-8', extra='ignore'
    )

    # HTTP server
    host: str = '127.0.0.1'
    port: int = 5000
    debug: bool = False
    secret_key: str = Field(default_factory=lambda: secrets.token_hex(24))
    cors_allow_origin: str = '*'

    # Verification
    tolerance_steps: int = Field(default=1, ge=0, le=10)

    # One configuration per browser session instead of one per process
    per_session_slots: bool = False
    # Least recently used slots are dropped beyond this
    max_slots: int = Field(default=1000, ge=1)

    # QR rendering
    qr_box_size: int = Field(default=10, ge=1)
    qr_border: int = Field(default=4, ge=0)

    log_level: str = 'INFO'


settings = Settings()
