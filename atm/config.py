"""
Configuration Management Module

Environment-based configuration via pydantic-settings. Every field can be
overridden with an ``ATM_``-prefixed environment variable.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class AtmSettings(BaseSettings):
    """ATM ledger configuration"""

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # Ledger export
    ledger_encoding: str = "utf-8"

    # API configuration
    api_title: str = "ATM Ledger API"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    model_config = SettingsConfigDict(env_prefix="ATM_")


@lru_cache
def get_settings() -> AtmSettings:
    return AtmSettings()
