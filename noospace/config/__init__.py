"""
Configuration module.

Handles environment variables, credentials, and logging setup.
"""

from noospace.config.config import (
    APP_ENV,
    DEBUG,
    LOG_LEVEL,
    SUPABASE_URL,
    SUPABASE_ANON_KEY,
    ENTRIES_TABLE,
    REQUEST_TIMEOUT,
    STORE_BACKEND,
    SECRET_KEY,
    is_production,
    is_store_configured,
    validate_config,
    configure_logging,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "LOG_LEVEL",
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "ENTRIES_TABLE",
    "REQUEST_TIMEOUT",
    "STORE_BACKEND",
    "SECRET_KEY",
    "is_production",
    "is_store_configured",
    "validate_config",
    "configure_logging",
    "print_config_summary",
]
