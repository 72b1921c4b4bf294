"""
Configuration module for Noospace.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading. Missing credentials default to empty strings so the
client starts up without a backend and only fails when the store is actually used.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root (parent of noospace/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode for verbose logging
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

# Root log level used when DEBUG is off
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


# =============================================================================
# Entry Store (Supabase) Configuration
# =============================================================================

# Base URL of the hosted project, e.g. https://xyzcompany.supabase.co
SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")

# Anonymous access token sent as both apikey and bearer token
SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "")

# Table holding the entries
ENTRIES_TABLE: str = os.getenv("ENTRIES_TABLE", "entries")

# HTTP request timeout in seconds
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))

# Which store to use: "supabase" (hosted) or "memory" (process-local, for development)
STORE_BACKEND: str = os.getenv("STORE_BACKEND", "supabase").lower()


# =============================================================================
# Web Client
# =============================================================================

# Signs the browser session cookie (per-visitor wallet token); random per process when unset
SECRET_KEY: str = os.getenv("SECRET_KEY", "")


# =============================================================================
# Helper Functions
# =============================================================================

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_logging_configured = False


def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_store_configured() -> bool:
    """True when both the base URL and the access token are set."""
    return bool(SUPABASE_URL and SUPABASE_ANON_KEY)


def validate_config() -> list[str]:
    """
    Validate configuration.

    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []

    if is_production():
        if not SUPABASE_URL:
            errors.append("SUPABASE_URL is required in production")
        if not SUPABASE_ANON_KEY:
            errors.append("SUPABASE_ANON_KEY is required in production")

    if not ENTRIES_TABLE:
        errors.append("ENTRIES_TABLE cannot be empty")

    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")

    if STORE_BACKEND not in ("supabase", "memory"):
        errors.append("STORE_BACKEND must be 'supabase' or 'memory'")

    if LOG_LEVEL not in _VALID_LOG_LEVELS:
        errors.append(f"LOG_LEVEL must be one of {', '.join(_VALID_LOG_LEVELS)}")

    return errors


def configure_logging(force: bool = False) -> None:
    """Configure root logging once, honouring DEBUG and LOG_LEVEL."""
    global _logging_configured
    if _logging_configured and not force:
        return

    level = logging.DEBUG if DEBUG else getattr(logging, LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=force,
    )
    _logging_configured = True


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  LOG_LEVEL: {LOG_LEVEL}")
    print(f"  SUPABASE_URL: {SUPABASE_URL or '(not set)'}")
    print(f"  SUPABASE_ANON_KEY: {'***' if SUPABASE_ANON_KEY else '(not set)'}")
    print(f"  ENTRIES_TABLE: {ENTRIES_TABLE}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  STORE_BACKEND: {STORE_BACKEND}")
    print(f"  SECRET_KEY: {'***' if SECRET_KEY else '(random per process)'}")
