"""
Policy module.

Validates candidate inscriptions and enforces the daily ritual limit.
"""

from noospace.policy.quota import (
    DAILY_LIMIT,
    REASON_EMPTY,
    REASON_TOO_LONG,
    REASON_DAILY_LIMIT,
    MESSAGES,
    PolicyDecision,
    ValidationError,
    normalize_tags,
    normalize_symbol,
    today_key,
    count_today,
    rituals_left,
    evaluate,
)

__all__ = [
    # Limits and reasons
    "DAILY_LIMIT",
    "REASON_EMPTY",
    "REASON_TOO_LONG",
    "REASON_DAILY_LIMIT",
    "MESSAGES",
    # Results
    "PolicyDecision",
    "ValidationError",
    # Functions
    "normalize_tags",
    "normalize_symbol",
    "today_key",
    "count_today",
    "rituals_left",
    "evaluate",
]
