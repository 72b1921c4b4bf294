"""
Quota and validation policy for Noospace.

Provides pure, side-effect-free functions to:
1. Normalize the comma-separated tag input and the symbol input
2. Count today's entries against the daily ritual limit
3. Decide whether a candidate inscription is accepted, and why not

All functions are deterministic given their inputs and do not mutate them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from noospace.models.entry import (
    Entry,
    DEFAULT_SYMBOL,
    UNTAGGED,
    MAX_TEXT_LENGTH,
    MAX_SYMBOL_LENGTH,
    MAX_TAGS,
)


# =============================================================================
# Policy Configuration
# =============================================================================

# New entries allowed per local calendar day
DAILY_LIMIT: int = 3

# Rejection reasons, checked in this order
REASON_EMPTY = "empty impulse"
REASON_TOO_LONG = "too long"
REASON_DAILY_LIMIT = "daily limit reached"

# User-facing messages per reason
MESSAGES: dict[str, str] = {
    REASON_EMPTY: "Write a short impulse.",
    REASON_TOO_LONG: f"Keep it under {MAX_TEXT_LENGTH} characters.",
    REASON_DAILY_LIMIT: f"Daily ritual limit reached ({DAILY_LIMIT}). Return tomorrow.",
}


# =============================================================================
# Result Data Structures
# =============================================================================

@dataclass
class PolicyDecision:
    """
    Outcome of evaluating a candidate inscription.

    Attributes:
        accepted: Whether the entry may be sent to the store.
        reason: Rejection reason, None when accepted.
        message: User-facing text for the reason, None when accepted.
    """
    accepted: bool
    reason: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def accept(cls) -> "PolicyDecision":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: str) -> "PolicyDecision":
        return cls(accepted=False, reason=reason, message=MESSAGES[reason])


class ValidationError(Exception):
    """A candidate inscription was rejected locally; the store was not contacted."""

    def __init__(self, reason: str, message: Optional[str] = None):
        self.reason = reason
        self.message = message or MESSAGES.get(reason, reason)
        super().__init__(self.message)

    @classmethod
    def from_decision(cls, decision: PolicyDecision) -> "ValidationError":
        return cls(decision.reason, decision.message)


# =============================================================================
# Normalization
# =============================================================================

def normalize_tags(raw: Optional[str]) -> list[str]:
    """
    Turn the comma-separated tag input into a tag list.

    Rules:
    - Split on commas, trim, lowercase
    - Drop empty parts
    - Keep the first MAX_TAGS in input order (duplicates are kept)
    - Substitute ["untagged"] when nothing is left

    Example:
        >>> normalize_tags("Red, red ,BLUE,,green,teal,violet")
        ['red', 'red', 'blue', 'green', 'teal']
    """
    parts = (raw or "").split(",")
    tags = [part.strip().lower() for part in parts]
    tags = [tag for tag in tags if tag][:MAX_TAGS]
    return tags if tags else [UNTAGGED]


def normalize_symbol(raw: Optional[str]) -> str:
    """Default an empty symbol to the fixed glyph and cap it at two characters."""
    return (raw or DEFAULT_SYMBOL)[:MAX_SYMBOL_LENGTH]


# =============================================================================
# Quota
# =============================================================================

def today_key(now: Optional[datetime] = None) -> str:
    """
    The local calendar day as YYYY-MM-DD.

    Args:
        now: Reference time; defaults to the current local time.
    """
    if now is None:
        now = datetime.now()
    return now.strftime("%Y-%m-%d")


def count_today(entries: Iterable[Entry], key: str) -> int:
    """Count entries whose date string starts with the given day key."""
    return sum(1 for entry in entries if (entry.date or "").startswith(key))


def rituals_left(entries: Iterable[Entry], key: str) -> int:
    """Remaining posts allowed for the day, never below zero."""
    return max(0, DAILY_LIMIT - count_today(entries, key))


# =============================================================================
# Decision
# =============================================================================

def evaluate(entries: Iterable[Entry], text: Optional[str], key: str) -> PolicyDecision:
    """
    Decide whether a candidate inscription is accepted.

    First failing rule wins:
    1. Trimmed text empty -> "empty impulse"
    2. Trimmed text longer than MAX_TEXT_LENGTH -> "too long"
    3. DAILY_LIMIT or more entries already dated today -> "daily limit reached"

    Args:
        entries: The entries currently held in the feed.
        text: Candidate text, untrimmed.
        key: Today's day key from today_key().

    Returns:
        PolicyDecision.
    """
    trimmed = (text or "").strip()

    if not trimmed:
        return PolicyDecision.reject(REASON_EMPTY)

    if len(trimmed) > MAX_TEXT_LENGTH:
        return PolicyDecision.reject(REASON_TOO_LONG)

    if count_today(entries, key) >= DAILY_LIMIT:
        return PolicyDecision.reject(REASON_DAILY_LIMIT)

    return PolicyDecision.accept()
