"""
Data models module.

Defines the Entry record and its field limits.
"""

from noospace.models.entry import (
    Entry,
    DEFAULT_SYMBOL,
    UNTAGGED,
    MAX_TEXT_LENGTH,
    MAX_SYMBOL_LENGTH,
    MAX_TAGS,
    utc_now_iso,
    to_utc_iso,
    parse_iso,
    same_id,
)

__all__ = [
    "Entry",
    "DEFAULT_SYMBOL",
    "UNTAGGED",
    "MAX_TEXT_LENGTH",
    "MAX_SYMBOL_LENGTH",
    "MAX_TAGS",
    "utc_now_iso",
    "to_utc_iso",
    "parse_iso",
    "same_id",
]
