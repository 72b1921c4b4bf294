"""
Core data model for Noospace.

Defines the Entry dataclass representing a single inscription in the feed:
a short text with a symbol, a handful of tags, a timestamp and a star count.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Optional


DEFAULT_SYMBOL = "✶"
UNTAGGED = "untagged"

MAX_TEXT_LENGTH = 240
MAX_SYMBOL_LENGTH = 2
MAX_TAGS = 5


def to_utc_iso(moment: datetime) -> str:
    """An instant as UTC ISO 8601 with millisecond precision and a Z suffix. Naive values are local time."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    """Current instant, see to_utc_iso."""
    return to_utc_iso(datetime.now(timezone.utc))


def parse_iso(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp, tolerating a trailing Z. Returns None if invalid."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def same_id(a: Any, b: Any) -> bool:
    """Compare store ids that may arrive as int or str (e.g. from a URL)."""
    if a is None or b is None:
        return False
    return str(a) == str(b)


@dataclass
class Entry:
    """
    A single entry in the feed.

    Attributes:
        text: The inscription itself, already trimmed.
        symbol: One or two characters shown beside the text.
        tags: Lowercase tags in the order they were typed.
        wallet: Cosmetic client-side token, or None.
        date: ISO 8601 creation timestamp; sort key and quota bucket.
        stars: Star counter, never negative.
        id: Identifier assigned by the store, None until persisted.
    """

    text: str
    symbol: str = DEFAULT_SYMBOL
    tags: list[str] = field(default_factory=lambda: [UNTAGGED])
    wallet: Optional[str] = None
    date: str = field(default_factory=utc_now_iso)
    stars: int = 0
    id: Optional[Any] = None

    def __post_init__(self) -> None:
        """Validate fields after initialization."""
        self.validate()

    def validate(self) -> None:
        """
        Validate field invariants.

        Raises:
            ValueError: If validation fails.
        """
        errors = []

        if not self.text or not self.text.strip():
            errors.append("text is required and cannot be empty")
        elif len(self.text) > MAX_TEXT_LENGTH:
            errors.append(f"text must be at most {MAX_TEXT_LENGTH} characters, got {len(self.text)}")

        if not self.symbol or len(self.symbol) > MAX_SYMBOL_LENGTH:
            errors.append(f"symbol must be 1 to {MAX_SYMBOL_LENGTH} characters, got {self.symbol!r}")

        if len(self.tags) > MAX_TAGS:
            errors.append(f"at most {MAX_TAGS} tags allowed, got {len(self.tags)}")

        if self.stars < 0:
            errors.append(f"stars cannot be negative, got {self.stars}")

        if errors:
            raise ValueError(f"Entry validation failed: {'; '.join(errors)}")

    @property
    def day_key(self) -> str:
        """The YYYY-MM-DD prefix of the creation date."""
        return self.date[:10] if self.date else ""

    def parsed_date(self) -> Optional[datetime]:
        """Creation date as a datetime, or None if the stored value is not ISO 8601."""
        return parse_iso(self.date)

    def to_row(self) -> dict:
        """
        Convert to a store row.

        The id is omitted until the store has assigned one.
        """
        row = asdict(self)
        row["tags"] = list(self.tags)
        if self.id is None:
            del row["id"]
        return row

    @classmethod
    def from_row(cls, row: dict) -> "Entry":
        """
        Create an Entry from a store row.

        Missing tags become an empty list, missing stars zero and a missing
        symbol the default glyph.
        """
        return cls(
            id=row.get("id"),
            text=row.get("text") or "",
            symbol=row.get("symbol") or DEFAULT_SYMBOL,
            tags=list(row.get("tags") or []),
            wallet=row.get("wallet"),
            date=row.get("date") or "",
            stars=int(row.get("stars") or 0),
        )

    def with_stars(self, stars: int) -> "Entry":
        """Return a copy with a different star count."""
        data = asdict(self)
        data["stars"] = stars
        return Entry(**data)

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"{self.symbol} {self.text} [{', '.join(self.tags)}] ({self.stars}★)"

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"Entry(id={self.id!r}, text={self.text!r}, date={self.date!r}, stars={self.stars})"
