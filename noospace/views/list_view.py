"""
Scroll (list) renderer for Noospace.

Lays out entries one block per entry, in the order given (the feed is
already chronological). Pure: takes entries, returns a layout, never
touches the feed.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from noospace.models.entry import Entry, parse_iso


EMPTY_MESSAGE = "The field is quiet. Inscribe something…"

# Display format for entry timestamps (local time)
TIMESTAMP_FORMAT = "%b %d, %Y %H:%M"


def format_timestamp(value: Optional[str]) -> str:
    """
    Format a stored ISO date for display in local time.

    Unparseable values are returned unchanged; missing values become "Unknown".
    """
    if not value:
        return "Unknown"
    parsed = parse_iso(value)
    if parsed is None:
        return value
    return parsed.astimezone().strftime(TIMESTAMP_FORMAT)


@dataclass
class ListBlock:
    """One rendered entry in the scroll view."""
    id: Any
    symbol: str
    text: str
    tags: List[str]
    timestamp: str
    stars: int
    can_star: bool = True
    can_delete: bool = True

    @property
    def tag_chips(self) -> List[str]:
        return [f"#{tag}" for tag in self.tags]


@dataclass
class ListLayout:
    """The whole scroll view: blocks, or an empty-state message."""
    blocks: List[ListBlock] = field(default_factory=list)
    empty_message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    def to_text(self) -> str:
        """Plain-text rendering for terminals."""
        if self.is_empty:
            return self.empty_message or EMPTY_MESSAGE

        lines = []
        for block in self.blocks:
            lines.append(f"{block.symbol}  {block.text}")
            meta = " ".join(block.tag_chips)
            lines.append(f"    {meta}  ·  {block.timestamp}  ·  ⭐ {block.stars}  ·  id={block.id}")
            lines.append("")
        return "\n".join(lines).rstrip()


def render_list(entries: Sequence[Entry]) -> ListLayout:
    """
    Build the scroll view for the given (already filtered) entries.

    Args:
        entries: Entries in display order.

    Returns:
        ListLayout with one block per entry, or an empty-state message.
    """
    if not entries:
        return ListLayout(blocks=[], empty_message=EMPTY_MESSAGE)

    blocks = [
        ListBlock(
            id=entry.id,
            symbol=entry.symbol,
            text=entry.text,
            tags=list(entry.tags or []),
            timestamp=format_timestamp(entry.date),
            stars=entry.stars,
        )
        for entry in entries
    ]
    return ListLayout(blocks=blocks)
