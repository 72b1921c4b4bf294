"""
Spiral renderer for Noospace.

Places entry i at polar coordinates (radius = i * RADIUS_STEP,
angle = i * ANGLE_STEP) around a fixed center. Decorative only: there is
no collision avoidance, so later cards overlap or leave the viewport.
"""

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from noospace.models.entry import Entry


EMPTY_MESSAGE = "The spiral is empty. Inscribe something…"

CENTER_X: float = 300.0
CENTER_Y: float = 300.0
RADIUS_STEP: float = 32.0
ANGLE_STEP: float = 0.6  # radians

# Fixed viewport the cards are drawn into (pixels)
VIEWPORT_HEIGHT: int = 700


@dataclass
class SpiralCard:
    """One entry placed on the spiral. Spiral cards offer star only."""
    id: Any
    symbol: str
    text: str
    stars: int
    index: int
    angle: float
    radius: float
    x: float
    y: float
    can_star: bool = True
    can_delete: bool = False


@dataclass
class SpiralLayout:
    """The whole spiral view: cards, or an empty-state message."""
    cards: List[SpiralCard] = field(default_factory=list)
    empty_message: Optional[str] = None
    center_x: float = CENTER_X
    center_y: float = CENTER_Y
    height: int = VIEWPORT_HEIGHT

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def to_text(self) -> str:
        """Plain-text rendering for terminals: one line per card with its offset."""
        if self.is_empty:
            return self.empty_message or EMPTY_MESSAGE
        return "\n".join(
            f"({card.x:7.1f}, {card.y:7.1f})  {card.symbol}  {card.text}  ⭐ {card.stars}"
            for card in self.cards
        )


def spiral_position(index: int) -> tuple[float, float, float, float]:
    """
    Polar and Cartesian position of the card at a given index.

    Returns:
        (angle, radius, x, y)
    """
    angle = index * ANGLE_STEP
    radius = index * RADIUS_STEP
    x = CENTER_X + radius * math.cos(angle)
    y = CENTER_Y + radius * math.sin(angle)
    return angle, radius, x, y


def render_spiral(entries: Sequence[Entry]) -> SpiralLayout:
    """
    Build the spiral view for the given (already filtered) entries.

    Args:
        entries: Entries in display order; index in this sequence drives position.

    Returns:
        SpiralLayout with one card per entry, or an empty-state message.
    """
    if not entries:
        return SpiralLayout(cards=[], empty_message=EMPTY_MESSAGE)

    cards = []
    for index, entry in enumerate(entries):
        angle, radius, x, y = spiral_position(index)
        cards.append(SpiralCard(
            id=entry.id,
            symbol=entry.symbol,
            text=entry.text,
            stars=entry.stars,
            index=index,
            angle=angle,
            radius=radius,
            x=x,
            y=y,
        ))
    return SpiralLayout(cards=cards)
