"""
Views module.

Two presentational strategies over the filtered entry list:
a chronological scroll and a decorative spiral.
"""

from typing import Sequence, Union

from noospace.models.entry import Entry
from noospace.views.list_view import (
    ListBlock,
    ListLayout,
    format_timestamp,
    render_list,
)
from noospace.views.spiral import (
    SpiralCard,
    SpiralLayout,
    spiral_position,
    render_spiral,
)

VIEW_SCROLL = "scroll"
VIEW_SPIRAL = "spiral"
VIEWS = (VIEW_SCROLL, VIEW_SPIRAL)


def normalize_view(view: str) -> str:
    """Known view names pass through; anything else falls back to the scroll view."""
    return view if view in VIEWS else VIEW_SCROLL


def render(view: str, entries: Sequence[Entry]) -> Union[ListLayout, SpiralLayout]:
    """Render entries with the named view."""
    if normalize_view(view) == VIEW_SPIRAL:
        return render_spiral(entries)
    return render_list(entries)


__all__ = [
    "VIEW_SCROLL",
    "VIEW_SPIRAL",
    "VIEWS",
    "normalize_view",
    "render",
    "ListBlock",
    "ListLayout",
    "format_timestamp",
    "render_list",
    "SpiralCard",
    "SpiralLayout",
    "spiral_position",
    "render_spiral",
]
