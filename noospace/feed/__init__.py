"""
Feed module.

Holds the in-memory ordered entry collection and the tag filter.
"""

from noospace.feed.state import FeedState

__all__ = [
    "FeedState",
]
