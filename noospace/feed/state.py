"""
In-memory feed state for Noospace.

FeedState is the single source of truth for rendering: the ordered list of
known entries plus the active tag filter. It is replaced wholesale on load
and patched in place after each successful store operation.
"""

from typing import Any, Iterable, List, Optional

from noospace.models.entry import Entry, same_id
from noospace.policy import count_today


class FeedState:
    """
    Ordered entry collection and active tag filter.

    Entries are kept in the order the store returned them, with new
    inscriptions appended at the end. Nothing here re-sorts.
    """

    def __init__(self, entries: Iterable[Entry] = None, active_tag: Optional[str] = None):
        self._entries: List[Entry] = list(entries or [])
        self.active_tag: Optional[str] = active_tag or None

    @property
    def entries(self) -> List[Entry]:
        """A copy of all entries in feed order."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))

    # =========================================================================
    # Mutations
    # =========================================================================

    def replace_all(self, entries: Iterable[Entry]) -> None:
        """Replace every entry, as after a full fetch."""
        self._entries = list(entries)

    def append(self, entry: Entry) -> None:
        """Add a newly inscribed entry at the end."""
        self._entries.append(entry)

    def replace(self, entry: Entry) -> bool:
        """
        Swap in an updated entry with the same id.

        Returns:
            True if an entry was replaced.
        """
        replaced = False
        for index, existing in enumerate(self._entries):
            if same_id(existing.id, entry.id):
                self._entries[index] = entry
                replaced = True
        return replaced

    def remove(self, entry_id: Any) -> bool:
        """
        Drop the entry with the given id, keeping the others in order.

        Returns:
            True if an entry was removed.
        """
        before = len(self._entries)
        self._entries = [e for e in self._entries if not same_id(e.id, entry_id)]
        return len(self._entries) != before

    def set_filter(self, tag: Optional[str]) -> None:
        """Select a tag to filter by; empty or None clears the filter."""
        self.active_tag = tag or None

    # =========================================================================
    # Derived views
    # =========================================================================

    def get(self, entry_id: Any) -> Optional[Entry]:
        """Look up an entry by id."""
        for entry in self._entries:
            if same_id(entry.id, entry_id):
                return entry
        return None

    def all_tags(self) -> List[str]:
        """Distinct tags across all entries, ignoring the filter, sorted."""
        return sorted({tag for entry in self._entries for tag in (entry.tags or [])})

    def filtered(self) -> List[Entry]:
        """Entries carrying the active tag, or all entries when no filter is set."""
        if not self.active_tag:
            return list(self._entries)
        return [e for e in self._entries if self.active_tag in (e.tags or [])]

    def count_today(self, key: str) -> int:
        """Number of entries dated on the given day key."""
        return count_today(self._entries, key)

    def __repr__(self) -> str:
        return f"<FeedState entries={len(self._entries)} active_tag={self.active_tag!r}>"
