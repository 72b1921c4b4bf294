"""
Entry repository for Noospace.

Thin wrapper over an EntryStore that speaks in Entry objects:

    list_all → insert → increment_stars → delete_by_id

Every failure is logged and raised as StoreError. Nothing is retried;
the only consumer is an interactive UI where a person can try again.
"""

import logging
from typing import Any, List

from noospace.models.entry import Entry
from noospace.storage.base import EntryStore, Row, StoreError

logger = logging.getLogger(__name__)


class EntryRepository:
    """
    Entry-level operations against a remote entry store.

    Usage:
        repo = EntryRepository(SupabaseEntryStore())
        entries = repo.list_all()
        saved = repo.insert(Entry(text="hello"))
        saved = repo.increment_stars(saved)
        repo.delete_by_id(saved.id)
    """

    def __init__(self, store: EntryStore):
        self.store = store

    def _rows_to_entries(self, operation: str, rows: List[Row]) -> List[Entry]:
        try:
            return [Entry.from_row(row) for row in rows]
        except (ValueError, TypeError, AttributeError) as e:
            logger.error("%s returned a malformed row: %s", operation, e)
            raise StoreError(operation, f"malformed row: {e}", cause=e) from e

    def list_all(self) -> List[Entry]:
        """
        Fetch every entry ordered by ascending date.

        Raises:
            StoreError: On any transport or query failure.
        """
        try:
            rows = self.store.select_all(order_by="date", ascending=True)
        except StoreError as e:
            logger.error("Fetch error: %s", e)
            raise

        entries = self._rows_to_entries("select", rows)
        logger.debug("Loaded %d entries from %s", len(entries), self.store.name)
        return entries

    def insert(self, entry: Entry) -> Entry:
        """
        Persist a new entry.

        Returns:
            The entry as echoed back by the store, with its assigned id.

        Raises:
            StoreError: On failure, or when the store echoes nothing back.
        """
        try:
            rows = self.store.insert(entry.to_row())
        except StoreError as e:
            logger.error("Insert error: %s", e)
            raise

        if not rows:
            error = StoreError("insert", "store returned no row")
            logger.error("Insert error: %s", error)
            raise error

        saved = self._rows_to_entries("insert", rows[:1])[0]
        logger.info("Inscribed entry %s", saved.id)
        return saved

    def increment_stars(self, entry: Entry) -> Entry:
        """
        Write entry.stars + 1 for the entry's id.

        This is a read-then-write from the caller's snapshot: the store has
        no atomic increment, so two clients starring the same snapshot both
        write the same value and one star is lost.

        Raises:
            StoreError: When the id is unknown or the transport fails.
        """
        try:
            rows = self.store.update({"stars": entry.stars + 1}, entry.id)
        except StoreError as e:
            logger.error("Star error: %s", e)
            raise

        if not rows:
            error = StoreError("update", f"no entry with id {entry.id!r}")
            logger.error("Star error: %s", error)
            raise error

        return self._rows_to_entries("update", rows[:1])[0]

    def delete_by_id(self, entry_id: Any) -> None:
        """
        Delete the entry with the given id.

        Raises:
            StoreError: On failure.
        """
        try:
            self.store.delete(entry_id)
        except StoreError as e:
            logger.error("Delete error: %s", e)
            raise
        logger.info("Deleted entry %s", entry_id)

    def __repr__(self) -> str:
        return f"<EntryRepository store={self.store.name!r}>"
