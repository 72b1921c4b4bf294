"""
Storage module.

Handles persistence and retrieval of entries via Supabase or an in-memory fake.
"""

from noospace.storage.base import EntryStore, StoreError, Row
from noospace.storage.supabase import SupabaseEntryStore, MockSupabaseStore

__all__ = [
    "EntryStore",
    "StoreError",
    "Row",
    "SupabaseEntryStore",
    "MockSupabaseStore",
]
