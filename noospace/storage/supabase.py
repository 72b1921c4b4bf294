"""
Supabase storage backend for Noospace.

Implements the EntryStore interface against a Supabase project's
auto-generated REST API (PostgREST). Uses plain HTTP via requests.

PostgREST Documentation: https://postgrest.org/en/stable/references/api.html

=============================================================================
TABLE SCHEMA
=============================================================================

| Column  | Type          | Description                               |
|---------|---------------|-------------------------------------------|
| id      | bigint / uuid | Primary key, assigned by the database     |
| text    | text          | The inscription (1..240 chars)            |
| symbol  | text          | One or two characters                     |
| tags    | text[]        | Lowercase tags                            |
| wallet  | text null     | Cosmetic client token                     |
| date    | timestamptz   | Creation time                             |
| stars   | integer       | Star counter, default 0                   |

=============================================================================
"""

import copy
import itertools
import logging
from typing import Any, Dict, List

import requests

from noospace.config import (
    SUPABASE_URL,
    SUPABASE_ANON_KEY,
    ENTRIES_TABLE,
    REQUEST_TIMEOUT,
)
from noospace.models.entry import same_id
from noospace.storage.base import EntryStore, Row, StoreError

logger = logging.getLogger(__name__)


class SupabaseEntryStore(EntryStore):
    """
    Supabase-backed entry store.

    Every call is a single HTTP request; there is no retry and no
    rate limiting. Any transport error, non-2xx response or undecodable
    body is raised as StoreError.

    Configuration is pulled from environment variables via noospace.config:
    - SUPABASE_URL: project base URL
    - SUPABASE_ANON_KEY: access token
    - ENTRIES_TABLE: table name
    """

    REST_PATH = "rest/v1"

    def __init__(
        self,
        url: str = None,
        api_key: str = None,
        table_name: str = None,
        timeout: int = None,
    ):
        """
        Initialize SupabaseEntryStore.

        Args:
            url: Project base URL. Defaults to config.SUPABASE_URL.
            api_key: Access token. Defaults to config.SUPABASE_ANON_KEY.
            table_name: Table name. Defaults to config.ENTRIES_TABLE.
            timeout: HTTP timeout in seconds. Defaults to config.REQUEST_TIMEOUT.
        """
        # Use provided values, or fall back to config if None (not empty string)
        self.url = url if url is not None else SUPABASE_URL
        self.api_key = api_key if api_key is not None else SUPABASE_ANON_KEY
        self.table_name = table_name if table_name is not None else ENTRIES_TABLE
        self.timeout = timeout if timeout is not None else REQUEST_TIMEOUT

    @property
    def name(self) -> str:
        return "supabase"

    @property
    def _table_url(self) -> str:
        """Construct the REST URL for the entries table."""
        return f"{self.url.rstrip('/')}/{self.REST_PATH}/{self.table_name}"

    @property
    def _headers(self) -> Dict[str, str]:
        """Construct headers for API requests."""
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }

    def _validate_config(self, operation: str) -> None:
        """Raise StoreError if the store cannot be reached with the current settings."""
        if not self.url:
            raise StoreError(operation, "SUPABASE_URL is not configured")
        if not self.api_key:
            raise StoreError(operation, "SUPABASE_ANON_KEY is not configured")
        if not self.table_name:
            raise StoreError(operation, "ENTRIES_TABLE is not configured")

    def _request(self, operation: str, method: str, **kwargs) -> List[Row]:
        """
        Issue one request and decode the returned rows.

        Args:
            operation: Name used in errors and logs.
            method: HTTP method name for requests.request.

        Returns:
            List of row dicts (empty for an empty body).
        """
        self._validate_config(operation)

        try:
            response = requests.request(
                method,
                self._table_url,
                headers=self._headers,
                timeout=self.timeout,
                **kwargs,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise StoreError(operation, str(e), cause=e) from e

        if not response.content:
            return []

        try:
            data = response.json()
        except ValueError as e:
            raise StoreError(operation, "response body is not JSON", cause=e) from e

        if isinstance(data, dict):
            return [data]
        if not isinstance(data, list):
            raise StoreError(operation, f"unexpected response payload: {type(data).__name__}")
        return data

    # =========================================================================
    # EntryStore Interface Implementation
    # =========================================================================

    def select_all(self, order_by: str = "date", ascending: bool = True) -> List[Row]:
        direction = "asc" if ascending else "desc"
        params = {"select": "*", "order": f"{order_by}.{direction}"}
        rows = self._request("select", "GET", params=params)
        logger.debug("Fetched %d rows from %s", len(rows), self.table_name)
        return rows

    def insert(self, row: Row) -> List[Row]:
        return self._request("insert", "POST", json=[row])

    def update(self, fields: Row, entry_id: Any) -> List[Row]:
        params = {"id": f"eq.{entry_id}"}
        return self._request("update", "PATCH", params=params, json=fields)

    def delete(self, entry_id: Any) -> List[Row]:
        params = {"id": f"eq.{entry_id}"}
        return self._request("delete", "DELETE", params=params)


class MockSupabaseStore(EntryStore):
    """
    In-memory mock store for testing and development.

    Use this when Supabase is not configured or for testing.
    Ids are assigned from an increasing integer counter. Data is
    stored in memory and lost when the process ends.
    """

    def __init__(self, rows: List[Row] = None):
        self._rows: List[Row] = []
        self._ids = itertools.count(1)
        for row in rows or []:
            self.insert(row)

    @property
    def name(self) -> str:
        return "mock"

    def select_all(self, order_by: str = "date", ascending: bool = True) -> List[Row]:
        rows = sorted(self._rows, key=lambda r: r.get(order_by) or "", reverse=not ascending)
        return copy.deepcopy(rows)

    def insert(self, row: Row) -> List[Row]:
        stored = copy.deepcopy(row)
        if stored.get("id") is None:
            stored["id"] = next(self._ids)
        stored.setdefault("stars", 0)
        self._rows.append(stored)
        return [copy.deepcopy(stored)]

    def update(self, fields: Row, entry_id: Any) -> List[Row]:
        updated = []
        for row in self._rows:
            if same_id(row["id"], entry_id):
                row.update(copy.deepcopy(fields))
                updated.append(copy.deepcopy(row))
        return updated

    def delete(self, entry_id: Any) -> List[Row]:
        deleted = [r for r in self._rows if same_id(r["id"], entry_id)]
        self._rows = [r for r in self._rows if not same_id(r["id"], entry_id)]
        return deleted

    def clear(self) -> None:
        """Clear all rows (for testing)."""
        self._rows.clear()

    def count(self) -> int:
        """Return number of stored rows (for testing)."""
        return len(self._rows)
