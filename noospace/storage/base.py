"""
Base storage abstraction for Noospace.

Defines the table-shaped interface a hosted entry store must offer.
The rest of the package depends only on this shape, so the hosted
backend can be swapped for another REST table or an in-memory fake.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


Row = Dict[str, Any]


class StoreError(Exception):
    """
    Raised for any failure talking to the entry store.

    Network failures, authorization failures and unknown ids are not
    distinguished; the operation name and underlying cause are kept for logs.
    """

    def __init__(self, operation: str, message: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.message = message
        self.cause = cause
        super().__init__(f"{operation} failed: {message}")


class EntryStore(ABC):
    """
    Abstract base class for all entry store backends.

    Implementations must provide:
    - an ordered select of every row
    - insert, returning the inserted rows as the store saw them
    - update filtered by id equality, returning the updated rows
    - delete filtered by id equality

    Implementations raise StoreError on failure and never return
    partial results.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the name of this storage backend.

        Used for logging and debugging.
        """
        pass

    @abstractmethod
    def select_all(self, order_by: str = "date", ascending: bool = True) -> List[Row]:
        """
        Return every row ordered by a column.

        Args:
            order_by: Column to sort on.
            ascending: Sort direction.

        Returns:
            List of row dicts.
        """
        pass

    @abstractmethod
    def insert(self, row: Row) -> List[Row]:
        """
        Insert one row.

        Args:
            row: Column values, without an id.

        Returns:
            The inserted row(s), including the store-assigned id.
        """
        pass

    @abstractmethod
    def update(self, fields: Row, entry_id: Any) -> List[Row]:
        """
        Update the row whose id equals entry_id.

        Args:
            fields: Columns to change.
            entry_id: Row identifier.

        Returns:
            The updated row(s); empty when no row matched.
        """
        pass

    @abstractmethod
    def delete(self, entry_id: Any) -> List[Row]:
        """
        Delete the row whose id equals entry_id.

        Returns:
            The deleted row(s) when the backend reports them, else an empty list.
        """
        pass

    def __str__(self) -> str:
        return f"EntryStore({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
